"""Unit tests for the Argon2id hash codec."""

import base64
import re

import pytest

from passhash.core.exceptions import (
    IncompatibleVersionError,
    InvalidParameterError,
    MalformedHashError,
)
from passhash.domain.entities.argon_parameters import ArgonParameters
from passhash.infrastructure.auth.hash_codec import ArgonHashCodec, DecodedHash

SALT = bytes(range(16))
KEY = bytes(range(100, 132))


def b64(data: bytes) -> str:
    return base64.b64encode(data).rstrip(b"=").decode("ascii")


def build(version="v=19", params="m=65536,t=3,p=2", salt=None, key=None, algorithm="argon2id"):
    salt = b64(SALT) if salt is None else salt
    key = b64(KEY) if key is None else key
    return f"${algorithm}${version}${params}${salt}${key}"


@pytest.fixture
def params():
    return ArgonParameters(memory_cost=65536, time_cost=3, parallelism=2, salt_length=16, key_length=32)


class TestEncode:
    """Tests for ArgonHashCodec.encode."""

    def test_encode_canonical_form(self, params):
        encoded = ArgonHashCodec.encode(params, SALT, KEY)

        assert encoded == f"$argon2id$v=19$m=65536,t=3,p=2${b64(SALT)}${b64(KEY)}"
        assert "=" not in encoded.split("$", 4)[4]

    def test_encode_uses_supported_version(self, params):
        assert ArgonHashCodec.VERSION == 19
        assert "$v=19$" in ArgonHashCodec.encode(params, SALT, KEY)

    def test_encode_rejects_empty_salt(self, params):
        with pytest.raises(InvalidParameterError, match="Salt must not be empty"):
            ArgonHashCodec.encode(params, b"", KEY)

    def test_encode_rejects_empty_key(self, params):
        with pytest.raises(InvalidParameterError, match="Derived key must not be empty"):
            ArgonHashCodec.encode(params, SALT, b"")

    def test_encode_rejects_length_disagreement(self, params):
        """Salt and key lengths must match what the parameters declare."""
        with pytest.raises(InvalidParameterError, match="Salt is 8 bytes"):
            ArgonHashCodec.encode(params, SALT[:8], KEY)
        with pytest.raises(InvalidParameterError, match="Derived key is 16 bytes"):
            ArgonHashCodec.encode(params, SALT, KEY[:16])


class TestRoundTrip:
    """decode(encode(...)) returns the original parts."""

    @pytest.mark.parametrize(
        "memory_cost,time_cost,parallelism,salt_length,key_length",
        [
            (8, 1, 1, 1, 1),
            (19456, 2, 1, 2, 3),
            (65536, 3, 4, 16, 32),
            (2**32 - 1, 2**32 - 1, 2**24 - 1, 33, 64),
        ],
    )
    def test_round_trip(self, memory_cost, time_cost, parallelism, salt_length, key_length):
        params = ArgonParameters(memory_cost, time_cost, parallelism, salt_length, key_length)
        salt = bytes((i * 7) % 256 for i in range(salt_length))
        key = bytes((i * 13 + 5) % 256 for i in range(key_length))

        decoded = ArgonHashCodec.decode(ArgonHashCodec.encode(params, salt, key))

        assert decoded == DecodedHash(parameters=params, salt=salt, key=key)

    def test_decode_backfills_lengths(self):
        """Salt and key lengths come from the decoded bytes."""
        decoded = ArgonHashCodec.decode("$argon2id$v=19$m=65536,t=3,p=2$c2FsdA$aGFzaA")

        assert decoded.salt == b"salt"
        assert decoded.key == b"hash"
        assert decoded.parameters == ArgonParameters(65536, 3, 2, 4, 4)

    def test_decode_does_not_enforce_policy(self):
        """Unusually large costs are a policy question, not a format error."""
        decoded = ArgonHashCodec.decode(build(params="m=4294967295,t=4294967295,p=16777215"))

        assert decoded.parameters.memory_cost == 2**32 - 1
        assert decoded.parameters.parallelism == 2**24 - 1

    def test_repr_hides_credential_material(self):
        decoded = ArgonHashCodec.decode(build())

        assert b64(SALT) not in repr(decoded)
        assert repr(KEY) not in repr(decoded)
        assert "memory_cost=65536" in repr(decoded)


class TestDecodeStructure:
    """Field count and framing failures."""

    @pytest.mark.parametrize(
        "encoded",
        [
            "",
            "argon2id",
            "$argon2id$v=19$m=65536,t=3,p=2$c2FsdA",
            "$argon2id$v=19$m=65536,t=3,p=2$c2FsdA$aGFzaA$extra",
            "$$argon2id$v=19$m=65536,t=3,p=2$c2FsdA$aGFzaA",
        ],
    )
    def test_wrong_field_count(self, encoded):
        with pytest.raises(MalformedHashError, match="expected 6 fields"):
            ArgonHashCodec.decode(encoded)

    def test_missing_leading_delimiter(self):
        with pytest.raises(MalformedHashError, match="leading delimiter"):
            ArgonHashCodec.decode("x$argon2id$v=19$m=65536,t=3,p=2$c2FsdA$aGFzaA")

    @pytest.mark.parametrize("algorithm", ["argon2i", "argon2d", "ARGON2ID", ""])
    def test_other_algorithms_rejected(self, algorithm):
        with pytest.raises(MalformedHashError, match="unsupported algorithm"):
            ArgonHashCodec.decode(build(algorithm=algorithm))

    @pytest.mark.parametrize("value", [None, 42, b"$argon2id$v=19$m=8,t=1,p=1$c2FsdA$aGFzaA"])
    def test_non_string_input(self, value):
        with pytest.raises(MalformedHashError):
            ArgonHashCodec.decode(value)

    def test_error_message_does_not_contain_hash(self):
        encoded = build(key="not base64!")

        with pytest.raises(MalformedHashError) as exc_info:
            ArgonHashCodec.decode(encoded)

        assert encoded not in str(exc_info.value)
        assert exc_info.value.kind == "malformed_hash"


class TestDecodeVersion:
    """Version field failures."""

    def test_unsupported_version(self):
        with pytest.raises(IncompatibleVersionError) as exc_info:
            ArgonHashCodec.decode("$argon2id$v=99$m=65536,t=3,p=2$c2FsdA$aGFzaA")

        assert exc_info.value.found == 99
        assert exc_info.value.supported == 19
        assert exc_info.value.kind == "incompatible_version"

    def test_older_version_is_incompatible(self):
        with pytest.raises(IncompatibleVersionError):
            ArgonHashCodec.decode(build(version="v=16"))

    def test_version_checked_before_parameters(self):
        with pytest.raises(IncompatibleVersionError):
            ArgonHashCodec.decode(build(version="v=20", params="garbage"))

    @pytest.mark.parametrize("version", ["v=abc", "19", "v=", "v=-19", "v=19.0", "version=19", "v=1e2"])
    def test_unparseable_version(self, version):
        with pytest.raises(MalformedHashError, match="Invalid version field"):
            ArgonHashCodec.decode(build(version=version))


class TestDecodeParameters:
    """Parameter field failures."""

    @pytest.mark.parametrize(
        "params",
        [
            "m=abc,t=3,p=2",
            "m=65536,t=3",
            "m=65536,t=3,p=",
            "t=3,m=65536,p=2",
            "m=65536,t=3,p=2,x=1",
            "m=65536;t=3;p=2",
            "m=-1,t=3,p=2",
            "m=65536, t=3, p=2",
            "m=12345678901,t=3,p=2",
            "",
        ],
    )
    def test_malformed_parameter_field(self, params):
        with pytest.raises(MalformedHashError, match="Invalid parameter field"):
            ArgonHashCodec.decode(build(params=params))

    @pytest.mark.parametrize(
        "params",
        ["m=0,t=3,p=2", "m=65536,t=0,p=2", "m=65536,t=3,p=0", "m=4294967296,t=3,p=2", "m=8,t=1,p=16777216"],
    )
    def test_out_of_range_parameters(self, params):
        with pytest.raises(MalformedHashError, match="Invalid parameter field"):
            ArgonHashCodec.decode(build(params=params))


class TestDecodeBase64:
    """Strict unpadded base64 for the salt and key fields."""

    @pytest.mark.parametrize(
        "field",
        [
            "",  # must decode to at least one byte
            "c2FsdA==",  # padding
            "c2FsdA=",
            "c2F*dA",  # outside the alphabet
            "c2F-dA",  # url-safe alphabet
            "c2F_dA",
            "c2Fs dA",
            "c",  # impossible length
            "c2FsdB",  # non-zero trailing bits
        ],
    )
    def test_invalid_salt(self, field):
        with pytest.raises(MalformedHashError, match="salt field"):
            ArgonHashCodec.decode(build(salt=field))

    @pytest.mark.parametrize("field", ["", "aGFzaA==", "aGFz!A", "aGFzaB", "aGFza"])
    def test_invalid_key(self, field):
        with pytest.raises(MalformedHashError, match="key field"):
            ArgonHashCodec.decode(build(key=field))

    def test_canonical_format_regex(self, params):
        encoded = ArgonHashCodec.encode(params, SALT, KEY)

        assert re.fullmatch(
            r"\$argon2id\$v=19\$m=\d+,t=\d+,p=\d+\$[A-Za-z0-9+/]+\$[A-Za-z0-9+/]+",
            encoded,
        )
