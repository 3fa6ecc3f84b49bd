"""Codec for the PHC-style Argon2id encoded hash string.

Implements the canonical format:
    $argon2id$v=<version>$m=<memory>,t=<iterations>,p=<parallelism>$<salt>$<key>
Salt and key use the standard base64 alphabet without padding.
"""

import base64
import binascii
import re
from dataclasses import dataclass

from argon2.low_level import ARGON2_VERSION

from passhash.core.exceptions import (
    IncompatibleVersionError,
    InvalidParameterError,
    MalformedHashError,
)
from passhash.domain.entities.argon_parameters import ArgonParameters

# Digit counts are capped so that int() never sees unbounded input
VERSION_PATTERN = re.compile(r"v=([0-9]{1,10})")
PARAMS_PATTERN = re.compile(r"m=([0-9]{1,10}),t=([0-9]{1,10}),p=([0-9]{1,10})")
BASE64_PATTERN = re.compile(r"[A-Za-z0-9+/]+")


@dataclass(frozen=True)
class DecodedHash:
    """The constituent parts of an encoded hash."""

    parameters: ArgonParameters
    salt: bytes
    key: bytes

    def __repr__(self) -> str:
        # Salt and key are credential material
        return f"DecodedHash(parameters={self.parameters!r})"


class ArgonHashCodec:
    """Encode and decode Argon2id hash strings."""

    ALGORITHM = "argon2id"
    VERSION = ARGON2_VERSION
    DELIMITER = "$"
    FIELD_COUNT = 6

    @staticmethod
    def _b64_encode(data: bytes) -> str:
        """Encode bytes to standard base64 without padding."""
        return base64.b64encode(data).rstrip(b"=").decode("ascii")

    @classmethod
    def _b64_decode(cls, data: str, field_name: str) -> bytes:
        """Strictly decode unpadded standard base64.

        Rejects characters outside the alphabet, padding, impossible lengths
        and encodings with non-zero trailing bits.
        """
        if not BASE64_PATTERN.fullmatch(data) or len(data) % 4 == 1:
            raise MalformedHashError(f"Invalid base64 in {field_name} field")

        try:
            decoded = base64.b64decode(data + "=" * (-len(data) % 4), validate=True)
        except binascii.Error as e:
            raise MalformedHashError(f"Invalid base64 in {field_name} field") from e

        if cls._b64_encode(decoded) != data:
            raise MalformedHashError(f"Non-canonical base64 in {field_name} field")
        return decoded

    @classmethod
    def encode(cls, parameters: ArgonParameters, salt: bytes, key: bytes) -> str:
        """Encode a parameter set, salt and derived key into a hash string.

        Raises:
            InvalidParameterError: If salt or key is empty, or its length
                disagrees with the parameter set.
        """
        if not salt:
            raise InvalidParameterError("Salt must not be empty")
        if not key:
            raise InvalidParameterError("Derived key must not be empty")
        if len(salt) != parameters.salt_length:
            raise InvalidParameterError(
                f"Salt is {len(salt)} bytes, parameters require {parameters.salt_length}"
            )
        if len(key) != parameters.key_length:
            raise InvalidParameterError(
                f"Derived key is {len(key)} bytes, parameters require {parameters.key_length}"
            )

        return (
            f"${cls.ALGORITHM}"
            f"$v={cls.VERSION}"
            f"$m={parameters.memory_cost},t={parameters.time_cost},p={parameters.parallelism}"
            f"${cls._b64_encode(salt)}"
            f"${cls._b64_encode(key)}"
        )

    @classmethod
    def decode(cls, encoded: str) -> DecodedHash:
        """Decode and validate a hash string.

        Validates structure and version only. Unusually large or small cost
        parameters are returned as-is; judging them is a policy concern.

        Raises:
            MalformedHashError: On any structural or encoding failure.
            IncompatibleVersionError: If the version is not the supported one.
        """
        if not isinstance(encoded, str):
            raise MalformedHashError("Encoded hash must be a string")

        parts = encoded.split(cls.DELIMITER)
        if len(parts) != cls.FIELD_COUNT:
            raise MalformedHashError(
                f"Invalid hash format: expected {cls.FIELD_COUNT} fields, got {len(parts)}"
            )

        leading, algorithm, version_field, params_field, salt_field, key_field = parts
        if leading:
            raise MalformedHashError("Invalid hash format: missing leading delimiter")
        if algorithm != cls.ALGORITHM:
            raise MalformedHashError("Invalid hash format: unsupported algorithm")

        version_match = VERSION_PATTERN.fullmatch(version_field)
        if not version_match:
            raise MalformedHashError("Invalid version field")
        version = int(version_match.group(1))
        if version != cls.VERSION:
            raise IncompatibleVersionError(found=version, supported=cls.VERSION)

        params_match = PARAMS_PATTERN.fullmatch(params_field)
        if not params_match:
            raise MalformedHashError("Invalid parameter field")
        memory_cost, time_cost, parallelism = (int(g) for g in params_match.groups())

        salt = cls._b64_decode(salt_field, "salt")
        key = cls._b64_decode(key_field, "key")

        try:
            parameters = ArgonParameters(
                memory_cost=memory_cost,
                time_cost=time_cost,
                parallelism=parallelism,
                salt_length=len(salt),
                key_length=len(key),
            )
        except InvalidParameterError as e:
            raise MalformedHashError(f"Invalid parameter field: {e}") from e

        return DecodedHash(parameters=parameters, salt=salt, key=key)
