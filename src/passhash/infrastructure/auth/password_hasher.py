"""Password hashing service using Argon2id.

Generates a fresh salt per password, derives a key with the Argon2id
primitive from argon2-cffi, and stores everything needed for verification
in the encoded hash. Verification always re-derives with the parameters
embedded in the stored hash, so hashes made under older defaults keep
working after the defaults change.
"""

import hmac
from functools import lru_cache
from typing import Protocol

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from passhash.core.config import get_settings
from passhash.core.exceptions import InvalidParameterError, PasswordHashError
from passhash.core.logging import get_logger
from passhash.domain.entities.argon_parameters import ArgonParameters
from passhash.domain.services.salt_generator import SaltGenerator, default_salt_generator
from passhash.infrastructure.auth.hash_codec import ArgonHashCodec

logger = get_logger(__name__)


class PasswordHashService(Protocol):
    """The capability offered to authentication collaborators."""

    def hash(self, password: str) -> str: ...

    def verify(self, password: str, encoded_hash: str) -> bool: ...


def _password_bytes(password: str | bytes) -> bytes:
    if isinstance(password, bytes):
        return password
    return password.encode("utf-8")


def derive_key(password: str | bytes, salt: bytes, parameters: ArgonParameters) -> bytes:
    """Run the Argon2id derivation.

    Args:
        password: The plaintext password.
        salt: The salt bytes.
        parameters: Cost parameters and output length.

    Returns:
        The derived key of ``parameters.key_length`` bytes.

    Raises:
        InvalidParameterError: If the primitive rejects the parameters
            (e.g. memory below 8 KiB per lane or a salt under 8 bytes).
    """
    try:
        return hash_secret_raw(
            secret=_password_bytes(password),
            salt=salt,
            time_cost=parameters.time_cost,
            memory_cost=parameters.memory_cost,
            parallelism=parameters.parallelism,
            hash_len=parameters.key_length,
            type=Type.ID,
            version=ArgonHashCodec.VERSION,
        )
    except HashingError as e:
        raise InvalidParameterError(f"Argon2id rejected the parameters: {e}") from e


class ArgonPasswordHasher:
    """Hash and verify passwords with a fixed default parameter set.

    The hasher holds no mutable state; one instance can be shared across
    threads. Differently configured instances can coexist, e.g. while
    migrating to stronger parameters.
    """

    def __init__(
        self,
        parameters: ArgonParameters,
        salt_generator: SaltGenerator | None = None,
    ) -> None:
        self._parameters = parameters
        self._salt_generator = salt_generator or default_salt_generator

    @property
    def parameters(self) -> ArgonParameters:
        return self._parameters

    def hash(self, password: str | bytes) -> str:
        """Hash a password with the default parameters.

        Args:
            password: The plaintext password to hash.

        Returns:
            The encoded hash string.

        Raises:
            EntropySourceError: If no salt could be generated.
            InvalidParameterError: If the parameters are unusable.

        Example:
            >>> hasher.hash("correct-password").startswith("$argon2id$v=19$")
            True
        """
        params = self._parameters
        salt = self._salt_generator.generate(params.salt_length)
        key = derive_key(password, salt, params)
        encoded = ArgonHashCodec.encode(params, salt, key)
        logger.debug("Password hashed", **params.as_dict())
        return encoded

    def verify(self, password: str | bytes, encoded_hash: str) -> bool:
        """Verify a password against an encoded hash.

        Re-derives the key using the parameters and salt embedded in the
        hash and compares in constant time.

        Args:
            password: The plaintext password to verify.
            encoded_hash: The stored hash string.

        Returns:
            True if the password matches, False otherwise.

        Raises:
            MalformedHashError: If the stored hash cannot be parsed.
            IncompatibleVersionError: If the stored hash uses another version.
            InvalidParameterError: If the embedded parameters are rejected
                by the derivation function.
        """
        try:
            decoded = ArgonHashCodec.decode(encoded_hash)
        except PasswordHashError as e:
            logger.warning("Stored hash rejected", error_kind=e.kind)
            raise

        candidate = derive_key(password, decoded.salt, decoded.parameters)
        # compare_digest returns False on length mismatch without leaking content
        matched = hmac.compare_digest(candidate, decoded.key)
        logger.debug("Password verified", matched=matched, **decoded.parameters.as_dict())
        return matched

    def needs_rehash(self, encoded_hash: str) -> bool:
        """Check whether a hash was made with parameters other than the defaults.

        Call this after a successful verification; if True, hash the
        password again and store the new hash.

        Raises:
            MalformedHashError: If the stored hash cannot be parsed.
            IncompatibleVersionError: If the stored hash uses another version.
        """
        decoded = ArgonHashCodec.decode(encoded_hash)
        outdated = decoded.parameters != self._parameters
        if outdated:
            logger.debug(
                "Hash parameters differ from defaults",
                stored=decoded.parameters.as_dict(),
                current=self._parameters.as_dict(),
            )
        return outdated


@lru_cache
def get_password_hasher() -> ArgonPasswordHasher:
    """Get the hasher configured from application settings.

    Settings are immutable, so the hasher is built once and cached.
    """
    return ArgonPasswordHasher(ArgonParameters.from_settings(get_settings()))


def hash_password(password: str) -> str:
    """Hash a password using the configured Argon2id defaults.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> hashed.startswith("$argon2id$")
        True
    """
    return get_password_hasher().hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a hash.

    Example:
        >>> hashed = hash_password("SecureP@ss123!")
        >>> verify_password("SecureP@ss123!", hashed)
        True
        >>> verify_password("wrong", hashed)
        False
    """
    return get_password_hasher().verify(password, hashed)


def needs_rehash(hashed: str) -> bool:
    """Check if a password hash should be regenerated with current defaults."""
    return get_password_hasher().needs_rehash(hashed)
