"""Password hashing infrastructure.

This module provides the Argon2id hash codec, the password hasher and
its bounded async wrapper.
"""

from passhash.infrastructure.auth.bounded_hasher import BoundedPasswordHasher
from passhash.infrastructure.auth.hash_codec import ArgonHashCodec, DecodedHash
from passhash.infrastructure.auth.password_hasher import (
    ArgonPasswordHasher,
    PasswordHashService,
    derive_key,
    get_password_hasher,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "ArgonHashCodec",
    "ArgonPasswordHasher",
    "BoundedPasswordHasher",
    "DecodedHash",
    "PasswordHashService",
    "derive_key",
    "get_password_hasher",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
