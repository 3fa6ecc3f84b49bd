"""passhash - Argon2id password hashing and verification.

Produces self-describing encoded hashes that embed the algorithm
parameters, salt and derived key, and verifies passwords against them.
"""

__version__ = "0.1.0"

from passhash.core.exceptions import (
    EntropySourceError,
    IncompatibleVersionError,
    InvalidParameterError,
    MalformedHashError,
    PasswordHashError,
)
from passhash.domain.entities.argon_parameters import ArgonParameters
from passhash.infrastructure.auth import (
    ArgonHashCodec,
    ArgonPasswordHasher,
    BoundedPasswordHasher,
    DecodedHash,
    PasswordHashService,
    hash_password,
    needs_rehash,
    verify_password,
)

__all__ = [
    "__version__",
    "ArgonHashCodec",
    "ArgonParameters",
    "ArgonPasswordHasher",
    "BoundedPasswordHasher",
    "DecodedHash",
    "EntropySourceError",
    "IncompatibleVersionError",
    "InvalidParameterError",
    "MalformedHashError",
    "PasswordHashError",
    "PasswordHashService",
    "hash_password",
    "needs_rehash",
    "verify_password",
]
