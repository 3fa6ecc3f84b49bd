"""Exceptions raised by password hashing and hash decoding.

Every failure belongs to a closed set of kinds. Callers can branch on the
exception class or on its ``kind`` tag without matching message strings.
"""


class PasswordHashError(Exception):
    """Base class for all password hashing errors."""

    kind: str = "password_hash"


class EntropySourceError(PasswordHashError):
    """Raised when the OS entropy source cannot supply salt bytes."""

    kind = "entropy_source"


class MalformedHashError(PasswordHashError):
    """Raised when an encoded hash is structurally invalid.

    The offending string is never included in the message, since stored
    hashes are credentials.
    """

    kind = "malformed_hash"


class IncompatibleVersionError(PasswordHashError):
    """Raised when an encoded hash declares an unsupported Argon2 version."""

    kind = "incompatible_version"

    def __init__(self, found: int, supported: int):
        self.found = found
        self.supported = supported
        super().__init__(
            f"Incompatible Argon2 version {found} (supported: {supported})"
        )


class InvalidParameterError(PasswordHashError):
    """Raised when hashing parameters, salts or keys are unusable."""

    kind = "invalid_parameter"
