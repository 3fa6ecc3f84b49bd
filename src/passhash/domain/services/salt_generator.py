"""Salt generator service.

Draws salts from the operating system's cryptographically secure random
source. A fresh salt is generated for every hash.
"""

import secrets
from typing import Callable

from passhash.core.exceptions import EntropySourceError, InvalidParameterError

EntropySource = Callable[[int], bytes]


class SaltGenerator:
    """Generator for random salts.

    The entropy source defaults to ``secrets.token_bytes``. It can be
    replaced for testing, but production code should never pass a
    general-purpose pseudo-random generator.
    """

    def __init__(self, source: EntropySource | None = None) -> None:
        self._source = source or secrets.token_bytes

    def generate(self, length: int) -> bytes:
        """Generate a salt of exactly ``length`` random bytes.

        Args:
            length: Number of bytes to generate.

        Returns:
            The random salt.

        Raises:
            InvalidParameterError: If length is not a positive integer.
            EntropySourceError: If the entropy source fails or returns
                fewer bytes than requested.
        """
        if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
            raise InvalidParameterError(f"Salt length must be a positive integer, got {length!r}")

        try:
            salt = self._source(length)
        except (OSError, NotImplementedError) as e:
            raise EntropySourceError("Entropy source could not supply salt bytes") from e

        if len(salt) != length:
            raise EntropySourceError(
                f"Entropy source returned {len(salt)} bytes, expected {length}"
            )
        return salt


default_salt_generator = SaltGenerator()
