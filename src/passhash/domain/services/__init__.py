"""Domain services for passhash.

Services here have no dependency on the derivation library.
"""

from passhash.domain.services.salt_generator import (
    EntropySource,
    SaltGenerator,
    default_salt_generator,
)

__all__ = [
    "EntropySource",
    "SaltGenerator",
    "default_salt_generator",
]
