"""Argon2id parameter set entity.

A parameter set fixes the cost of one derivation: memory, iterations,
lanes, and the salt and key lengths. Instances are immutable; verification
always uses the set embedded in the stored hash rather than the defaults.
"""

from dataclasses import dataclass, fields, replace
from typing import Any

from passhash.core.exceptions import InvalidParameterError

UINT32_MAX = 2**32 - 1
# Argon2 caps the number of lanes at 2^24 - 1
MAX_PARALLELISM = 2**24 - 1


@dataclass(frozen=True)
class ArgonParameters:
    """Tunable cost parameters of the Argon2id derivation.

    Attributes:
        memory_cost: Working-set size in kibibytes.
        time_cost: Number of passes over the working set.
        parallelism: Number of independent lanes.
        salt_length: Salt length in bytes.
        key_length: Derived key length in bytes.
    """

    memory_cost: int
    time_cost: int
    parallelism: int
    salt_length: int
    key_length: int

    def __post_init__(self) -> None:
        """Validate that every parameter is a positive, representable integer."""
        for f in fields(self):
            value = getattr(self, f.name)
            # bool is an int subclass but never a meaningful cost
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError(f"{f.name} must be an integer")
            if value <= 0:
                raise InvalidParameterError(f"{f.name} must be positive, got {value}")
            limit = MAX_PARALLELISM if f.name == "parallelism" else UINT32_MAX
            if value > limit:
                raise InvalidParameterError(f"{f.name} must be at most {limit}, got {value}")

    def with_overrides(self, **changes: int) -> "ArgonParameters":
        """Return a new parameter set with some fields replaced."""
        return replace(self, **changes)

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_settings(cls, settings: Any) -> "ArgonParameters":
        """Build the default parameter set from application settings.

        Args:
            settings: Object exposing the five parameter attributes.

        Returns:
            A validated ArgonParameters instance.
        """
        return cls(
            memory_cost=settings.memory_cost,
            time_cost=settings.time_cost,
            parallelism=settings.parallelism,
            salt_length=settings.salt_length,
            key_length=settings.key_length,
        )
