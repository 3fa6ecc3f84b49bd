"""Domain entities for passhash.

Entities are pure Python dataclasses with no dependency on the
derivation library.
"""

from passhash.domain.entities.argon_parameters import ArgonParameters

__all__ = ["ArgonParameters"]
