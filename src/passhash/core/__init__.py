"""Core passhash utilities.

This module exports configuration, logging and the error taxonomy.
"""

from passhash.core.config import Settings, get_settings
from passhash.core.exceptions import (
    EntropySourceError,
    IncompatibleVersionError,
    InvalidParameterError,
    MalformedHashError,
    PasswordHashError,
)
from passhash.core.logging import configure_logging, get_logger

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "PasswordHashError",
    "EntropySourceError",
    "MalformedHashError",
    "IncompatibleVersionError",
    "InvalidParameterError",
]
