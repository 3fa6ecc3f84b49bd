"""Pytest configuration for all tests."""

import logging

import pytest
import structlog

from passhash.core.config import get_settings
from passhash.core.logging import LIBRARY_LOGGER
from passhash.domain.entities.argon_parameters import ArgonParameters
from passhash.infrastructure.auth.password_hasher import (
    ArgonPasswordHasher,
    get_password_hasher,
)

# Cheapest parameters Argon2 accepts, to keep the suite fast
FAST_ENV = {
    "PASSHASH_MEMORY_COST": "8",
    "PASSHASH_TIME_COST": "1",
    "PASSHASH_PARALLELISM": "1",
    "PASSHASH_SALT_LENGTH": "16",
    "PASSHASH_KEY_LENGTH": "32",
    "PASSHASH_LOG_LEVEL": "INFO",
}


@pytest.fixture(autouse=True)
def _reset_cached_settings():
    """Drop cached settings and hashers so each test sees its own environment."""
    get_settings.cache_clear()
    get_password_hasher.cache_clear()
    yield
    get_settings.cache_clear()
    get_password_hasher.cache_clear()


@pytest.fixture
def fast_env(monkeypatch):
    """Configure cheap default parameters through the environment."""
    for name, value in FAST_ENV.items():
        monkeypatch.setenv(name, value)
    return FAST_ENV


@pytest.fixture
def fast_parameters() -> ArgonParameters:
    return ArgonParameters(
        memory_cost=8,
        time_cost=1,
        parallelism=1,
        salt_length=16,
        key_length=32,
    )


@pytest.fixture
def hasher(fast_parameters) -> ArgonPasswordHasher:
    return ArgonPasswordHasher(fast_parameters)


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo any logging configuration a test applied."""
    library_logger = logging.getLogger(LIBRARY_LOGGER)
    handlers = library_logger.handlers[:]
    level = library_logger.level
    propagate = library_logger.propagate
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    root_level = root.level
    yield
    structlog.reset_defaults()
    # Drop stream handlers left on the root logger by logging.basicConfig
    for handler in root.handlers[:]:
        if handler not in root_handlers and type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
    root.setLevel(root_level)
    library_logger.handlers = handlers
    library_logger.setLevel(level)
    library_logger.propagate = propagate
