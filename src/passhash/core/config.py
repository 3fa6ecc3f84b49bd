"""Configuration management for passhash.

This module uses Pydantic Settings to load and validate the default Argon2id
parameters from environment variables and .env files. Configuration is loaded
once and is immutable afterwards.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Smallest salt accepted by the Argon2 reference implementation
MIN_SALT_LENGTH = 8


def _default_parallelism() -> int:
    return max(os.cpu_count() or 1, 1)


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables (``PASSHASH_`` prefix)
    and .env files. All values are validated at load time.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="PASSHASH_",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    environment: Literal["development", "production", "testing"] = "production"

    # Argon2id defaults used for new hashes
    memory_cost: int = Field(default=64 * 1024, gt=0, description="Memory cost in KiB")
    time_cost: int = Field(default=3, gt=0, description="Number of iterations")
    parallelism: int = Field(
        default_factory=_default_parallelism, gt=0, description="Number of lanes"
    )
    salt_length: int = Field(default=16, gt=0, description="Salt length in bytes")
    key_length: int = Field(default=32, gt=0, description="Derived key length in bytes")

    # Upper bound on concurrent derivations in the async hasher
    max_concurrency: int = Field(default=4, gt=0)

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @model_validator(mode="after")
    def validate_salt_length(self) -> "Settings":
        """Reject salts shorter than the derivation function accepts."""
        if self.salt_length < MIN_SALT_LENGTH:
            raise ValueError(
                f"salt_length must be at least {MIN_SALT_LENGTH} bytes, "
                f"got {self.salt_length}"
            )
        return self

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()
