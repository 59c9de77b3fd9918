"""Library configuration using Pydantic Settings.

Configuration is read from ``IAMPOLICY_``-prefixed environment variables.

Optionally, you may point `ENV_FILE` at a local env file (for development).
Nothing here is required: every setting has a default, so importing the
library never fails for lack of configuration.
"""

import hashlib
import os
from enum import Enum

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppEnvironment(str, Enum):
    """Application environment values."""

    LOCAL = "local"
    TEST = "test"
    PROD = "prod"


class Settings(BaseSettings):
    """
    Library settings with type validation.

    Configuration is loaded from environment variables, with support
    for an explicit env file in development.
    """

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE") or None, env_prefix="IAMPOLICY_", extra="ignore"
    )

    # Application
    app_env: AppEnvironment = AppEnvironment.LOCAL
    app_name: str = "iampolicy"

    # Logging
    log_level: str = "INFO"
    structured_logs: bool = True

    # Metrics (Prometheus counters in a private registry)
    metrics_enabled: bool = True

    # Digest used by compare.fingerprint()
    fingerprint_algorithm: str = "sha256"

    @field_validator("app_env", mode="before")
    @classmethod
    def validate_app_env(cls, v: str | AppEnvironment) -> AppEnvironment:
        """Validate and parse app_env to AppEnvironment enum."""
        if isinstance(v, AppEnvironment):
            return v
        try:
            return AppEnvironment(v.lower())
        except ValueError:
            raise ValueError(
                f"app_env must be one of {[e.value for e in AppEnvironment]}, got '{v}'"
            )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize log level and reject unknown names."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"log_level must be a standard logging level name, got '{v}'")
        return level

    @field_validator("fingerprint_algorithm")
    @classmethod
    def validate_fingerprint_algorithm(cls, v: str) -> str:
        """Only digests available on every platform are allowed."""
        algorithm = v.strip().lower()
        # shake_* digests need an explicit length
        allowed = sorted(a for a in hashlib.algorithms_guaranteed if not a.startswith("shake_"))
        if algorithm not in allowed:
            raise ValueError(f"fingerprint_algorithm must be one of {allowed}, got '{v}'")
        return algorithm


settings = Settings()
