"""Application configuration via pydantic-settings.

Values are loaded from environment variables (.env file). The rule tables
default to the WHO MEC catalog shipped with the package; point
CATALOG_PATH at a JSON document to replace them.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_STI_ADVISORY = (
    "None of the listed methods provide protection against sexually transmitted "
    "infections (STIs). If you think you are at increased risk of an STI, use a "
    "barrier method, either alone or together with your chosen contraceptive."
)


class Settings(BaseSettings):
    """Root settings.

    Usage:
        settings = Settings()
        settings.log_level
        settings.catalog_path
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Environment
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Rule tables
    catalog_path: Path | None = Field(
        default=None,
        description="JSON rule tables replacing the built-in WHO MEC catalog",
    )

    # Static disclaimer attached to every result envelope
    sti_advisory: str = Field(default=DEFAULT_STI_ADVISORY)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure log level is valid."""
        valid = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid:
            msg = f"Invalid log level: {v}. Must be one of {valid}"
            raise ValueError(msg)
        return upper


# Module-level singleton — import this wherever settings are needed.
settings = Settings()
