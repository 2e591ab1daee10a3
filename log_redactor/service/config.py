# log_redactor/service/config.py

"""Application configuration using Pydantic Settings.

Manages environment variables, defaults, and validation rules.
"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Global application settings.

    Loads values from environment variables (prefix 'LOG_REDACTOR_') or .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="LOG_REDACTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    policy_path: Optional[Path] = Field(
        default=None,
        description="JSON redaction policy file. No path means no rules.",
    )

    log_level: str = Field(
        default="INFO", description="Level for the application's own logging."
    )

    structured_logging: bool = Field(
        default=True, description="Emit application logs as JSON lines."
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensure the level is one the logging module knows."""
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v}")
        return level


# Singleton settings instance
settings = Settings()
