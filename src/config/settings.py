"""Engine settings using Pydantic Settings.

Centralized configuration for the legal rules engine. Values come from
LEGAL_ENGINE_* environment variables or a .env file.

Yearly statutory amounts (CSSA income cap, maintenance cap) are not
settings; they live in the YAML parameter files read by
config.legal_parameters_loader.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EngineSettings(BaseSettings):
    """Main engine settings."""

    model_config = SettingsConfigDict(
        env_prefix="LEGAL_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application info
    name: str = Field(default="NY Legal Paralegal Tool", description="Application name")
    version: str = Field(default="2.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level for the engine")

    # Deadline classification
    upcoming_window_days: int = Field(
        default=30, ge=0,
        description="Look-ahead window in days for classifying a deadline as upcoming",
    )

    # Statutory parameter files
    parameter_year: int = Field(default=2024, description="Year of the statutory parameter file to use")
    parameters_dir: Optional[Path] = Field(
        default=None,
        description="Directory of parameters_<year>.yaml files; defaults to the bundled set",
    )

    # Minimum role level allowed to write computed values back to a task record
    min_write_role_level: int = Field(default=60, ge=0, description="Paralegal and above")

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"log_level must be one of {VALID_LOG_LEVELS}")
        return level

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment in ("production", "prod", "staging")


@lru_cache
def get_settings() -> EngineSettings:
    """
    Get cached engine settings instance.

    Returns:
        EngineSettings: Cached settings loaded from environment.
    """
    return EngineSettings()


def configure_logging(settings: Optional[EngineSettings] = None) -> None:
    """Apply the configured log level to the engine's package loggers."""
    settings = settings or get_settings()
    for name in ("rules", "calculator", "binder", "config", "audit"):
        logging.getLogger(name).setLevel(settings.log_level)
    logger.debug(f"Engine log level set to {settings.log_level}")
