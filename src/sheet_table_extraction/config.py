"""Configuration management for sheet table extraction.

This module provides centralized configuration using pydantic-settings.
All configuration options can be set via environment variables with the
STE_ prefix, or via a .env file in the project root.

Environment Variables:
    STE_MAX_FILE_SIZE_MB: Maximum workbook size in MB (default: 100)
    STE_MAX_SHEETS: Maximum number of sheets per workbook (default: 100)
    STE_MAX_WORKERS: Worker threads for parallel sheet extraction (default: 4)
    STE_CONVERT_TO_JSON: Project tables to JSON by default (default: false)
    STE_LOG_LEVEL: Logging level (default: INFO)
    STE_DEBUG: Enable debug mode (default: false)
"""

import logging
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables.

    Example .env file:
        STE_MAX_SHEETS=20
        STE_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="STE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # =========================================================================
    # Workbook Limits
    # =========================================================================

    max_file_size_mb: int = 100
    """Maximum workbook size in megabytes."""

    max_sheets: int = 100
    """Maximum number of sheets a workbook may contain."""

    # =========================================================================
    # Extraction Settings
    # =========================================================================

    max_workers: int = 4
    """Upper bound on threads used when sheets are extracted in parallel."""

    convert_to_json: bool = False
    """Whether tables are projected to JSON when options do not say."""

    # =========================================================================
    # Logging Settings
    # =========================================================================

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR, or CRITICAL."""

    debug: bool = False
    """Enable debug mode with additional logging."""

    # =========================================================================
    # Validators
    # =========================================================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(
                f"Invalid log level: {v}. Must be one of: {', '.join(valid_levels)}"
            )
        return upper_v

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_file_size(cls, v: int) -> int:
        if not 1 <= v <= 1024:
            raise ValueError(f"max_file_size_mb must be between 1 and 1024, got {v}")
        return v

    @field_validator("max_sheets")
    @classmethod
    def validate_max_sheets(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"max_sheets must be at least 1, got {v}")
        return v

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int) -> int:
        if not 1 <= v <= 64:
            raise ValueError(f"max_workers must be between 1 and 64, got {v}")
        return v

    # =========================================================================
    # Computed Properties
    # =========================================================================

    @property
    def max_file_size_bytes(self) -> int:
        """Get max file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        level: int = getattr(logging, self.log_level)
        return level

    def to_safe_dict(self) -> dict[str, Any]:
        """Convert settings to a plain dictionary for display."""
        return {
            "max_file_size_mb": self.max_file_size_mb,
            "max_sheets": self.max_sheets,
            "max_workers": self.max_workers,
            "convert_to_json": self.convert_to_json,
            "log_level": self.log_level,
            "debug": self.debug,
        }


def validate_settings_on_startup(s: Settings) -> None:
    """Log a configuration summary and warn about risky combinations.

    Args:
        s: Settings instance to validate.
    """
    logger = logging.getLogger(__name__)

    if s.debug and s.log_level != "DEBUG":
        logger.warning(
            "Debug mode is enabled but log_level is %s; "
            "set STE_LOG_LEVEL=DEBUG to see per-cell diagnostics.",
            s.log_level,
        )

    summary = ", ".join(f"{key}={value}" for key, value in s.to_safe_dict().items())
    logger.info(f"Configuration loaded: {summary}")


settings = Settings()
