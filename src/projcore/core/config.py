"""
Configuration settings for projcore.
"""

from pathlib import Path
from typing import Literal, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Library settings with environment variable support.

    Attributes:
        environment: Deployment environment, drives default log formatting
        log_level: Explicit log level name, or None for the environment default
        log_file: Optional path for a rotating log file
        json_logs: Whether file logs are written as JSON
        strict_grid_shift: Raise when a point falls outside every grid of a
            grid-shift datum instead of leaving it unshifted
        strict_datum: Raise when a datum transform involves a datum with no
            known relationship to WGS84 instead of treating it as a no-op
        crs_cache_max_entries: Upper bound on entries held by a CRSCache
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_prefix="PROJCORE_",
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Logging
    log_level: Optional[str] = None
    log_file: Optional[Path] = None
    json_logs: bool = False

    # Transformation policy
    strict_grid_shift: bool = False
    strict_datum: bool = False

    # Caching
    crs_cache_max_entries: int = 1000

    @field_validator("crs_cache_max_entries")
    @classmethod
    def _check_cache_size(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("crs_cache_max_entries must be positive")
        return value

    @property
    def effective_log_level(self) -> str:
        """Get the log level, falling back to the environment default."""
        if self.log_level:
            return self.log_level.upper()
        return "DEBUG" if self.environment == "development" else "INFO"


# Global settings instance
settings = Settings()
