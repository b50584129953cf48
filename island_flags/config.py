"""
Island Flags Configuration Management

This module provides configuration for where world flag settings are
persisted and how they are watched, integrating with environment variables
and providing validation.
"""

from pathlib import Path
from typing import Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FlagSettings(BaseSettings):
    """
    Flag system configuration with validation and environment variable support.

    All settings can be overridden via environment variables with the FLAGS_ prefix.
    """

    flags_settings_dir: Path = Field(Path("world_settings"), description="Directory holding world flag files")
    flags_debounce_seconds: float = Field(0.2, description="Minimum seconds between file reloads")
    flags_watch_files: bool = Field(False, description="Reload world flag files when edited externally")
    flags_log_level: str = Field("INFO", description="Log level for the flag CLI")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @validator('flags_debounce_seconds')
    def validate_debounce(cls, v):
        """Validate debounce interval is not negative."""
        if v < 0:
            raise ValueError('Debounce seconds must not be negative')
        return v

    @validator('flags_log_level')
    def validate_log_level(cls, v):
        """Validate log level is a standard logging level name."""
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f'Log level must be one of {", ".join(LOG_LEVELS)}')
        return level

    def settings_path_for(self, context_name: str) -> Path:
        """
        Get the world flag file for a game mode context.

        Returns:
            Path: ``<settings_dir>/<context_name>.json``
        """
        return self.flags_settings_dir / f"{context_name}.json"

    @classmethod
    def from_env_file(cls, env_file_path: Optional[Path] = None) -> "FlagSettings":
        """
        Create configuration from environment file.

        Args:
            env_file_path: Optional path to .env file. Defaults to .env in the working directory

        Returns:
            FlagSettings: Configured instance
        """
        if env_file_path is None:
            env_file_path = Path(".env")

        if env_file_path.exists():
            return cls(_env_file=str(env_file_path))
        else:
            # Fall back to environment variables only
            return cls()


# Global configuration instance
_settings: Optional[FlagSettings] = None


def get_flag_settings(env_file_path: Optional[Path] = None) -> FlagSettings:
    """
    Get or create the global flag configuration instance.

    Args:
        env_file_path: Optional path to environment file

    Returns:
        FlagSettings: Global configuration instance
    """
    global _settings
    if _settings is None:
        _settings = FlagSettings.from_env_file(env_file_path)
    return _settings


def reset_flag_settings() -> None:
    """Reset the global configuration (useful for testing)."""
    global _settings
    _settings = None
