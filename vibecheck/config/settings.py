"""
Configuration Management for VibeCheck

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here: where the records file lives,
how the atomic replace is retried, and how logs are rendered.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_LEVEL_NAMES = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def _default_documents_dir() -> Path:
    return Path.home() / "Documents"


class StoreSettings(BaseSettings):
    """Record file location and write behaviour."""

    model_config = SettingsConfigDict(
        env_prefix="VIBECHECK_STORE_",
        extra="ignore"
    )

    documents_dir: Path = Field(
        default_factory=_default_documents_dir,
        description="Private documents area the record folder lives under"
    )
    folder_name: str = Field(
        default="MyAccounting",
        min_length=1,
        description="Folder holding the records file"
    )
    file_name: str = Field(
        default="accounting_records.txt",
        min_length=1,
        description="Name of the records file"
    )

    # Atomic replace retry
    replace_retry_attempts: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts at replacing the records file with the temp file"
    )
    replace_retry_wait_seconds: float = Field(
        default=0.05,
        ge=0.0,
        le=5.0,
        description="Pause between replace attempts"
    )

    strict_append_reads: bool = Field(
        default=False,
        description="Fail an append when the existing file cannot be read "
                    "instead of treating it as empty"
    )

    @field_validator('folder_name', 'file_name')
    @classmethod
    def validate_plain_name(cls, v: str) -> str:
        """Names must not smuggle in path components."""
        if v in (".", "..") or "/" in v or "\\" in v:
            raise ValueError(f"Expected a plain name, got {v!r}")
        return v

    @property
    def folder_path(self) -> Path:
        return self.documents_dir / self.folder_name

    @property
    def file_path(self) -> Path:
        return self.folder_path / self.file_name


class LoggingSettings(BaseSettings):
    """structlog output configuration."""

    model_config = SettingsConfigDict(
        env_prefix="VIBECHECK_LOG_",
        extra="ignore"
    )

    level: str = Field(
        default="INFO",
        description="Minimum log level"
    )
    json_output: bool = Field(
        default=True,
        description="Render JSON lines (False renders for the console)"
    )

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LEVEL_NAMES:
            raise ValueError(f"Unknown log level: {v}")
        return level


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    recent_records_limit: int = Field(
        default=10,
        ge=1,
        le=1000,
        description="How many records the dashboard shows"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def store(self) -> StoreSettings:
        return StoreSettings()

    @property
    def logging(self) -> LoggingSettings:
        return LoggingSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus an
    ``<name>_error`` entry for each section that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("store", "logging", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
