"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding=ENV_FILE_ENCODING,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./erm_analytics.db",
        description="SQLAlchemy URL of the database holding the key-value store",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA zone (or UTC+HH:MM offset) used for calendar-day boundaries",
    )
    storage_prefix: str = Field(
        default="erm_",
        description="Prefix prepended to every key written to the key-value store",
    )
    session_timeout_minutes: int = Field(
        default=30,
        description="Inactivity gap that closes a reconstructed session",
        gt=0,
    )
    snapshot_retention_days: int = Field(
        default=90,
        description="Number of daily snapshots kept in the rolling history",
        gt=0,
    )
    recent_sessions_limit: int = Field(
        default=20,
        description="Number of most recent sessions returned for display",
        gt=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
