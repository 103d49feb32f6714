"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite+aiosqlite:///./sistema_os.db",
        description="Async SQLAlchemy URL of the notification/order database",
        min_length=1,
    )
    app_timezone: str = Field(
        default="America/Sao_Paulo",
        description="Timezone used to compute deadlines and format dates",
    )
    deadline_scan_interval_seconds: float = Field(
        default=3600,
        description="Seconds between two consecutive deadline scans",
        gt=0,
    )
    deadline_reminder_window_days: int = Field(
        default=2,
        description="Orders due within this many days (or overdue) get a reminder",
    )
    deadline_reminder_dedupe: bool = Field(
        default=False,
        description="Skip orders that already received a reminder on the same day",
    )
    notification_alert_seconds: float = Field(
        default=5,
        description="Display budget of the transient alert raised for new notifications",
        gt=0,
    )
    scheduler_enabled: bool = Field(
        default=True,
        description="Start the periodic deadline scanner with the application",
    )
    log_level: str = Field(default="INFO", description="Level of the package logger")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from a browser",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if normalized not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError("LOG_LEVEL must be a standard logging level name")
        return normalized


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
