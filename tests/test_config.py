"""Tests for environment-driven settings."""

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from sistema_os.config import Settings, get_settings, reset_settings_cache
from sistema_os.container import build_container
from sistema_os.utils import configure_app_timezone, get_app_timezone, now_in_app_timezone


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    yield
    reset_settings_cache()


def test_defaults(monkeypatch):
    for name in ("DEADLINE_SCAN_INTERVAL_SECONDS", "DEADLINE_REMINDER_WINDOW_DAYS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.deadline_scan_interval_seconds == 3600
    assert settings.deadline_reminder_window_days == 2
    assert settings.deadline_reminder_dedupe is False
    assert settings.notification_alert_seconds == 5


def test_environment_overrides_are_picked_up_after_reset(monkeypatch):
    monkeypatch.setenv("DEADLINE_REMINDER_DEDUPE", "true")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = get_settings()

    assert settings.deadline_reminder_dedupe is True
    assert settings.log_level == "DEBUG"
    assert get_settings() is settings


def test_invalid_log_level_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, log_level="verbose")


def test_scan_interval_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, deadline_scan_interval_seconds=0)


def test_container_settings_set_the_app_timezone(tmp_path, monkeypatch):
    monkeypatch.delenv("APP_TIMEZONE", raising=False)
    settings = Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'tz.db'}",
        app_timezone="UTC",
        scheduler_enabled=False,
    )

    try:
        build_container(settings)
        assert get_app_timezone() == ZoneInfo("UTC")
        assert now_in_app_timezone().utcoffset() == timedelta(0)
    finally:
        configure_app_timezone(None)

    assert get_app_timezone() == ZoneInfo("America/Sao_Paulo")
