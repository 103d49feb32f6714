"""Utility helpers for reusable functionality."""

from .datetime import (
    Clock,
    configure_app_timezone,
    days_until,
    ensure_app_naive_datetime,
    ensure_app_timezone,
    format_br_date,
    get_app_timezone,
    local_date,
    now_in_app_naive_datetime,
    now_in_app_timezone,
)

__all__ = [
    "Clock",
    "configure_app_timezone",
    "days_until",
    "ensure_app_naive_datetime",
    "ensure_app_timezone",
    "format_br_date",
    "get_app_timezone",
    "local_date",
    "now_in_app_naive_datetime",
    "now_in_app_timezone",
]
