"""Public helpers for emitting and following user notifications."""

from .deadline_scanner import DeadlineScanner, ScanFailure, ScanResult
from .events import (
    NotificationResult,
    notify_order_status_changed,
    notify_system_announcement,
    persist_notification,
    send_welcome_notification,
)
from .factory import NotificationFactory
from .feed import ActionResult, NotificationFeed

__all__ = [
    "ActionResult",
    "DeadlineScanner",
    "NotificationFactory",
    "NotificationFeed",
    "NotificationResult",
    "ScanFailure",
    "ScanResult",
    "notify_order_status_changed",
    "notify_system_announcement",
    "persist_notification",
    "send_welcome_notification",
]
