"""Change feeds and realtime delivery helpers for the infrastructure layer."""

from .changes import NotificationChangeHub, PreferencesChangeHub
from .manager import NotificationConnectionManager
from .publisher import (
    LoggingAlertSink,
    WebSocketFeedPublisher,
    serialize_feed,
    serialize_notification,
)

__all__ = [
    "LoggingAlertSink",
    "NotificationChangeHub",
    "NotificationConnectionManager",
    "PreferencesChangeHub",
    "WebSocketFeedPublisher",
    "serialize_feed",
    "serialize_notification",
]
