"""Domain entities exposed by the application."""

from .notification import (
    NOTIFICATION_TYPE_DEADLINE_REMINDER,
    NOTIFICATION_TYPE_ORDER_UPDATE,
    NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT,
    Notification,
)
from .preferences import NotificationPreferences, UserSettings
from .service_order import (
    ORDER_STATUS_CANCELED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_IN_PROGRESS,
    ORDER_STATUS_OPEN,
    ORDER_STATUSES,
    PENDING_ORDER_STATUSES,
    Client,
    ServiceOrder,
)

__all__ = [
    "Client",
    "Notification",
    "NotificationPreferences",
    "ServiceOrder",
    "UserSettings",
    "NOTIFICATION_TYPE_ORDER_UPDATE",
    "NOTIFICATION_TYPE_DEADLINE_REMINDER",
    "NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT",
    "ORDER_STATUSES",
    "PENDING_ORDER_STATUSES",
    "ORDER_STATUS_OPEN",
    "ORDER_STATUS_IN_PROGRESS",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_CANCELED",
]
