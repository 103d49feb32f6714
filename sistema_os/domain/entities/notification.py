"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

NOTIFICATION_TYPE_ORDER_UPDATE = "order_update"
NOTIFICATION_TYPE_DEADLINE_REMINDER = "deadline_reminder"
NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT = "system_announcement"


@dataclass
class Notification:
    """Information message delivered to a specific user."""

    id: str | None
    user_id: str
    type: str
    title: str
    message: str
    read: bool = False
    created_at: datetime | None = None
    data: dict[str, Any] = field(default_factory=dict)

    def marked_read(self) -> "Notification":
        """Return a copy of the notification flagged as read."""

        return replace(self, read=True, data=dict(self.data))


__all__ = [
    "Notification",
    "NOTIFICATION_TYPE_ORDER_UPDATE",
    "NOTIFICATION_TYPE_DEADLINE_REMINDER",
    "NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT",
]
