"""Per-user settings and the notification preference flags they carry."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any

from .notification import (
    NOTIFICATION_TYPE_DEADLINE_REMINDER,
    NOTIFICATION_TYPE_ORDER_UPDATE,
    NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT,
)

_PREFERENCE_BY_TYPE = {
    NOTIFICATION_TYPE_ORDER_UPDATE: "order_updates",
    NOTIFICATION_TYPE_DEADLINE_REMINDER: "deadline_reminders",
    NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT: "system_announcements",
}
_FALLBACK_PREFERENCE = "system_announcements"


@dataclass(frozen=True)
class NotificationPreferences:
    """Flags controlling which notification types reach the user."""

    order_updates: bool = True
    deadline_reminders: bool = True
    system_announcements: bool = True
    email_notifications: bool = True

    @staticmethod
    def preference_key(notification_type: str) -> str:
        """Return the flag name that governs ``notification_type``.

        Unrecognized types fall back to ``system_announcements``.
        """

        return _PREFERENCE_BY_TYPE.get(notification_type, _FALLBACK_PREFERENCE)

    def allows(self, notification_type: str) -> bool:
        """Return ``True`` when notifications of ``notification_type`` are enabled."""

        return bool(getattr(self, self.preference_key(notification_type)))

    def merged(self, changes: dict[str, Any]) -> "NotificationPreferences":
        """Return a copy with the known flags in ``changes`` applied."""

        known = {item.name for item in fields(self)}
        updates = {key: bool(value) for key, value in changes.items() if key in known}
        return replace(self, **updates)

    @classmethod
    def from_mapping(cls, raw: dict[str, Any] | None) -> "NotificationPreferences":
        return cls().merged(raw or {})

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass
class UserSettings:
    """Settings document stored for each user."""

    user_id: str
    theme: str = "light"
    language: str = "pt-BR"
    notifications: NotificationPreferences = field(default_factory=NotificationPreferences)
    search_history: list[str] = field(default_factory=list)
    compact_view: bool = False

    def to_document(self) -> dict[str, Any]:
        """Return the JSON document persisted for these settings."""

        return {
            "theme": self.theme,
            "language": self.language,
            "notifications": self.notifications.as_dict(),
            "search_history": list(self.search_history),
            "compact_view": self.compact_view,
        }

    @classmethod
    def from_document(cls, user_id: str, document: dict[str, Any] | None) -> "UserSettings":
        """Build settings from a stored document, filling gaps with defaults."""

        document = document or {}
        defaults = cls(user_id=user_id)
        return cls(
            user_id=user_id,
            theme=document.get("theme") or defaults.theme,
            language=document.get("language") or defaults.language,
            notifications=NotificationPreferences.from_mapping(document.get("notifications")),
            search_history=list(document.get("search_history") or []),
            compact_view=bool(document.get("compact_view", defaults.compact_view)),
        )


__all__ = ["NotificationPreferences", "UserSettings"]
