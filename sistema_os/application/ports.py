"""Interfaces of the collaborators the notification use cases depend on."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, Callable, Protocol

from sistema_os.domain.entities import Notification, NotificationPreferences, ServiceOrder

NotificationCallback = Callable[[Notification], None]
DeleteCallback = Callable[[str], None]
PreferencesCallback = Callable[[NotificationPreferences], None]
Unsubscribe = Callable[[], None]


class NotificationStore(Protocol):
    """Durable notification rows plus a per-user change feed."""

    async def insert(self, notification: Notification) -> Notification:
        ...

    async def update(self, notification_id: str, fields: dict[str, Any]) -> Notification:
        ...

    async def delete(self, notification_id: str) -> None:
        ...

    async def mark_all_read(self, user_id: str) -> int:
        ...

    async def delete_by_user(self, user_id: str) -> int:
        ...

    async def select_by_user(
        self, user_id: str, *, newest_first: bool = True
    ) -> Sequence[Notification]:
        ...

    def subscribe(
        self,
        user_id: str,
        on_insert: NotificationCallback,
        on_update: NotificationCallback,
        on_delete: DeleteCallback,
    ) -> Unsubscribe:
        ...


class OrderStore(Protocol):
    """Read access to service orders."""

    async def select_by_status_in(
        self, statuses: Iterable[str], *, has_expected_date: bool = True
    ) -> Sequence[ServiceOrder]:
        ...


class SettingsStore(Protocol):
    """Per-user settings and their change hook."""

    async def get_preferences(self, user_id: str) -> NotificationPreferences:
        ...

    async def update_preferences(
        self, user_id: str, changes: dict[str, Any]
    ) -> NotificationPreferences:
        ...

    async def list_user_ids(self) -> Sequence[str]:
        ...

    def subscribe(self, user_id: str, callback: PreferencesCallback) -> Unsubscribe:
        ...


class AlertSink(Protocol):
    """Transient user-facing alerts (toasts)."""

    def show(
        self,
        title: str,
        description: str,
        *,
        duration: float | None = None,
        variant: str = "default",
    ) -> None:
        ...


__all__ = [
    "AlertSink",
    "DeleteCallback",
    "NotificationCallback",
    "NotificationStore",
    "OrderStore",
    "PreferencesCallback",
    "SettingsStore",
    "Unsubscribe",
]
