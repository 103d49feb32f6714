"""Shared fixtures: in-memory stores, a controllable clock and an alert recorder."""

from __future__ import annotations

import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sistema_os.domain.entities import (  # noqa: E402
    Notification,
    NotificationPreferences,
    ServiceOrder,
)
from sistema_os.domain.errors import NotFound, StoreError  # noqa: E402
from sistema_os.infrastructure.notifications.changes import (  # noqa: E402
    NotificationChangeHub,
    PreferencesChangeHub,
)
from sistema_os.utils import ensure_app_timezone  # noqa: E402


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


class FakeClock:
    """Clock frozen at ``now`` until a test advances it."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class InMemoryNotificationStore:
    """Notification store double backed by a dict and the real change hub."""

    def __init__(self) -> None:
        self.rows: dict[str, Notification] = {}
        self.changes = NotificationChangeHub()
        self.failing: set[str] = set()
        self.failing_orders: set[str] = set()
        self.inserted: list[Notification] = []

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise StoreError(f"{operation} failed")

    async def insert(self, notification: Notification) -> Notification:
        self._check("insert")
        if notification.data.get("orderNumber") in self.failing_orders:
            raise StoreError("constraint violation")
        self.rows[notification.id] = notification
        self.inserted.append(notification)
        self.changes.publish_insert(notification)
        return notification

    async def update(self, notification_id: str, fields: dict[str, Any]) -> Notification:
        self._check("update")
        current = self.rows.get(notification_id)
        if current is None:
            raise NotFound(notification_id)
        updated = Notification(**{**current.__dict__, **fields})
        self.rows[notification_id] = updated
        self.changes.publish_update(updated)
        return updated

    async def delete(self, notification_id: str) -> None:
        self._check("delete")
        current = self.rows.pop(notification_id, None)
        if current is None:
            raise NotFound(notification_id)
        self.changes.publish_delete(current.user_id, notification_id)

    async def mark_all_read(self, user_id: str) -> int:
        self._check("mark_all_read")
        unread = [
            row for row in self.rows.values() if row.user_id == user_id and not row.read
        ]
        for row in unread:
            await self.update(row.id, {"read": True})
        return len(unread)

    async def delete_by_user(self, user_id: str) -> int:
        self._check("delete_by_user")
        owned = [row.id for row in self.rows.values() if row.user_id == user_id]
        for notification_id in owned:
            await self.delete(notification_id)
        return len(owned)

    async def select_by_user(
        self, user_id: str, *, newest_first: bool = True
    ) -> list[Notification]:
        self._check("select_by_user")
        owned = [row for row in self.rows.values() if row.user_id == user_id]
        return sorted(owned, key=lambda row: row.created_at, reverse=newest_first)

    def subscribe(self, user_id, on_insert, on_update, on_delete):
        return self.changes.subscribe(user_id, on_insert, on_update, on_delete)


class InMemoryOrderStore:
    def __init__(self, orders: list[ServiceOrder] | None = None) -> None:
        self.orders = list(orders or [])
        self.fail = False

    async def select_by_status_in(self, statuses, *, has_expected_date: bool = True):
        if self.fail:
            raise StoreError("orders unavailable")
        wanted = set(statuses)
        return [
            order
            for order in self.orders
            if order.status in wanted
            and (not has_expected_date or order.expected_completion_date is not None)
        ]


class InMemorySettingsStore:
    def __init__(self) -> None:
        self.preferences: dict[str, NotificationPreferences] = {}
        self.changes = PreferencesChangeHub()

    async def get_preferences(self, user_id: str) -> NotificationPreferences:
        return self.preferences.setdefault(user_id, NotificationPreferences())

    async def update_preferences(self, user_id: str, changes: dict[str, Any]):
        current = await self.get_preferences(user_id)
        updated = current.merged(changes)
        self.preferences[user_id] = updated
        self.changes.publish(user_id, updated)
        return updated

    async def list_user_ids(self) -> list[str]:
        return sorted(self.preferences)

    def subscribe(self, user_id, callback):
        return self.changes.subscribe(user_id, callback)


class RecordingAlertSink:
    def __init__(self) -> None:
        self.alerts: list[dict[str, Any]] = []

    def show(self, title, description, *, duration=None, variant="default") -> None:
        self.alerts.append(
            {
                "title": title,
                "description": description,
                "duration": duration,
                "variant": variant,
            }
        )


@pytest.fixture
def base_now() -> datetime:
    return ensure_app_timezone(datetime(2024, 5, 10, 9, 0))


@pytest.fixture
def clock(base_now: datetime) -> FakeClock:
    return FakeClock(base_now)


@pytest.fixture
def notification_store() -> InMemoryNotificationStore:
    return InMemoryNotificationStore()


@pytest.fixture
def order_store() -> InMemoryOrderStore:
    return InMemoryOrderStore()


@pytest.fixture
def settings_store() -> InMemorySettingsStore:
    return InMemorySettingsStore()


@pytest.fixture
def alerts() -> RecordingAlertSink:
    return RecordingAlertSink()
