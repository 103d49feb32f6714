"""Live, preference-filtered view of a user's notifications."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable

from anyio import from_thread

from sistema_os.application.ports import (
    AlertSink,
    NotificationStore,
    SettingsStore,
    Unsubscribe,
)
from sistema_os.domain.entities import Notification, NotificationPreferences
from sistema_os.domain.errors import NotFound, StoreError

logger = logging.getLogger(__name__)

DEFAULT_ALERT_SECONDS = 5.0
ALERT_VARIANT_DESTRUCTIVE = "destructive"

_ERROR_TITLE = "Erro"
_SUCCESS_TITLE = "Sucesso"


@dataclass
class ActionResult:
    """Outcome reported to the caller of a feed mutation."""

    success: bool
    error: str | None = None


FeedListener = Callable[["NotificationFeed"], None]


class NotificationFeed:
    """Per-user cache of notifications kept in sync with the store.

    The store is always written first; local state only changes after the
    store accepted the mutation. Change events arriving through the
    subscription and the results of :meth:`load` both come from the store, so
    whichever lands last wins.
    """

    def __init__(
        self,
        notifications: NotificationStore,
        settings: SettingsStore,
        alerts: AlertSink,
        *,
        alert_seconds: float = DEFAULT_ALERT_SECONDS,
        listener: FeedListener | None = None,
    ) -> None:
        self._store = notifications
        self._settings = settings
        self._alerts = alerts
        self._alert_seconds = alert_seconds
        self.listener = listener
        self._user_id: str | None = None
        self._preferences = NotificationPreferences()
        self._items: list[Notification] = []
        self._unsubscribers: list[Unsubscribe] = []
        self._pending: set[asyncio.Task] = set()

    @property
    def user_id(self) -> str | None:
        return self._user_id

    @property
    def preferences(self) -> NotificationPreferences:
        return self._preferences

    @property
    def notifications(self) -> tuple[Notification, ...]:
        return tuple(self._items)

    @property
    def unread_count(self) -> int:
        return sum(1 for item in self._items if not item.read)

    async def start(self, user_id: str) -> None:
        """Load the feed for ``user_id`` and follow store and preference changes."""

        self.stop()
        preferences = await self._settings.get_preferences(user_id)
        await self.load(user_id, preferences)
        self._unsubscribers = [
            self._store.subscribe(
                user_id, self.on_insert, self.on_update, self.on_delete
            ),
            self._settings.subscribe(user_id, self._on_preferences_changed),
        ]

    def stop(self) -> None:
        """Release the subscriptions and drop pending reloads."""

        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        for task in self._pending:
            task.cancel()
        self._pending.clear()

    async def load(
        self, user_id: str, preferences: NotificationPreferences
    ) -> ActionResult:
        """Replace the feed with the stored notifications ``preferences`` allow."""

        self._user_id = user_id
        self._preferences = preferences
        try:
            rows = await self._store.select_by_user(user_id, newest_first=True)
        except StoreError as exc:
            logger.error("Error loading notifications for user %s: %s", user_id, exc)
            return ActionResult(success=False, error=str(exc))

        self._items = [row for row in rows if preferences.allows(row.type)]
        self._changed()
        return ActionResult(success=True)

    async def reload(self) -> ActionResult:
        if self._user_id is None:
            return ActionResult(success=False, error="Feed not started")
        return await self.load(self._user_id, self._preferences)

    def on_insert(self, notification: Notification) -> None:
        if not self._preferences.allows(notification.type):
            return
        if self._replace(notification):
            self._changed()
            return
        self._items.insert(0, notification)
        self._changed()
        self._alerts.show(
            notification.title,
            notification.message,
            duration=self._alert_seconds,
        )

    def on_update(self, notification: Notification) -> None:
        if not self._preferences.allows(notification.type):
            return
        if self._replace(notification):
            self._changed()

    def on_delete(self, notification_id: str) -> None:
        if self._remove(notification_id):
            self._changed()

    async def mark_as_read(self, notification_id: str) -> ActionResult:
        if not self._owns(notification_id):
            return self._fail(
                "Não foi possível marcar a notificação como lida.",
                NotFound(f"Notification with id {notification_id} not found"),
            )
        try:
            await self._store.update(notification_id, {"read": True})
        except (StoreError, NotFound) as exc:
            return self._fail("Não foi possível marcar a notificação como lida.", exc)

        self._items = [
            item.marked_read() if item.id == notification_id else item
            for item in self._items
        ]
        self._changed()
        return ActionResult(success=True)

    async def mark_all_as_read(self, user_id: str | None) -> ActionResult:
        if not user_id:
            return ActionResult(success=False, error="No authenticated user")
        try:
            await self._store.mark_all_read(user_id)
        except StoreError as exc:
            return self._fail(
                "Não foi possível marcar todas as notificações como lidas.", exc
            )

        self._items = [item if item.read else item.marked_read() for item in self._items]
        self._changed()
        self._alerts.show(
            _SUCCESS_TITLE, "Todas as notificações foram marcadas como lidas."
        )
        return ActionResult(success=True)

    async def delete(self, notification_id: str) -> ActionResult:
        if not self._owns(notification_id):
            return self._fail(
                "Não foi possível excluir a notificação.",
                NotFound(f"Notification with id {notification_id} not found"),
            )
        try:
            await self._store.delete(notification_id)
        except (StoreError, NotFound) as exc:
            return self._fail("Não foi possível excluir a notificação.", exc)

        if self._remove(notification_id):
            self._changed()
        return ActionResult(success=True)

    async def clear_all(self, user_id: str | None) -> ActionResult:
        if not user_id:
            return ActionResult(success=False, error="No authenticated user")
        try:
            await self._store.delete_by_user(user_id)
        except StoreError as exc:
            return self._fail("Não foi possível excluir as notificações.", exc)

        self._items = []
        self._changed()
        self._alerts.show(_SUCCESS_TITLE, "Todas as notificações foram excluídas.")
        return ActionResult(success=True)

    def _on_preferences_changed(self, preferences: NotificationPreferences) -> None:
        self._preferences = preferences
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self.reload)
        else:
            task = loop.create_task(self.reload())
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    def _owns(self, notification_id: str) -> bool:
        """Only ids currently shown in this user's feed may be changed through it."""

        return any(item.id == notification_id for item in self._items)

    def _replace(self, notification: Notification) -> bool:
        for index, item in enumerate(self._items):
            if item.id == notification.id:
                self._items[index] = notification
                return True
        return False

    def _remove(self, notification_id: str) -> bool:
        remaining = [item for item in self._items if item.id != notification_id]
        removed = len(remaining) != len(self._items)
        self._items = remaining
        return removed

    def _fail(self, description: str, exc: Exception) -> ActionResult:
        logger.warning("%s (%s)", description, exc)
        self._alerts.show(_ERROR_TITLE, description, variant=ALERT_VARIANT_DESTRUCTIVE)
        return ActionResult(success=False, error=str(exc))

    def _changed(self) -> None:
        if self.listener is not None:
            self.listener(self)


__all__ = [
    "ALERT_VARIANT_DESTRUCTIVE",
    "ActionResult",
    "DEFAULT_ALERT_SECONDS",
    "FeedListener",
    "NotificationFeed",
]
