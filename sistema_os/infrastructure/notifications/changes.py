"""In-process change feeds that repositories publish to after each commit."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Callable, DefaultDict, List

from sistema_os.application.ports import (
    DeleteCallback,
    NotificationCallback,
    PreferencesCallback,
    Unsubscribe,
)
from sistema_os.domain.entities import Notification, NotificationPreferences

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class _NotificationSubscription:
    on_insert: NotificationCallback
    on_update: NotificationCallback
    on_delete: DeleteCallback


class _SubscriberRegistry:
    """Subscribers grouped by user; a failing subscriber never blocks the rest."""

    def __init__(self) -> None:
        self._subscribers: DefaultDict[str, List[Any]] = defaultdict(list)

    def add(self, user_id: str, subscriber: Any) -> Unsubscribe:
        self._subscribers[user_id].append(subscriber)

        def unsubscribe() -> None:
            self._discard(user_id, subscriber)

        return unsubscribe

    def count(self, user_id: str) -> int:
        return len(self._subscribers.get(user_id, ()))

    def deliver(self, user_id: str, invoke: Callable[[Any], None]) -> None:
        for subscriber in list(self._subscribers.get(user_id, ())):
            try:
                invoke(subscriber)
            except Exception:
                logger.exception("Change subscriber for user %s failed", user_id)

    def _discard(self, user_id: str, subscriber: Any) -> None:
        subscribers = self._subscribers.get(user_id)
        if subscribers is None:
            return
        if subscriber in subscribers:
            subscribers.remove(subscriber)
        if not subscribers:
            self._subscribers.pop(user_id, None)


class NotificationChangeHub:
    """Fan notification inserts, updates and deletes out to per-user listeners."""

    def __init__(self) -> None:
        self._registry = _SubscriberRegistry()

    def subscribe(
        self,
        user_id: str,
        on_insert: NotificationCallback,
        on_update: NotificationCallback,
        on_delete: DeleteCallback,
    ) -> Unsubscribe:
        """Register callbacks for ``user_id`` and return the handle removing them."""

        subscription = _NotificationSubscription(on_insert, on_update, on_delete)
        return self._registry.add(user_id, subscription)

    def subscriber_count(self, user_id: str) -> int:
        return self._registry.count(user_id)

    def publish_insert(self, notification: Notification) -> None:
        self._registry.deliver(
            notification.user_id, lambda sub: sub.on_insert(notification)
        )

    def publish_update(self, notification: Notification) -> None:
        self._registry.deliver(
            notification.user_id, lambda sub: sub.on_update(notification)
        )

    def publish_delete(self, user_id: str, notification_id: str) -> None:
        self._registry.deliver(user_id, lambda sub: sub.on_delete(notification_id))


class PreferencesChangeHub:
    """Tell listeners when a user's notification preferences change."""

    def __init__(self) -> None:
        self._registry = _SubscriberRegistry()

    def subscribe(self, user_id: str, callback: PreferencesCallback) -> Unsubscribe:
        return self._registry.add(user_id, callback)

    def publish(self, user_id: str, preferences: NotificationPreferences) -> None:
        self._registry.deliver(user_id, lambda callback: callback(preferences))


__all__ = ["NotificationChangeHub", "PreferencesChangeHub"]
