"""Utility helpers to generate and persist domain notifications."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from sistema_os.application.ports import NotificationStore
from sistema_os.domain.entities import Notification, ServiceOrder
from sistema_os.domain.errors import StoreError

from .factory import NotificationFactory

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_NAME = "Cliente"


@dataclass
class NotificationResult:
    """Outcome of a notification creation request."""

    success: bool
    notification: Notification | None = None
    error: str | None = None


async def persist_notification(
    store: NotificationStore, notification: Notification
) -> NotificationResult:
    """Insert ``notification`` and report the outcome without raising."""

    try:
        saved = await store.insert(notification)
    except StoreError as exc:
        logger.error("Error creating notification: %s", exc)
        return NotificationResult(success=False, error=str(exc))
    return NotificationResult(success=True, notification=saved)


async def notify_order_status_changed(
    store: NotificationStore,
    factory: NotificationFactory,
    *,
    user_id: str,
    order: ServiceOrder,
) -> NotificationResult:
    """Tell ``user_id`` that ``order`` moved to a new status."""

    notification = factory.build_order_update(
        user_id,
        order.order_number,
        order.status,
        order.client_name or DEFAULT_CLIENT_NAME,
    )
    return await persist_notification(store, notification)


async def notify_system_announcement(
    store: NotificationStore,
    factory: NotificationFactory,
    *,
    user_id: str,
    title: str,
    message: str,
    data: dict[str, Any] | None = None,
) -> NotificationResult:
    notification = factory.build_system_announcement(user_id, title, message, data)
    return await persist_notification(store, notification)


async def send_welcome_notification(
    store: NotificationStore, factory: NotificationFactory, *, user_id: str
) -> NotificationResult:
    """Greet a user the first time their settings are created."""

    return await persist_notification(store, factory.build_welcome(user_id))


__all__ = [
    "DEFAULT_CLIENT_NAME",
    "NotificationResult",
    "notify_order_status_changed",
    "notify_system_announcement",
    "persist_notification",
    "send_welcome_notification",
]
