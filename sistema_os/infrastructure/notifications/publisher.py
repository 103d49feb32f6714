"""Deliver feed snapshots and transient alerts to websocket subscribers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread
from fastapi import WebSocket

from sistema_os.application.use_cases.notifications import NotificationFeed
from sistema_os.domain.entities import Notification

from .manager import NotificationConnectionManager

logger = logging.getLogger(__name__)


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "user_id": notification.user_id,
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "read": notification.read,
        "created_at": notification.created_at.isoformat()
        if notification.created_at
        else None,
        "data": notification.data or {},
    }


def serialize_feed(feed: NotificationFeed) -> dict[str, Any]:
    return {
        "notifications": [serialize_notification(item) for item in feed.notifications],
        "unread_count": feed.unread_count,
    }


class LoggingAlertSink:
    """Alert sink for processes without a connected client."""

    def show(
        self,
        title: str,
        description: str,
        *,
        duration: float | None = None,
        variant: str = "default",
    ) -> None:
        level = logging.WARNING if variant == "destructive" else logging.INFO
        logger.log(level, "%s: %s", title, description)


class WebSocketFeedPublisher:
    """Push one feed's changes and alerts to its websocket.

    Used both as the feed listener and as its alert sink; every message is
    scheduled on the running loop so the feed callbacks never block.
    """

    def __init__(
        self,
        manager: NotificationConnectionManager,
        user_id: str,
        websocket: WebSocket,
    ) -> None:
        self._manager = manager
        self._user_id = user_id
        self._websocket = websocket
        self._tasks: set[asyncio.Task] = set()

    def __call__(self, feed: NotificationFeed) -> None:
        self._schedule({"type": "feed", "data": serialize_feed(feed)})

    def show(
        self,
        title: str,
        description: str,
        *,
        duration: float | None = None,
        variant: str = "default",
    ) -> None:
        self._schedule(
            {
                "type": "alert",
                "data": {
                    "title": title,
                    "description": description,
                    "duration": duration,
                    "variant": variant,
                },
            }
        )

    def close(self) -> None:
        for task in self._tasks:
            task.cancel()
        self._tasks.clear()

    def _schedule(self, message: dict[str, Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            from_thread.run(self._manager.send, self._user_id, self._websocket, message)
        else:
            task = loop.create_task(
                self._manager.send(self._user_id, self._websocket, message)
            )
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)


__all__ = [
    "LoggingAlertSink",
    "WebSocketFeedPublisher",
    "serialize_feed",
    "serialize_notification",
]
