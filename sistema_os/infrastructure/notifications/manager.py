"""Registry of the notification websockets open per user."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Track open feed sockets so each user's connections can be counted and pruned."""

    def __init__(self) -> None:
        self._sockets: dict[str, list[WebSocket]] = {}

    async def connect(self, user_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        self._sockets.setdefault(user_id, []).append(websocket)
        logger.debug(
            "Feed socket opened for user %s (%s open)",
            user_id,
            self.connection_count(user_id),
        )

    def disconnect(self, user_id: str, websocket: WebSocket) -> None:
        remaining = [
            socket for socket in self._sockets.get(user_id, []) if socket is not websocket
        ]
        if remaining:
            self._sockets[user_id] = remaining
        else:
            self._sockets.pop(user_id, None)

    def connection_count(self, user_id: str) -> int:
        return len(self._sockets.get(user_id, []))

    async def send(self, user_id: str, websocket: WebSocket, message: dict[str, Any]) -> None:
        """Deliver ``message`` on one socket; a socket that fails is forgotten."""

        try:
            await websocket.send_json(message)
        except Exception as exc:  # pragma: no cover - depends on client disconnect timing
            logger.info("Dropping feed socket for user %s: %s", user_id, exc)
            self.disconnect(user_id, websocket)


__all__ = ["NotificationConnectionManager"]
