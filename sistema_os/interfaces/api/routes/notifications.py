"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from sistema_os.application.use_cases.notifications import (
    NotificationFeed,
    notify_system_announcement,
)
from sistema_os.application.use_cases.settings import load_user_settings
from sistema_os.container import Container
from sistema_os.domain.entities import Notification
from sistema_os.domain.errors import NotFound, StoreError
from sistema_os.infrastructure.notifications import (
    LoggingAlertSink,
    WebSocketFeedPublisher,
    serialize_feed,
)
from sistema_os.infrastructure.repositories import NotificationRepository
from sistema_os.interfaces.api.dependencies import (
    get_container,
    get_current_user_id,
    get_notification_repository,
)
from sistema_os.interfaces.api.routes_helpers import http_error_for
from sistema_os.interfaces.api.schemas import (
    AnnouncementCreate,
    BulkActionRead,
    NotificationFeedRead,
    NotificationRead,
    ScanResultRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("/", response_model=NotificationFeedRead)
async def list_notifications(
    container: Container = Depends(get_container),
    user_id: str = Depends(get_current_user_id),
) -> NotificationFeedRead:
    """Return the caller's notifications allowed by their preferences."""

    try:
        settings = await load_user_settings(
            container.user_settings,
            container.notifications,
            container.factory,
            user_id=user_id,
        )
    except StoreError as exc:
        raise http_error_for(exc) from exc

    feed = NotificationFeed(
        container.notifications,
        container.user_settings,
        LoggingAlertSink(),
        alert_seconds=container.settings.notification_alert_seconds,
    )
    result = await feed.load(user_id, settings.notifications)
    if not result.success:
        raise http_error_for(StoreError(result.error or ""))
    return NotificationFeedRead(
        notifications=[_notification_to_schema(item) for item in feed.notifications],
        unread_count=feed.unread_count,
    )


@router.post("/read-all", response_model=BulkActionRead)
async def mark_all_notifications_read(
    repository: NotificationRepository = Depends(get_notification_repository),
    user_id: str = Depends(get_current_user_id),
) -> BulkActionRead:
    try:
        affected = await repository.mark_all_read(user_id)
    except StoreError as exc:
        raise http_error_for(exc) from exc
    return BulkActionRead(affected=affected)


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def mark_notification_read(
    notification_id: str,
    repository: NotificationRepository = Depends(get_notification_repository),
    user_id: str = Depends(get_current_user_id),
) -> NotificationRead:
    await _ensure_owned(repository, notification_id, user_id)
    try:
        updated = await repository.update(notification_id, {"read": True})
    except (NotFound, StoreError) as exc:
        raise http_error_for(exc) from exc
    return _notification_to_schema(updated)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_notification(
    notification_id: str,
    repository: NotificationRepository = Depends(get_notification_repository),
    user_id: str = Depends(get_current_user_id),
) -> Response:
    await _ensure_owned(repository, notification_id, user_id)
    try:
        await repository.delete(notification_id)
    except (NotFound, StoreError) as exc:
        raise http_error_for(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", response_model=BulkActionRead)
async def clear_notifications(
    repository: NotificationRepository = Depends(get_notification_repository),
    user_id: str = Depends(get_current_user_id),
) -> BulkActionRead:
    try:
        affected = await repository.delete_by_user(user_id)
    except StoreError as exc:
        raise http_error_for(exc) from exc
    return BulkActionRead(affected=affected)


@router.post(
    "/announcements",
    response_model=NotificationRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_announcement(
    payload: AnnouncementCreate,
    container: Container = Depends(get_container),
    user_id: str = Depends(get_current_user_id),
) -> NotificationRead:
    """Publish a system announcement to ``payload.user_id`` (or the caller)."""

    result = await notify_system_announcement(
        container.notifications,
        container.factory,
        user_id=payload.user_id or user_id,
        title=payload.title,
        message=payload.message,
        data=payload.data,
    )
    if not result.success or result.notification is None:
        raise http_error_for(StoreError(result.error or ""))
    return _notification_to_schema(result.notification)


@router.post("/deadline-scan", response_model=ScanResultRead)
async def run_deadline_scan(
    container: Container = Depends(get_container),
    user_id: str = Depends(get_current_user_id),
) -> ScanResultRead:
    """Check pending orders now and create reminders for the caller."""

    result = await container.scanner.scan(user_id)
    return ScanResultRead.model_validate(result)


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint that streams the caller's live notification feed."""

    user_id = (websocket.query_params.get("user_id") or "").strip()
    if not user_id:
        await websocket.close(code=1008)
        return

    container: Container = websocket.app.state.container
    manager = container.connections
    publisher = WebSocketFeedPublisher(manager, user_id, websocket)
    feed = NotificationFeed(
        container.notifications,
        container.user_settings,
        publisher,
        alert_seconds=container.settings.notification_alert_seconds,
    )

    await manager.connect(user_id, websocket)
    try:
        await feed.start(user_id)
        await websocket.send_json({"type": "init", "data": serialize_feed(feed)})
        feed.listener = publisher
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "read" and isinstance(message.get("id"), str):
                await feed.mark_as_read(message["id"])
            elif message_type == "read_all":
                await feed.mark_all_as_read(user_id)
            elif message_type == "delete" and isinstance(message.get("id"), str):
                await feed.delete(message["id"])
            elif message_type == "clear":
                await feed.clear_all(user_id)
    except WebSocketDisconnect:
        logger.debug("Notification websocket closed for user %s", user_id)
    except StoreError:
        logger.exception("Notification websocket aborted for user %s", user_id)
        await websocket.close(code=1011)
    finally:
        feed.stop()
        publisher.close()
        manager.disconnect(user_id, websocket)


async def _ensure_owned(
    repository: NotificationRepository, notification_id: str, user_id: str
) -> None:
    try:
        notification = await repository.get(notification_id)
    except StoreError as exc:
        raise http_error_for(exc) from exc
    if notification is None or notification.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notificação não encontrada",
        )
