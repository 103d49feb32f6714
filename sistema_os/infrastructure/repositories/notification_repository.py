"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sistema_os.application.ports import (
    DeleteCallback,
    NotificationCallback,
    Unsubscribe,
)
from sistema_os.domain.entities import Notification
from sistema_os.domain.errors import NotFound
from sistema_os.infrastructure.database import session_scope
from sistema_os.infrastructure.models import NotificationModel
from sistema_os.infrastructure.notifications.changes import NotificationChangeHub
from sistema_os.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)

_UPDATABLE_FIELDS = frozenset({"read", "title", "message", "data"})


class NotificationRepository:
    """Provide CRUD operations and change events for :class:`Notification` rows."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        changes: NotificationChangeHub,
    ) -> None:
        self._session_factory = session_factory
        self._changes = changes

    async def select_by_user(
        self, user_id: str, *, newest_first: bool = True
    ) -> Sequence[Notification]:
        if newest_first:
            ordering = (NotificationModel.created_at.desc(), NotificationModel.id.desc())
        else:
            ordering = (NotificationModel.created_at.asc(), NotificationModel.id.asc())
        statement = (
            select(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .order_by(*ordering)
        )
        async with session_scope(self._session_factory) as session:
            models = (await session.scalars(statement)).all()
            return [self._to_entity(model) for model in models]

    async def get(self, notification_id: str) -> Notification | None:
        async with session_scope(self._session_factory) as session:
            model = await session.get(NotificationModel, notification_id)
            return self._to_entity(model) if model else None

    async def insert(self, notification: Notification) -> Notification:
        model = NotificationModel(
            id=notification.id or str(uuid4()),
            user_id=notification.user_id,
            type=notification.type,
            title=notification.title,
            message=notification.message,
            read=notification.read,
            created_at=(
                ensure_app_naive_datetime(notification.created_at)
                or now_in_app_naive_datetime()
            ),
            data=dict(notification.data or {}),
        )
        async with session_scope(self._session_factory) as session:
            session.add(model)
            await session.commit()
            saved = self._to_entity(model)
        self._changes.publish_insert(saved)
        return saved

    async def update(self, notification_id: str, fields: dict[str, Any]) -> Notification:
        unknown = set(fields) - _UPDATABLE_FIELDS
        if unknown:
            msg = f"Unsupported notification fields: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        async with session_scope(self._session_factory) as session:
            model = await session.get(NotificationModel, notification_id)
            if model is None:
                raise NotFound(f"Notification with id {notification_id} not found")
            for name, value in fields.items():
                setattr(model, name, value)
            await session.commit()
            saved = self._to_entity(model)
        self._changes.publish_update(saved)
        return saved

    async def delete(self, notification_id: str) -> None:
        async with session_scope(self._session_factory) as session:
            model = await session.get(NotificationModel, notification_id)
            if model is None:
                raise NotFound(f"Notification with id {notification_id} not found")
            user_id = model.user_id
            await session.delete(model)
            await session.commit()
        self._changes.publish_delete(user_id, notification_id)

    async def mark_all_read(self, user_id: str) -> int:
        statement = select(NotificationModel).where(
            NotificationModel.user_id == user_id,
            NotificationModel.read.is_(False),
        )
        async with session_scope(self._session_factory) as session:
            models = (await session.scalars(statement)).all()
            for model in models:
                model.read = True
            await session.commit()
            updated = [self._to_entity(model) for model in models]
        for notification in updated:
            self._changes.publish_update(notification)
        return len(updated)

    async def delete_by_user(self, user_id: str) -> int:
        statement = select(NotificationModel).where(NotificationModel.user_id == user_id)
        async with session_scope(self._session_factory) as session:
            models = (await session.scalars(statement)).all()
            deleted_ids = [model.id for model in models]
            for model in models:
                await session.delete(model)
            await session.commit()
        for notification_id in deleted_ids:
            self._changes.publish_delete(user_id, notification_id)
        return len(deleted_ids)

    def subscribe(
        self,
        user_id: str,
        on_insert: NotificationCallback,
        on_update: NotificationCallback,
        on_delete: DeleteCallback,
    ) -> Unsubscribe:
        return self._changes.subscribe(user_id, on_insert, on_update, on_delete)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=model.type,
            title=model.title,
            message=model.message,
            read=bool(model.read),
            created_at=ensure_app_timezone(model.created_at),
            data=dict(model.data or {}),
        )


__all__ = ["NotificationRepository"]
