"""Persistence of per-user settings documents."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sistema_os.application.ports import PreferencesCallback, Unsubscribe
from sistema_os.domain.entities import NotificationPreferences, UserSettings
from sistema_os.infrastructure.database import session_scope
from sistema_os.infrastructure.models import UserSettingsModel
from sistema_os.infrastructure.notifications.changes import PreferencesChangeHub

logger = logging.getLogger(__name__)


class SettingsRepository:
    """Read and update user settings, announcing preference changes."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        changes: PreferencesChangeHub,
    ) -> None:
        self._session_factory = session_factory
        self._changes = changes

    async def get_or_create(self, user_id: str) -> tuple[UserSettings, bool]:
        """Return the user's settings, storing the defaults on first access.

        The flag is ``True`` when the defaults were created by this call.
        """

        async with session_scope(self._session_factory) as session:
            model = await self._get_model(session, user_id)
            if model is not None:
                return UserSettings.from_document(user_id, model.settings), False

            defaults = UserSettings(user_id=user_id)
            session.add(
                UserSettingsModel(
                    id=str(uuid4()),
                    user_id=user_id,
                    settings=defaults.to_document(),
                )
            )
            await session.commit()
        logger.info("Created default settings for user %s", user_id)
        return defaults, True

    async def get_preferences(self, user_id: str) -> NotificationPreferences:
        settings, _ = await self.get_or_create(user_id)
        return settings.notifications

    async def update_preferences(
        self, user_id: str, changes: dict[str, Any]
    ) -> NotificationPreferences:
        """Merge ``changes`` into the stored flags and notify subscribers."""

        async with session_scope(self._session_factory) as session:
            model = await self._get_model(session, user_id)
            if model is None:
                model = UserSettingsModel(
                    id=str(uuid4()),
                    user_id=user_id,
                    settings=UserSettings(user_id=user_id).to_document(),
                )
                session.add(model)
            current = UserSettings.from_document(user_id, model.settings)
            current.notifications = current.notifications.merged(changes)
            model.settings = current.to_document()
            await session.commit()

        self._changes.publish(user_id, current.notifications)
        return current.notifications

    async def list_user_ids(self) -> Sequence[str]:
        statement = select(UserSettingsModel.user_id).order_by(UserSettingsModel.user_id)
        async with session_scope(self._session_factory) as session:
            return list((await session.scalars(statement)).all())

    def subscribe(self, user_id: str, callback: PreferencesCallback) -> Unsubscribe:
        return self._changes.subscribe(user_id, callback)

    @staticmethod
    async def _get_model(session: AsyncSession, user_id: str) -> UserSettingsModel | None:
        statement = select(UserSettingsModel).where(UserSettingsModel.user_id == user_id)
        return (await session.scalars(statement)).first()


__all__ = ["SettingsRepository"]
