"""Use cases for the notification preferences of a user."""

from __future__ import annotations

from typing import Any

from sistema_os.application.ports import NotificationStore
from sistema_os.domain.entities import NotificationPreferences, UserSettings
from sistema_os.infrastructure.repositories import SettingsRepository

from .notifications import NotificationFactory, send_welcome_notification


async def load_user_settings(
    settings: SettingsRepository,
    notifications: NotificationStore,
    factory: NotificationFactory,
    *,
    user_id: str,
) -> UserSettings:
    """Return the settings of ``user_id``, welcoming users seen for the first time."""

    user_settings, created = await settings.get_or_create(user_id)
    if created:
        await send_welcome_notification(notifications, factory, user_id=user_id)
    return user_settings


async def update_notification_preferences(
    settings: SettingsRepository, *, user_id: str, changes: dict[str, Any]
) -> NotificationPreferences:
    """Apply the provided flags; subscribed feeds reload on their own."""

    return await settings.update_preferences(user_id, changes)


__all__ = ["load_user_settings", "update_notification_preferences"]
