"""Endpoints managing the caller's notification preferences."""

from fastapi import APIRouter, Depends

from sistema_os.application.use_cases.settings import (
    load_user_settings,
    update_notification_preferences,
)
from sistema_os.container import Container
from sistema_os.domain.errors import StoreError
from sistema_os.interfaces.api.dependencies import get_container, get_current_user_id
from sistema_os.interfaces.api.routes_helpers import http_error_for
from sistema_os.interfaces.api.schemas import (
    NotificationPreferencesRead,
    NotificationPreferencesUpdate,
)

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("/notifications", response_model=NotificationPreferencesRead)
async def read_notification_preferences(
    container: Container = Depends(get_container),
    user_id: str = Depends(get_current_user_id),
) -> NotificationPreferencesRead:
    try:
        settings = await load_user_settings(
            container.user_settings,
            container.notifications,
            container.factory,
            user_id=user_id,
        )
    except StoreError as exc:
        raise http_error_for(exc) from exc
    return NotificationPreferencesRead.model_validate(settings.notifications)


@router.put("/notifications", response_model=NotificationPreferencesRead)
async def update_preferences(
    payload: NotificationPreferencesUpdate,
    container: Container = Depends(get_container),
    user_id: str = Depends(get_current_user_id),
) -> NotificationPreferencesRead:
    """Store the provided flags; open feeds of the caller reload immediately."""

    try:
        preferences = await update_notification_preferences(
            container.user_settings, user_id=user_id, changes=payload.changes()
        )
    except StoreError as exc:
        raise http_error_for(exc) from exc
    return NotificationPreferencesRead.model_validate(preferences)
