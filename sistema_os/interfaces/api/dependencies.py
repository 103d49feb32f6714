"""FastAPI dependency utilities."""

from fastapi import Depends, Header, HTTPException, Request, status

from sistema_os.container import Container
from sistema_os.infrastructure.repositories import NotificationRepository


def get_container(request: Request) -> Container:
    """Return the container built during application startup."""

    return request.app.state.container


def get_current_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str:
    """Return the caller identity forwarded by the authentication gateway."""

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuário não autenticado",
        )
    return user_id


def get_notification_repository(
    container: Container = Depends(get_container),
) -> NotificationRepository:
    return container.notifications

