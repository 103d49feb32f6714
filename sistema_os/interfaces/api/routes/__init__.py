from fastapi import FastAPI

from .notifications import router as notifications_router
from .orders import router as orders_router
from .settings import router as settings_router


def register_routes(app: FastAPI) -> None:
    """Registra todos os routers da API na aplicação FastAPI."""

    app.include_router(notifications_router)
    app.include_router(orders_router)
    app.include_router(settings_router)
