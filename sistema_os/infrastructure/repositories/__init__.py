"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .order_repository import ClientRepository, OrderRepository
from .settings_repository import SettingsRepository

__all__ = [
    "ClientRepository",
    "NotificationRepository",
    "OrderRepository",
    "SettingsRepository",
]
