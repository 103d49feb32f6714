"""ORM models used by the application infrastructure."""

from .notification import NotificationModel
from .service_order import ClientModel, ServiceOrderModel
from .user_settings import UserSettingsModel

__all__ = [
    "ClientModel",
    "NotificationModel",
    "ServiceOrderModel",
    "UserSettingsModel",
]
