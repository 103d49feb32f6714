from .notification import (
    AnnouncementCreate,
    BulkActionRead,
    NotificationFeedRead,
    NotificationRead,
    ScanFailureRead,
    ScanResultRead,
)
from .order import OrderCreate, OrderRead, OrderStatusUpdate
from .settings import NotificationPreferencesRead, NotificationPreferencesUpdate

__all__ = [
    "AnnouncementCreate",
    "BulkActionRead",
    "NotificationFeedRead",
    "NotificationPreferencesRead",
    "NotificationPreferencesUpdate",
    "NotificationRead",
    "OrderCreate",
    "OrderRead",
    "OrderStatusUpdate",
    "ScanFailureRead",
    "ScanResultRead",
]
