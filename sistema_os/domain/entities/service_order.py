"""Domain entities for service orders and the clients they belong to."""

from dataclasses import dataclass
from datetime import datetime

ORDER_STATUS_OPEN = "open"
ORDER_STATUS_IN_PROGRESS = "in_progress"
ORDER_STATUS_COMPLETED = "completed"
ORDER_STATUS_CANCELED = "canceled"

ORDER_STATUSES = (
    ORDER_STATUS_OPEN,
    ORDER_STATUS_IN_PROGRESS,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_CANCELED,
)
PENDING_ORDER_STATUSES = (ORDER_STATUS_OPEN, ORDER_STATUS_IN_PROGRESS)


@dataclass
class Client:
    """Customer a service order is performed for."""

    id: str | None
    full_name: str
    email: str | None = None
    phone: str | None = None


@dataclass
class ServiceOrder:
    """Work requested by a client and tracked until completion."""

    id: str | None
    order_number: str
    client_id: str | None
    description: str
    status: str
    open_date: datetime | None = None
    expected_completion_date: datetime | None = None
    completion_date: datetime | None = None
    observations: str | None = None
    client_name: str | None = None


__all__ = [
    "Client",
    "ServiceOrder",
    "ORDER_STATUSES",
    "PENDING_ORDER_STATUSES",
    "ORDER_STATUS_OPEN",
    "ORDER_STATUS_IN_PROGRESS",
    "ORDER_STATUS_COMPLETED",
    "ORDER_STATUS_CANCELED",
]
