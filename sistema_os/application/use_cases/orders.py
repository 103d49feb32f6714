"""Use cases for creating service orders and moving them between statuses."""

from __future__ import annotations

import logging

from sistema_os.application.ports import NotificationStore
from sistema_os.domain.entities import ORDER_STATUSES, ServiceOrder
from sistema_os.domain.errors import NotFound
from sistema_os.infrastructure.repositories import ClientRepository, OrderRepository

from .notifications import (
    NotificationFactory,
    NotificationResult,
    notify_order_status_changed,
)

logger = logging.getLogger(__name__)


def _validate_status(status: str) -> None:
    if status not in ORDER_STATUSES:
        raise ValueError(f"Status inválido: {status}")


async def create_order(
    orders: OrderRepository,
    clients: ClientRepository,
    order: ServiceOrder,
) -> ServiceOrder:
    """Persist ``order`` after checking its status and client reference."""

    _validate_status(order.status)
    if order.client_id is not None and await clients.get(order.client_id) is None:
        raise NotFound("Cliente não encontrado")
    return await orders.create(order)


async def change_order_status(
    orders: OrderRepository,
    notifications: NotificationStore,
    factory: NotificationFactory,
    *,
    order_id: str,
    status: str,
    user_id: str,
) -> tuple[ServiceOrder, NotificationResult | None]:
    """Update the order status and notify ``user_id`` when it actually changed."""

    _validate_status(status)
    current = await orders.get(order_id)
    if current is None:
        raise NotFound("Ordem de serviço não encontrada")
    if current.status == status:
        return current, None

    updated = await orders.update_status(order_id, status)
    result = await notify_order_status_changed(
        notifications, factory, user_id=user_id, order=updated
    )
    if not result.success:
        logger.warning(
            "Order %s changed to %s but the notification failed: %s",
            updated.order_number,
            status,
            result.error,
        )
    return updated, result


__all__ = ["change_order_status", "create_order"]
