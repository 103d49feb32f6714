"""Endpoints for the service orders that feed deadline reminders."""

from fastapi import APIRouter, Depends, status

from sistema_os.application.use_cases.orders import change_order_status, create_order
from sistema_os.container import Container
from sistema_os.domain.entities import ServiceOrder
from sistema_os.domain.errors import NotFound, StoreError
from sistema_os.interfaces.api.dependencies import get_container, get_current_user_id
from sistema_os.interfaces.api.routes_helpers import http_error_for
from sistema_os.interfaces.api.schemas import OrderCreate, OrderRead, OrderStatusUpdate

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
async def create_order_endpoint(
    payload: OrderCreate,
    container: Container = Depends(get_container),
    _: str = Depends(get_current_user_id),
) -> OrderRead:
    order = ServiceOrder(
        id=None,
        order_number=payload.order_number,
        client_id=payload.client_id,
        description=payload.description,
        status=payload.status,
        expected_completion_date=payload.expected_completion_date,
        observations=payload.observations,
    )
    try:
        created = await create_order(container.orders, container.clients, order)
    except (ValueError, NotFound, StoreError) as exc:
        raise http_error_for(exc) from exc
    return OrderRead.model_validate(created)


@router.get("/", response_model=list[OrderRead])
async def list_orders(
    skip: int = 0,
    limit: int = 100,
    container: Container = Depends(get_container),
    _: str = Depends(get_current_user_id),
) -> list[OrderRead]:
    try:
        orders = await container.orders.list(skip=skip, limit=limit)
    except StoreError as exc:
        raise http_error_for(exc) from exc
    return [OrderRead.model_validate(order) for order in orders]


@router.patch("/{order_id}/status", response_model=OrderRead)
async def update_order_status(
    order_id: str,
    payload: OrderStatusUpdate,
    container: Container = Depends(get_container),
    user_id: str = Depends(get_current_user_id),
) -> OrderRead:
    """Move the order to ``payload.status`` and notify the caller."""

    try:
        updated, _ = await change_order_status(
            container.orders,
            container.notifications,
            container.factory,
            order_id=order_id,
            status=payload.status,
            user_id=user_id,
        )
    except (ValueError, NotFound, StoreError) as exc:
        raise http_error_for(exc) from exc
    return OrderRead.model_validate(updated)
