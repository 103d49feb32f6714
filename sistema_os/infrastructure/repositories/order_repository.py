"""Persistence layer for service orders and their clients."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from sistema_os.domain.entities import ORDER_STATUS_COMPLETED, Client, ServiceOrder
from sistema_os.domain.errors import NotFound
from sistema_os.infrastructure.database import session_scope
from sistema_os.infrastructure.models import ClientModel, ServiceOrderModel
from sistema_os.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_naive_datetime,
)


class ClientRepository:
    """Minimal client storage used to label service orders."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, client_id: str) -> Client | None:
        async with session_scope(self._session_factory) as session:
            model = await session.get(ClientModel, client_id)
            return self._to_entity(model) if model else None

    async def create(self, client: Client) -> Client:
        model = ClientModel(
            id=client.id or str(uuid4()),
            full_name=client.full_name,
            email=client.email,
            phone=client.phone,
        )
        async with session_scope(self._session_factory) as session:
            session.add(model)
            await session.commit()
            return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ClientModel) -> Client:
        return Client(
            id=model.id,
            full_name=model.full_name,
            email=model.email,
            phone=model.phone,
        )


class OrderRepository:
    """Provide the order queries used by reminders and status updates."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def select_by_status_in(
        self, statuses: Iterable[str], *, has_expected_date: bool = True
    ) -> Sequence[ServiceOrder]:
        statement = select(ServiceOrderModel).where(
            ServiceOrderModel.status.in_(list(statuses))
        )
        if has_expected_date:
            statement = statement.where(
                ServiceOrderModel.expected_completion_date.is_not(None)
            )
        statement = statement.order_by(ServiceOrderModel.expected_completion_date.asc())
        async with session_scope(self._session_factory) as session:
            models = (await session.scalars(statement)).unique().all()
            return [self._to_entity(model) for model in models]

    async def list(self, *, skip: int = 0, limit: int = 100) -> Sequence[ServiceOrder]:
        statement = (
            select(ServiceOrderModel)
            .order_by(ServiceOrderModel.created_at.desc())
            .offset(skip)
            .limit(limit)
        )
        async with session_scope(self._session_factory) as session:
            models = (await session.scalars(statement)).unique().all()
            return [self._to_entity(model) for model in models]

    async def get(self, order_id: str) -> ServiceOrder | None:
        async with session_scope(self._session_factory) as session:
            model = await session.get(ServiceOrderModel, order_id)
            return self._to_entity(model) if model else None

    async def create(self, order: ServiceOrder) -> ServiceOrder:
        model = ServiceOrderModel(
            id=order.id or str(uuid4()),
            order_number=order.order_number,
            client_id=order.client_id,
            description=order.description,
            status=order.status,
            open_date=ensure_app_naive_datetime(order.open_date)
            or now_in_app_naive_datetime(),
            expected_completion_date=ensure_app_naive_datetime(
                order.expected_completion_date
            ),
            completion_date=ensure_app_naive_datetime(order.completion_date),
            observations=order.observations,
        )
        async with session_scope(self._session_factory) as session:
            session.add(model)
            await session.commit()
            order_id = model.id
        created = await self.get(order_id)
        if created is None:  # pragma: no cover - row vanished between statements
            raise NotFound(f"Service order with id {order_id} not found")
        return created

    async def update_status(self, order_id: str, status: str) -> ServiceOrder:
        async with session_scope(self._session_factory) as session:
            model = await session.get(ServiceOrderModel, order_id)
            if model is None:
                raise NotFound(f"Service order with id {order_id} not found")
            model.status = status
            if status == ORDER_STATUS_COMPLETED and model.completion_date is None:
                model.completion_date = now_in_app_naive_datetime()
            await session.commit()
            return self._to_entity(model)

    @staticmethod
    def _to_entity(model: ServiceOrderModel) -> ServiceOrder:
        return ServiceOrder(
            id=model.id,
            order_number=model.order_number,
            client_id=model.client_id,
            description=model.description or "",
            status=model.status,
            open_date=ensure_app_timezone(model.open_date),
            expected_completion_date=ensure_app_timezone(model.expected_completion_date),
            completion_date=ensure_app_timezone(model.completion_date),
            observations=model.observations,
            client_name=model.client.full_name if model.client else None,
        )


__all__ = ["ClientRepository", "OrderRepository"]
