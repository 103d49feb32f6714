"""Builders for the notification records emitted by domain events."""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import uuid4

from sistema_os.domain.entities import (
    NOTIFICATION_TYPE_DEADLINE_REMINDER,
    NOTIFICATION_TYPE_ORDER_UPDATE,
    NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT,
    ORDER_STATUS_CANCELED,
    ORDER_STATUS_COMPLETED,
    ORDER_STATUS_IN_PROGRESS,
    ORDER_STATUS_OPEN,
    Notification,
)
from sistema_os.utils import Clock, ensure_app_timezone, format_br_date, now_in_app_timezone

ORDER_STATUS_LABELS = {
    ORDER_STATUS_OPEN: "Aberta",
    ORDER_STATUS_IN_PROGRESS: "Em Andamento",
    ORDER_STATUS_COMPLETED: "Concluída",
    ORDER_STATUS_CANCELED: "Cancelada",
}

WELCOME_TITLE = "Bem-vindo ao Sistema OS"
WELCOME_MESSAGE = (
    "Bem-vindo ao Sistema de Ordens de Serviço. Você receberá notificações sobre "
    "atualizações de ordens de serviço, lembretes de prazos e anúncios do sistema."
)


class NotificationFactory:
    """Construct unread notification records without touching any store."""

    def __init__(self, clock: Clock = now_in_app_timezone) -> None:
        self._clock = clock

    def build_order_update(
        self, user_id: str, order_number: str, status: str, client_name: str
    ) -> Notification:
        label = ORDER_STATUS_LABELS.get(status, status)
        return self._build(
            user_id,
            NOTIFICATION_TYPE_ORDER_UPDATE,
            title=f"Atualização de Ordem de Serviço #{order_number}",
            message=(
                f"A ordem de serviço #{order_number} para {client_name} "
                f"foi atualizada para {label}."
            ),
            data={"orderNumber": order_number, "status": status},
        )

    def build_deadline_reminder(
        self,
        user_id: str,
        order_number: str,
        client_name: str,
        days_remaining: int,
        expected_date: datetime,
    ) -> Notification:
        """Build the reminder for an order due in ``days_remaining`` days.

        Negative ``days_remaining`` values describe an overdue order.
        """

        formatted_date = format_br_date(expected_date)
        prefix = f"A ordem de serviço #{order_number} para {client_name}"
        if days_remaining == 0:
            message = f"{prefix} vence hoje ({formatted_date})!"
        elif days_remaining == 1:
            message = f"{prefix} vence amanhã ({formatted_date})!"
        elif days_remaining < 0:
            message = (
                f"{prefix} está atrasada! Deveria ter sido concluída em {formatted_date}."
            )
        else:
            message = f"{prefix} vence em {days_remaining} dias ({formatted_date})."

        return self._build(
            user_id,
            NOTIFICATION_TYPE_DEADLINE_REMINDER,
            title=f"Lembrete de Prazo: OS #{order_number}",
            message=message,
            data={
                "orderNumber": order_number,
                "daysRemaining": days_remaining,
                "expectedDate": ensure_app_timezone(expected_date).isoformat(),
            },
        )

    def build_system_announcement(
        self,
        user_id: str,
        title: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> Notification:
        return self._build(
            user_id,
            NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT,
            title=title,
            message=message,
            data=data,
        )

    def build_welcome(self, user_id: str) -> Notification:
        return self.build_system_announcement(user_id, WELCOME_TITLE, WELCOME_MESSAGE)

    def _build(
        self,
        user_id: str,
        notification_type: str,
        *,
        title: str,
        message: str,
        data: dict[str, Any] | None,
    ) -> Notification:
        return Notification(
            id=str(uuid4()),
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
            read=False,
            created_at=self._clock(),
            data=dict(data or {}),
        )


__all__ = ["NotificationFactory", "ORDER_STATUS_LABELS"]
