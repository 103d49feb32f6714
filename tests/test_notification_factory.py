"""Tests for the notification builders."""

from datetime import datetime, timedelta

import pytest

from sistema_os.application.use_cases.notifications import NotificationFactory
from sistema_os.domain.entities import (
    NOTIFICATION_TYPE_DEADLINE_REMINDER,
    NOTIFICATION_TYPE_ORDER_UPDATE,
    NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT,
)
from sistema_os.utils import ensure_app_timezone


@pytest.fixture
def factory(clock) -> NotificationFactory:
    return NotificationFactory(clock=clock)


@pytest.mark.parametrize(
    ("days_remaining", "expected_fragment"),
    [
        (0, "vence hoje (12/05/2024)!"),
        (1, "vence amanhã (12/05/2024)!"),
        (-3, "está atrasada! Deveria ter sido concluída em 12/05/2024."),
        (5, "vence em 5 dias (12/05/2024)."),
        (2, "vence em 2 dias"),
    ],
)
def test_deadline_reminder_message_branches(factory, days_remaining, expected_fragment):
    expected_date = ensure_app_timezone(datetime(2024, 5, 12, 18, 0))

    notification = factory.build_deadline_reminder(
        "user-1", "2024-007", "Maria Souza", days_remaining, expected_date
    )

    assert notification.type == NOTIFICATION_TYPE_DEADLINE_REMINDER
    assert notification.title == "Lembrete de Prazo: OS #2024-007"
    assert notification.message.startswith("A ordem de serviço #2024-007 para Maria Souza")
    assert expected_fragment in notification.message
    assert notification.data == {
        "orderNumber": "2024-007",
        "daysRemaining": days_remaining,
        "expectedDate": expected_date.isoformat(),
    }


def test_order_update_uses_localized_status_label(factory, clock):
    notification = factory.build_order_update("user-1", "2024-010", "in_progress", "ACME")

    assert notification.type == NOTIFICATION_TYPE_ORDER_UPDATE
    assert notification.title == "Atualização de Ordem de Serviço #2024-010"
    assert notification.message == (
        "A ordem de serviço #2024-010 para ACME foi atualizada para Em Andamento."
    )
    assert notification.data == {"orderNumber": "2024-010", "status": "in_progress"}
    assert notification.read is False
    assert notification.created_at == clock.now
    assert notification.user_id == "user-1"


def test_order_update_keeps_unknown_status_verbatim(factory):
    notification = factory.build_order_update("user-1", "1", "on_hold", "ACME")

    assert notification.message.endswith("foi atualizada para on_hold.")


def test_system_announcement_and_welcome(factory):
    announcement = factory.build_system_announcement(
        "user-2", "Manutenção", "Sistema indisponível às 22h", {"window": "22h"}
    )
    welcome = factory.build_welcome("user-2")

    assert announcement.type == NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT
    assert announcement.data == {"window": "22h"}
    assert welcome.type == NOTIFICATION_TYPE_SYSTEM_ANNOUNCEMENT
    assert welcome.title == "Bem-vindo ao Sistema OS"
    assert welcome.data == {}


def test_each_notification_gets_a_fresh_id(factory, clock):
    first = factory.build_welcome("user-1")
    clock.advance(timedelta(minutes=1))
    second = factory.build_welcome("user-1")

    assert first.id != second.id
    assert second.created_at > first.created_at
