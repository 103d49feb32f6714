"""Repository tests against a throwaway SQLite database."""

from __future__ import annotations

from datetime import timedelta

import pytest

from sistema_os.application.use_cases.notifications import NotificationFactory
from sistema_os.config import Settings
from sistema_os.container import build_container
from sistema_os.domain.entities import Client, ServiceOrder
from sistema_os.domain.errors import NotFound
from sistema_os.infrastructure.database import initialize_database
from sistema_os.utils import now_in_app_timezone

pytestmark = pytest.mark.anyio


@pytest.fixture
async def container(tmp_path):
    settings = Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        scheduler_enabled=False,
    )
    container = build_container(settings)
    await initialize_database(container.engine)
    yield container
    await container.engine.dispose()


@pytest.fixture
def factory(clock) -> NotificationFactory:
    return NotificationFactory(clock=clock)


class EventRecorder:
    def __init__(self) -> None:
        self.events: list[tuple[str, object]] = []

    def on_insert(self, notification) -> None:
        self.events.append(("insert", notification.id))

    def on_update(self, notification) -> None:
        self.events.append(("update", notification.id))

    def on_delete(self, notification_id) -> None:
        self.events.append(("delete", notification_id))


async def test_insert_and_select_newest_first(container, factory, clock):
    repository = container.notifications
    first = await repository.insert(factory.build_welcome("user-1"))
    clock.advance(timedelta(minutes=5))
    second = await repository.insert(
        factory.build_system_announcement("user-1", "Aviso", "Texto", {"k": 1})
    )
    await repository.insert(factory.build_welcome("user-2"))

    newest = await repository.select_by_user("user-1")
    oldest = await repository.select_by_user("user-1", newest_first=False)

    assert [row.id for row in newest] == [second.id, first.id]
    assert [row.id for row in oldest] == [first.id, second.id]
    assert newest[0].data == {"k": 1}
    assert newest[0].created_at == clock.now
    assert newest[0].read is False


async def test_update_applies_fields_and_rejects_unknown(container, factory):
    repository = container.notifications
    stored = await repository.insert(factory.build_welcome("user-1"))

    updated = await repository.update(stored.id, {"read": True})

    assert updated.read is True
    assert (await repository.get(stored.id)).read is True
    with pytest.raises(ValueError):
        await repository.update(stored.id, {"user_id": "user-2"})


async def test_update_and_delete_missing_row_raise_not_found(container):
    with pytest.raises(NotFound):
        await container.notifications.update("missing", {"read": True})
    with pytest.raises(NotFound):
        await container.notifications.delete("missing")


async def test_writes_publish_change_events(container, factory):
    repository = container.notifications
    recorder = EventRecorder()
    unsubscribe = repository.subscribe(
        "user-1", recorder.on_insert, recorder.on_update, recorder.on_delete
    )

    stored = await repository.insert(factory.build_welcome("user-1"))
    await repository.insert(factory.build_welcome("user-2"))
    await repository.update(stored.id, {"read": True})
    await repository.delete(stored.id)
    unsubscribe()
    await repository.insert(factory.build_welcome("user-1"))

    assert recorder.events == [
        ("insert", stored.id),
        ("update", stored.id),
        ("delete", stored.id),
    ]


async def test_mark_all_read_and_delete_by_user(container, factory):
    repository = container.notifications
    for _ in range(3):
        await repository.insert(factory.build_welcome("user-1"))
    await repository.insert(factory.build_welcome("user-2"))

    assert await repository.mark_all_read("user-1") == 3
    assert await repository.mark_all_read("user-1") == 0
    assert all(row.read for row in await repository.select_by_user("user-1"))
    assert (await repository.select_by_user("user-2"))[0].read is False

    assert await repository.delete_by_user("user-1") == 3
    assert await repository.select_by_user("user-1") == []
    assert len(await repository.select_by_user("user-2")) == 1


async def test_settings_are_created_once_with_defaults(container):
    settings, created = await container.user_settings.get_or_create("user-1")
    again, created_again = await container.user_settings.get_or_create("user-1")

    assert created is True
    assert created_again is False
    assert settings.language == "pt-BR"
    assert again.notifications.as_dict() == {
        "order_updates": True,
        "deadline_reminders": True,
        "system_announcements": True,
        "email_notifications": True,
    }
    assert await container.user_settings.list_user_ids() == ["user-1"]


async def test_update_preferences_persists_and_publishes(container):
    received = []
    container.user_settings.subscribe("user-1", received.append)

    updated = await container.user_settings.update_preferences(
        "user-1", {"deadline_reminders": False, "unknown_flag": True}
    )

    assert updated.deadline_reminders is False
    assert received == [updated]
    reloaded = await container.user_settings.get_preferences("user-1")
    assert reloaded.deadline_reminders is False
    assert reloaded.order_updates is True


async def test_orders_by_status_with_client_name(container):
    client = await container.clients.create(Client(id=None, full_name="Maria Souza"))
    now = now_in_app_timezone()
    for number, status, due in [
        ("2024-001", "open", now + timedelta(days=3)),
        ("2024-002", "in_progress", now + timedelta(days=1)),
        ("2024-003", "completed", now + timedelta(days=1)),
        ("2024-004", "open", None),
    ]:
        await container.orders.create(
            ServiceOrder(
                id=None,
                order_number=number,
                client_id=client.id,
                description="Serviço",
                status=status,
                expected_completion_date=due,
            )
        )

    pending = await container.orders.select_by_status_in(["open", "in_progress"])

    assert [order.order_number for order in pending] == ["2024-002", "2024-001"]
    assert {order.client_name for order in pending} == {"Maria Souza"}


async def test_update_status_sets_completion_date(container):
    created = await container.orders.create(
        ServiceOrder(
            id=None,
            order_number="2024-010",
            client_id=None,
            description="",
            status="open",
        )
    )

    completed = await container.orders.update_status(created.id, "completed")

    assert completed.status == "completed"
    assert completed.completion_date is not None
    with pytest.raises(NotFound):
        await container.orders.update_status("missing", "completed")


async def test_scan_over_stored_order_due_tomorrow(container):
    client = await container.clients.create(Client(id=None, full_name="João Lima"))
    await container.orders.create(
        ServiceOrder(
            id=None,
            order_number="2024-007",
            client_id=client.id,
            description="Conserto",
            status="open",
            expected_completion_date=now_in_app_timezone() + timedelta(days=1),
        )
    )

    result = await container.scanner.scan("user-1")

    assert result.success is True
    assert result.order_numbers == ["2024-007"]
    reminders = await container.notifications.select_by_user("user-1")
    assert len(reminders) == 1
    assert reminders[0].type == "deadline_reminder"
    assert "vence amanhã" in reminders[0].message
    assert "João Lima" in reminders[0].message
    assert reminders[0].data["orderNumber"] == "2024-007"
