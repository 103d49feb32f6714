"""Tests for the periodic deadline scan."""

from __future__ import annotations

from datetime import timedelta

import anyio
import pytest

from sistema_os.application.use_cases.notifications import (
    DeadlineScanner,
    NotificationFactory,
)
from sistema_os.domain.entities import ServiceOrder
from sistema_os.infrastructure.scheduler import (
    ONE_HOUR_SECONDS,
    DeadlineReminderScheduler,
)

pytestmark = pytest.mark.anyio


class ManualSleep:
    """Sleep replacement that only returns when the test releases it."""

    def __init__(self, clock) -> None:
        self.clock = clock
        self.calls: list[float] = []
        self._waiters: list[anyio.Event] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        event = anyio.Event()
        self._waiters.append(event)
        await event.wait()
        self.clock.advance(timedelta(seconds=seconds))

    def release(self) -> None:
        waiters, self._waiters = self._waiters, []
        for event in waiters:
            event.set()


async def _settle() -> None:
    for _ in range(10):
        await anyio.sleep(0)


@pytest.fixture
def sleep(clock) -> ManualSleep:
    return ManualSleep(clock)


@pytest.fixture
def scanner(order_store, notification_store, clock) -> DeadlineScanner:
    order_store.orders = [
        ServiceOrder(
            id="order-1",
            order_number="2024-001",
            client_id=None,
            description="Revisão",
            status="open",
            expected_completion_date=clock.now + timedelta(hours=30),
            client_name="ACME",
        )
    ]
    return DeadlineScanner(
        order_store,
        notification_store,
        NotificationFactory(clock=clock),
        clock=clock,
    )


def _recipients(*user_ids):
    async def provider():
        return list(user_ids)

    return provider


async def test_first_scan_runs_immediately(scanner, sleep, notification_store):
    scheduler = DeadlineReminderScheduler(
        scanner, _recipients("user-1"), interval=ONE_HOUR_SECONDS, sleep=sleep
    )

    scheduler.start()
    await _settle()

    assert scheduler.running is True
    assert scheduler.runs == 1
    assert sleep.calls == [ONE_HOUR_SECONDS]
    assert len(notification_store.inserted) == 1
    await scheduler.stop()


async def test_one_scan_per_interval(scanner, sleep, notification_store):
    scheduler = DeadlineReminderScheduler(
        scanner, _recipients("user-1"), interval=ONE_HOUR_SECONDS, sleep=sleep
    )
    scheduler.start()
    await _settle()

    for _ in range(3):
        sleep.release()
        await _settle()

    assert scheduler.runs == 4
    assert sleep.calls == [ONE_HOUR_SECONDS] * 4
    assert len(notification_store.inserted) == 4
    await scheduler.stop()


async def test_start_twice_keeps_a_single_loop(scanner, sleep):
    scheduler = DeadlineReminderScheduler(scanner, _recipients("user-1"), sleep=sleep)

    scheduler.start()
    scheduler.start()
    await _settle()

    assert scheduler.runs == 1
    assert len(sleep.calls) == 1
    await scheduler.stop()


async def test_stop_cancels_the_loop(scanner, sleep):
    scheduler = DeadlineReminderScheduler(scanner, _recipients("user-1"), sleep=sleep)
    scheduler.start()
    await _settle()

    await scheduler.stop()
    sleep.release()
    await _settle()

    assert scheduler.running is False
    assert scheduler.runs == 1


async def test_stop_before_start_is_harmless(scanner, sleep):
    scheduler = DeadlineReminderScheduler(scanner, _recipients(), sleep=sleep)

    await scheduler.stop()

    assert scheduler.running is False


async def test_failed_scans_do_not_stop_the_loop(scanner, sleep, order_store):
    order_store.fail = True
    scheduler = DeadlineReminderScheduler(scanner, _recipients("user-1"), sleep=sleep)
    scheduler.start()
    await _settle()

    sleep.release()
    await _settle()

    assert scheduler.running is True
    assert scheduler.runs == 2
    await scheduler.stop()


async def test_recipient_lookup_failure_is_logged_and_retried(scanner, sleep):
    attempts = []

    async def broken_recipients():
        attempts.append(1)
        raise RuntimeError("database offline")

    scheduler = DeadlineReminderScheduler(scanner, broken_recipients, sleep=sleep)
    scheduler.start()
    await _settle()
    sleep.release()
    await _settle()

    assert len(attempts) == 2
    assert scheduler.running is True
    await scheduler.stop()


async def test_run_once_scans_every_recipient(scanner, notification_store):
    scheduler = DeadlineReminderScheduler(scanner, _recipients("user-1", "user-2"))

    results = await scheduler.run_once()

    assert sorted(results) == ["user-1", "user-2"]
    assert all(result.success for result in results.values())
    assert sorted(row.user_id for row in notification_store.inserted) == [
        "user-1",
        "user-2",
    ]


def test_interval_must_be_positive(scanner):
    with pytest.raises(ValueError):
        DeadlineReminderScheduler(scanner, _recipients(), interval=0)
