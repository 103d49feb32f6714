"""Create reminders for service orders whose deadline is near or already past."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sistema_os.application.ports import NotificationStore, OrderStore
from sistema_os.domain.entities import (
    NOTIFICATION_TYPE_DEADLINE_REMINDER,
    PENDING_ORDER_STATUSES,
    ServiceOrder,
)
from sistema_os.domain.errors import StoreError
from sistema_os.utils import Clock, days_until, local_date, now_in_app_timezone

from .events import DEFAULT_CLIENT_NAME
from .factory import NotificationFactory

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_WINDOW_DAYS = 2
NO_AUTHENTICATED_USER = "No authenticated user"


@dataclass
class ScanFailure:
    """An order whose reminder could not be stored."""

    order_number: str
    error: str


@dataclass
class ScanResult:
    """Summary of one scan over the pending orders."""

    success: bool
    order_numbers: list[str] = field(default_factory=list)
    errors: list[ScanFailure] = field(default_factory=list)
    error: str | None = None

    @property
    def created_count(self) -> int:
        return len(self.order_numbers)


class DeadlineScanner:
    """Scan open and in-progress orders and emit deadline reminders.

    Every order due within ``window_days`` days (overdue ones included) gets a
    reminder on each scan. With ``dedupe`` enabled an order is skipped when the
    user already holds a reminder for it created on the current local day.
    """

    def __init__(
        self,
        orders: OrderStore,
        notifications: NotificationStore,
        factory: NotificationFactory,
        *,
        clock: Clock = now_in_app_timezone,
        window_days: int = DEFAULT_REMINDER_WINDOW_DAYS,
        dedupe: bool = False,
    ) -> None:
        self._orders = orders
        self._notifications = notifications
        self._factory = factory
        self._clock = clock
        self._window_days = window_days
        self._dedupe = dedupe

    async def scan(self, current_user: str | None) -> ScanResult:
        if not current_user:
            return ScanResult(success=False, error=NO_AUTHENTICATED_USER)

        try:
            orders = await self._orders.select_by_status_in(
                PENDING_ORDER_STATUSES, has_expected_date=True
            )
            already_reminded = await self._reminded_today(current_user)
        except StoreError as exc:
            logger.error("Error checking deadline reminders: %s", exc)
            return ScanResult(success=False, error=str(exc))

        now = self._clock()
        result = ScanResult(success=True)
        for order in orders:
            if order.expected_completion_date is None:
                continue
            days_remaining = days_until(order.expected_completion_date, now)
            if days_remaining > self._window_days:
                continue
            if order.order_number in already_reminded:
                logger.debug("Reminder for order %s already sent today", order.order_number)
                continue

            try:
                await self._create_reminder(current_user, order, days_remaining)
            except StoreError as exc:
                logger.error(
                    "Error creating deadline reminder for order %s: %s",
                    order.order_number,
                    exc,
                )
                result.errors.append(ScanFailure(order.order_number, str(exc)))
                continue
            result.order_numbers.append(order.order_number)

        logger.info(
            "Deadline check completed for user %s: %s notifications created",
            current_user,
            result.created_count,
        )
        return result

    async def _create_reminder(
        self, user_id: str, order: ServiceOrder, days_remaining: int
    ) -> None:
        notification = self._factory.build_deadline_reminder(
            user_id,
            order.order_number,
            order.client_name or DEFAULT_CLIENT_NAME,
            days_remaining,
            order.expected_completion_date,
        )
        await self._notifications.insert(notification)

    async def _reminded_today(self, user_id: str) -> set[str]:
        if not self._dedupe:
            return set()

        today = local_date(self._clock())
        reminded: set[str] = set()
        for notification in await self._notifications.select_by_user(user_id):
            if notification.type != NOTIFICATION_TYPE_DEADLINE_REMINDER:
                continue
            if notification.created_at is None or local_date(notification.created_at) != today:
                continue
            order_number = notification.data.get("orderNumber")
            if order_number:
                reminded.add(str(order_number))
        return reminded


__all__ = [
    "DEFAULT_REMINDER_WINDOW_DAYS",
    "DeadlineScanner",
    "NO_AUTHENTICATED_USER",
    "ScanFailure",
    "ScanResult",
]
