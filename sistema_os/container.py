"""Wiring of the stores, use-case services and scheduler for one process."""

from __future__ import annotations

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sistema_os.application.use_cases.notifications import (
    DeadlineScanner,
    NotificationFactory,
)
from sistema_os.config import Settings
from sistema_os.infrastructure.database import build_engine, build_session_factory
from sistema_os.infrastructure.notifications import (
    NotificationChangeHub,
    NotificationConnectionManager,
    PreferencesChangeHub,
)
from sistema_os.infrastructure.repositories import (
    ClientRepository,
    NotificationRepository,
    OrderRepository,
    SettingsRepository,
)
from sistema_os.infrastructure.scheduler import DeadlineReminderScheduler
from sistema_os.utils import configure_app_timezone


@dataclass
class Container:
    """Everything the API layer needs, built once at startup."""

    settings: Settings
    engine: AsyncEngine
    session_factory: async_sessionmaker[AsyncSession]
    notifications: NotificationRepository
    orders: OrderRepository
    clients: ClientRepository
    user_settings: SettingsRepository
    factory: NotificationFactory
    scanner: DeadlineScanner
    scheduler: DeadlineReminderScheduler
    connections: NotificationConnectionManager = field(
        default_factory=NotificationConnectionManager
    )


def build_container(settings: Settings) -> Container:
    configure_app_timezone(settings.app_timezone)
    engine = build_engine(settings)
    session_factory = build_session_factory(engine)

    notifications = NotificationRepository(session_factory, NotificationChangeHub())
    orders = OrderRepository(session_factory)
    user_settings = SettingsRepository(session_factory, PreferencesChangeHub())
    factory = NotificationFactory()
    scanner = DeadlineScanner(
        orders,
        notifications,
        factory,
        window_days=settings.deadline_reminder_window_days,
        dedupe=settings.deadline_reminder_dedupe,
    )
    scheduler = DeadlineReminderScheduler(
        scanner,
        user_settings.list_user_ids,
        interval=settings.deadline_scan_interval_seconds,
    )
    return Container(
        settings=settings,
        engine=engine,
        session_factory=session_factory,
        notifications=notifications,
        orders=orders,
        clients=ClientRepository(session_factory),
        user_settings=user_settings,
        factory=factory,
        scanner=scanner,
        scheduler=scheduler,
    )


__all__ = ["Container", "build_container"]
