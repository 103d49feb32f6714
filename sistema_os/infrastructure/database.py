"""Database configuration and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from sistema_os.config import Settings
from sistema_os.domain.errors import StoreError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the async engine for the configured ``DATABASE_URL``."""

    return create_async_engine(settings.database_url, pool_pre_ping=True)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory whose entities stay usable after commit."""

    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Yield a session, translating driver failures into :class:`StoreError`."""

    try:
        async with session_factory() as session:
            yield session
    except SQLAlchemyError as exc:
        logger.error("Database operation failed: %s", exc)
        raise StoreError(str(exc)) from exc


async def initialize_database(engine: AsyncEngine) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from sistema_os.infrastructure import models  # noqa: F401  # ensure models are imported

    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all, checkfirst=True)
    logger.info("Database schema ready at %s", engine.url.render_as_string(hide_password=True))


__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "initialize_database",
    "session_scope",
]
