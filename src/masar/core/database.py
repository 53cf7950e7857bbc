"""
Database Configuration

Async SQLAlchemy engine, session factory and the declarative base.

The engine is built by ``init_db`` from the Settings the application was
created with; nothing here reads configuration at import time.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from masar.core.config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


_engine: AsyncEngine | None = None
_session_maker: async_sessionmaker[AsyncSession] | None = None


def configure_engine(settings: Settings) -> AsyncEngine:
    """Create the engine and session factory for ``settings``, replacing any previous ones."""
    global _engine, _session_maker

    _engine = create_async_engine(
        settings.async_database_url,
        echo=False,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_pre_ping=True,
    )
    _session_maker = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
    return _engine


def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """
    Session factory for code running outside a request (jobs, scripts).

    Raises:
        RuntimeError: If init_db() has not been called
    """
    if _session_maker is None:
        raise RuntimeError("Database is not initialized. Call init_db(settings) first.")
    return _session_maker


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a database session.

    Repositories commit their own writes; anything left uncommitted when the
    request fails is rolled back here.
    """
    async with get_session_maker()() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db(settings: Settings) -> None:
    """Build the engine from ``settings`` and verify the database is reachable.

    Schema is managed by Alembic.
    """
    engine = configure_engine(settings)
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def close_db() -> None:
    """Dispose of the engine, if one was built."""
    global _engine, _session_maker

    if _engine is None:
        return

    await _engine.dispose()
    _engine = None
    _session_maker = None
    logger.info("Database engine disposed")
