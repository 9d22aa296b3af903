"""
PURPOSE: Async SQLAlchemy engine and session factory construction.

The engine and session factory are created once by the application lifespan
(app/main.py), stored on app.state, and disposed at shutdown.
"""

from typing import Tuple

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config.settings import Settings


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """
    PURPOSE: Build the pooled async engine for the signal store.

    SQLite URLs (used by tests) do not accept the queue-pool sizing arguments.
    """
    if settings.DATABASE_URL.startswith("sqlite"):
        return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)

    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_pre_ping=True,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the async session factory bound to *engine*."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


def build_database(settings: Settings) -> Tuple[AsyncEngine, async_sessionmaker[AsyncSession]]:
    """
    PURPOSE: Create the engine and its session factory in one step.

    CALLED BY: app.main lifespan startup
    """
    engine = create_engine_from_settings(settings)
    return engine, create_session_factory(engine)
