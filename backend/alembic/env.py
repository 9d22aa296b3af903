"""
PURPOSE: Alembic migration environment configuration.

Configures Alembic to work with async SQLAlchemy. Automatically detects all
models from app.models for migration generation.
"""

import asyncio
from logging.config import fileConfig
from sqlalchemy import pool
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine

from alembic import context

# Import Base and all models so Alembic detects them
from app.db.base import Base
from app.models import Signal, DebugLog  # noqa: F401
from app.config.settings import get_settings

settings = get_settings()

# Alembic config object for logging
config = context.config

# Interpret the config file for logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

# Target metadata for auto-generate support
target_metadata = Base.metadata

# URL handed over by the app (main._run_migrations) wins over the environment
database_url = config.get_main_option("sqlalchemy.url") or settings.DATABASE_URL


def run_migrations_offline() -> None:
    """
    PURPOSE: Run migrations in 'offline' mode.

    Configures the context with just a URL so the SQL can be emitted
    without a DBAPI being available.
    """
    context.configure(
        url=database_url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    """
    PURPOSE: Execute migrations using async connection.

    Args:
        connection: SQLAlchemy async connection object
    """
    context.configure(connection=connection, target_metadata=target_metadata)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """
    PURPOSE: Create an async engine and run migrations.
    """
    engine: AsyncEngine = create_async_engine(
        database_url,
        echo=settings.DEBUG,
        poolclass=pool.NullPool,
    )

    async with engine.begin() as connection:
        await connection.run_sync(do_run_migrations)

    await engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    asyncio.run(run_async_migrations())
