"""
PURPOSE: Declarative base shared by all ORM models.

Alembic reads Base.metadata for autogenerate support.
"""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for Signal Sync tables."""
