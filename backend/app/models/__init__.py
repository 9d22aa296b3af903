"""Database models for Signal Sync.

Import all models here so Alembic can detect them during migration generation.
"""

from app.models.signal import Signal
from app.models.debug_log import DebugLog

__all__ = [
    "Signal",
    "DebugLog",
]
