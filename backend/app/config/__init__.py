"""
PURPOSE: Export configuration settings and constants for Signal Sync.

This module centralizes access to all configuration settings and constants
used throughout the signal ingestion and dashboard service.
"""

from .constants import (
    CATEGORY_RULES,
    INDEX_SIGNAL_LIMIT,
    INDEX_SYMBOLS,
    CacheStatus,
    LogBucket,
    SignalSource,
    SyncStatus,
)
from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "SignalSource",
    "SyncStatus",
    "LogBucket",
    "CacheStatus",
    "CATEGORY_RULES",
    "INDEX_SYMBOLS",
    "INDEX_SIGNAL_LIMIT",
]
