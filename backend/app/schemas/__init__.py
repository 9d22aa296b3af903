"""
Pydantic v2 schemas for the Signal Sync API.

This module exports all schema classes used throughout the API
for request/response validation and cache serialization.
"""

from .dashboard import (
    CategorizedLogs,
    DashboardKpis,
    DashboardView,
    IndexSignal,
    LiveFeedEntry,
    LogEntry,
    SyncedListEntry,
)
from .signal import SignalCreate, SignalRecord, WebhookAck, WebhookAckData

__all__ = [
    # Signal schemas
    "SignalCreate",
    "SignalRecord",
    "WebhookAck",
    "WebhookAckData",
    # Dashboard schemas
    "LiveFeedEntry",
    "LogEntry",
    "CategorizedLogs",
    "SyncedListEntry",
    "IndexSignal",
    "DashboardKpis",
    "DashboardView",
]
