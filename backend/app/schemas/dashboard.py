"""
Dashboard-related Pydantic schemas for the Signal Sync API.

Handles validation and serialization of the composite dashboard view that is
built on cache misses and stored as JSON in Redis.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.config.constants import SyncStatus


class LiveFeedEntry(BaseModel):
    """
    Indicator1 signal annotated with its sync status.

    Attributes:
        id: Store-assigned signal id
        symbol: Ticker
        reason: Indicator1 reason text
        time: Wall-clock time as HH:MM:SS
        timestamp: Ingestion timestamp (UTC)
        status: Synced when Indicator2 also fired for the symbol today
    """

    id: int
    symbol: str
    reason: str
    time: str
    timestamp: datetime
    status: SyncStatus


class LogEntry(BaseModel):
    """Indicator2 signal placed in one of the log buckets."""

    id: int
    symbol: str
    reason: str
    time: str
    timestamp: datetime
    capital: Optional[float] = None


class CategorizedLogs(BaseModel):
    """Indicator2 signals partitioned by reason keyword, newest first in each bucket."""

    hvd: List[LogEntry] = Field(default_factory=list)
    bullish: List[LogEntry] = Field(default_factory=list)
    bearish: List[LogEntry] = Field(default_factory=list)
    oversold: List[LogEntry] = Field(default_factory=list)
    overbought: List[LogEntry] = Field(default_factory=list)


class SyncedListEntry(BaseModel):
    """
    Per-symbol summary of a synced pair.

    Attributes:
        symbol: Ticker seen from both indicators today
        indicator1_reasons: Every Indicator1 reason today, newest first
        indicator2_reasons: Every Indicator2 reason today, newest first
        last_indicator1_time: Latest Indicator1 timestamp
        last_indicator2_time: Latest Indicator2 timestamp
    """

    symbol: str
    indicator1_reasons: List[str]
    indicator2_reasons: List[str]
    last_indicator1_time: datetime
    last_indicator2_time: datetime


class IndexSignal(BaseModel):
    """Indicator2 signal for one of the index symbols."""

    id: int
    symbol: str
    reason: str
    time: str
    timestamp: datetime


class DashboardKpis(BaseModel):
    """Summary counters shown at the top of the dashboard."""

    total_signals: int
    synced_signals: int
    latest_signal: Optional[LiveFeedEntry] = None
    indicator2_count: int


class DashboardView(BaseModel):
    """
    Composite dashboard for one trading day.

    A deterministic function of the day's signals plus generated_at, which
    is what allows it to be cached whole.
    """

    kpis: DashboardKpis
    live_feed: List[LiveFeedEntry]
    logs: CategorizedLogs
    synced_list: List[SyncedListEntry]
    index_signals: List[IndexSignal]
    generated_at: datetime
