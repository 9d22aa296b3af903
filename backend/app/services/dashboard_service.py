"""
Dashboard service for Signal Sync.

PURPOSE: Assemble the day's correlated dashboard (live feed, categorized
logs, synced list, index panel, KPIs) from the signal store into a single
DashboardView.

CALLED BY: CachedDashboardService on cache misses
"""

from collections import defaultdict
from datetime import date, datetime
from typing import Callable, Dict, Iterable, List, Optional

from app.config.constants import (
    INDEX_SIGNAL_LIMIT,
    INDEX_SYMBOLS,
    SignalSource,
    SyncStatus,
)
from app.core.exceptions import StorageError
from app.schemas.dashboard import (
    CategorizedLogs,
    DashboardKpis,
    DashboardView,
    IndexSignal,
    LiveFeedEntry,
    LogEntry,
    SyncedListEntry,
)
from app.schemas.signal import SignalRecord
from app.services.signal_store import SignalStore
from app.signals.categorizer import categorize_reasons
from app.signals.correlation import CorrelationRecord, correlate_signals
from app.utils.logger import get_logger
from app.utils.time_utils import as_utc, format_clock, get_utc_now, trading_day


logger = get_logger("services.dashboard")


class DashboardService:
    """
    Service for assembling the correlated signal dashboard.

    PURPOSE: Read the day's signals and derive every dashboard panel from
    them. The result depends only on the stored signals plus the generation
    timestamp, which is what makes it safe to cache whole.

    CALLED BY: CachedDashboardService
    """

    def __init__(
        self,
        store: SignalStore,
        clock: Callable[[], datetime] = get_utc_now,
    ) -> None:
        self._store = store
        self._clock = clock

    async def build_dashboard(self, day: Optional[date] = None) -> DashboardView:
        """
        Build the dashboard for one day.

        PURPOSE: Fetch both sources and the index panel, correlate, categorize
        and count. Any store failure aborts the whole build; no partial
        dashboard is ever returned.

        Args:
            day: Trading day to build; defaults to today's UTC date

        Returns:
            DashboardView: Composite dashboard

        Raises:
            StorageError: If any underlying query fails
        """
        now = self._clock()
        day = day or trading_day(now)
        logger.info("build_dashboard_started", day=day.isoformat())

        try:
            indicator1 = await self._store.query_signals(day, SignalSource.INDICATOR1)
            indicator2 = await self._store.query_signals(day, SignalSource.INDICATOR2)
            index_signals = await self._store.query_signals(
                day,
                SignalSource.INDICATOR2,
                symbols=INDEX_SYMBOLS,
                limit=INDEX_SIGNAL_LIMIT,
            )
        except StorageError as e:
            logger.error("build_dashboard_error", day=day.isoformat(), error=str(e))
            raise

        correlation = correlate_signals(indicator1, indicator2)
        synced_symbols = {record.symbol for record in correlation}

        live_feed = [
            self._live_feed_entry(
                sig,
                SyncStatus.SYNCED if sig.symbol in synced_symbols else SyncStatus.AWAITING,
            )
            for sig in indicator1
        ]

        kpis = DashboardKpis(
            total_signals=len(indicator1),
            synced_signals=len(correlation),
            latest_signal=live_feed[0] if live_feed else None,
            indicator2_count=len(indicator2),
        )

        view = DashboardView(
            kpis=kpis,
            live_feed=live_feed,
            logs=self._categorized_logs(indicator2),
            synced_list=self._synced_list(correlation, indicator1, indicator2),
            index_signals=[self._index_signal(sig) for sig in index_signals],
            generated_at=as_utc(now),
        )

        logger.info(
            "dashboard_assembled",
            day=day.isoformat(),
            indicator1=len(indicator1),
            indicator2=len(indicator2),
            synced=len(correlation),
            index_signals=len(index_signals),
        )
        return view

    # ════════════════════════════════════════════════════════════════
    # Panel builders
    # ════════════════════════════════════════════════════════════════

    @staticmethod
    def _categorized_logs(indicator2: List[SignalRecord]) -> CategorizedLogs:
        buckets = categorize_reasons(indicator2)
        return CategorizedLogs(**{
            bucket.value: [DashboardService._log_entry(sig) for sig in signals]
            for bucket, signals in buckets.items()
        })

    @staticmethod
    def _synced_list(
        correlation: List[CorrelationRecord],
        indicator1: List[SignalRecord],
        indicator2: List[SignalRecord],
    ) -> List[SyncedListEntry]:
        """Every reason from both sources per synced symbol, in correlation order."""
        ind1_reasons = _reasons_by_symbol(indicator1)
        ind2_reasons = _reasons_by_symbol(indicator2)

        return [
            SyncedListEntry(
                symbol=record.symbol,
                indicator1_reasons=ind1_reasons[record.symbol],
                indicator2_reasons=ind2_reasons[record.symbol],
                last_indicator1_time=record.last_indicator1_time,
                last_indicator2_time=record.last_indicator2_time,
            )
            for record in correlation
        ]

    @staticmethod
    def _live_feed_entry(sig: SignalRecord, status: SyncStatus) -> LiveFeedEntry:
        return LiveFeedEntry(
            id=sig.id,
            symbol=sig.symbol,
            reason=sig.reason,
            time=format_clock(sig.time),
            timestamp=sig.created_at,
            status=status,
        )

    @staticmethod
    def _log_entry(sig: SignalRecord) -> LogEntry:
        return LogEntry(
            id=sig.id,
            symbol=sig.symbol,
            reason=sig.reason,
            time=format_clock(sig.time),
            timestamp=sig.created_at,
            capital=sig.capital,
        )

    @staticmethod
    def _index_signal(sig: SignalRecord) -> IndexSignal:
        return IndexSignal(
            id=sig.id,
            symbol=sig.symbol,
            reason=sig.reason,
            time=format_clock(sig.time),
            timestamp=sig.created_at,
        )


def _reasons_by_symbol(signals: Iterable[SignalRecord]) -> Dict[str, List[str]]:
    reasons: Dict[str, List[str]] = defaultdict(list)
    for sig in signals:
        reasons[sig.symbol].append(sig.reason)
    return reasons
