"""
PURPOSE: Cross-source correlation of the day's signals.

A symbol is Synced when it has at least one Indicator1 and at least one
Indicator2 signal on the same date. Repeats within one source never make a
symbol synced on their own.

CALLED BY: app/services/dashboard_service.py (DashboardService.build_dashboard)
"""

from datetime import datetime
from typing import Dict, Iterable, List

from pydantic import BaseModel, Field

from app.config.constants import SyncStatus
from app.schemas.signal import SignalRecord


class CorrelationRecord(BaseModel):
    """
    PURPOSE: Synchronisation result for one symbol seen from both indicators.

    Attributes:
        symbol: Ticker.
        last_indicator1_time: max(created_at) over the symbol's Indicator1 signals.
        last_indicator2_time: max(created_at) over the symbol's Indicator2 signals.
        status: Always Synced for records returned by correlate_signals().
    """

    symbol: str
    last_indicator1_time: datetime
    last_indicator2_time: datetime
    status: SyncStatus = Field(default=SyncStatus.SYNCED)


def _latest_by_symbol(signals: Iterable[SignalRecord]) -> Dict[str, datetime]:
    latest: Dict[str, datetime] = {}
    for sig in signals:
        seen = latest.get(sig.symbol)
        if seen is None or sig.created_at > seen:
            latest[sig.symbol] = sig.created_at
    return latest


def correlate_signals(
    indicator1_signals: Iterable[SignalRecord],
    indicator2_signals: Iterable[SignalRecord],
) -> List[CorrelationRecord]:
    """
    PURPOSE: Compute the synced symbols for one day.

    Both inputs are expected to be already scoped to the same date.

    Args:
        indicator1_signals: The day's Indicator1 signals, any order.
        indicator2_signals: The day's Indicator2 signals, any order.

    Returns:
        list[CorrelationRecord]: One record per synced symbol, most recent
        Indicator2 confirmation first, ties broken by symbol.
    """
    latest_ind1 = _latest_by_symbol(indicator1_signals)
    latest_ind2 = _latest_by_symbol(indicator2_signals)

    records = [
        CorrelationRecord(
            symbol=symbol,
            last_indicator1_time=latest_ind1[symbol],
            last_indicator2_time=latest_ind2[symbol],
        )
        for symbol in latest_ind1.keys() & latest_ind2.keys()
    ]

    # Stable two-pass sort: symbol ascending, then Indicator2 recency descending
    records.sort(key=lambda r: r.symbol)
    records.sort(key=lambda r: r.last_indicator2_time, reverse=True)
    return records

