"""
PURPOSE: Fixed domain constants for Signal Sync.

Source kinds, sync statuses, log buckets, the keyword priority table used by
the reason categorizer, and the index-symbol allow-list for the dashboard.
"""

from enum import Enum
from typing import Tuple


class SignalSource(str, Enum):
    """Upstream alert provider, stored as the `indicator_type` column."""

    INDICATOR1 = "Indicator1"  # payload key "scrip"
    INDICATOR2 = "Indicator2"  # payload key "ticker"


class SyncStatus(str, Enum):
    """Whether a symbol has been seen from both sources today."""

    SYNCED = "Synced"
    AWAITING = "Awaiting"


class LogBucket(str, Enum):
    """Semantic log buckets for Indicator2 reasons."""

    HVD = "hvd"
    BULLISH = "bullish"
    BEARISH = "bearish"
    OVERSOLD = "oversold"
    OVERBOUGHT = "overbought"


class CacheStatus(str, Enum):
    """Where a dashboard response came from (sent as the X-Cache header)."""

    HIT = "HIT"
    MISS = "MISS"


# Evaluated in order; the first rule with a keyword in the lower-cased reason wins.
CATEGORY_RULES: Tuple[Tuple[Tuple[str, ...], LogBucket], ...] = (
    (("hvd",), LogBucket.HVD),
    (("bullish",), LogBucket.BULLISH),
    (("bearish",), LogBucket.BEARISH),
    (("oversold",), LogBucket.OVERSOLD),
    (("overbought",), LogBucket.OVERBOUGHT),
)

# Benchmark tickers shown in the dedicated index panel
INDEX_SYMBOLS: Tuple[str, ...] = ("NIFTY", "NIFTY1!")
INDEX_SIGNAL_LIMIT = 10

# Column widths of the signals table
MAX_SYMBOL_LENGTH = 50
MAX_REASON_LENGTH = 500

# capital_deployed_cr is NUMERIC(10, 2)
CAPITAL_DECIMAL_PLACES = 2
MAX_CAPITAL_ABS = 10 ** 8

# Inbound payload keys
SCRIP_FIELD = "scrip"
TICKER_FIELD = "ticker"
REASON_FIELD = "reason"
CAPITAL_FIELD = "capital_deployed_cr"
