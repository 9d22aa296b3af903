"""
PURPOSE: Partition Indicator2 signals into fixed log buckets by reason keyword.

Matching is a case-insensitive substring test against CATEGORY_RULES in
priority order (hvd, bullish, bearish, oversold, overbought). The first match
wins, so "bullish oversold bounce" is filed under bullish only. Signals that
match no keyword are left out of every bucket.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from app.config.constants import CATEGORY_RULES, LogBucket
from app.schemas.signal import SignalRecord


def match_bucket(
    reason: str,
    rules: Sequence[Tuple[Tuple[str, ...], LogBucket]] = CATEGORY_RULES,
) -> Optional[LogBucket]:
    """Return the highest-priority bucket whose keyword occurs in *reason*, or None."""
    text = reason.lower()
    for keywords, bucket in rules:
        if any(keyword in text for keyword in keywords):
            return bucket
    return None


def categorize_reasons(
    signals: Iterable[SignalRecord],
    rules: Sequence[Tuple[Tuple[str, ...], LogBucket]] = CATEGORY_RULES,
) -> Dict[LogBucket, List[SignalRecord]]:
    """
    PURPOSE: Bucket signals by reason, preserving input order inside each bucket.

    Args:
        signals: Indicator2 signals, newest first as returned by the store.
        rules: Ordered (keywords, bucket) pairs.

    Returns:
        dict: Every LogBucket mapped to its (possibly empty) list of signals.
    """
    buckets: Dict[LogBucket, List[SignalRecord]] = {bucket: [] for _, bucket in rules}
    for sig in signals:
        bucket = match_bucket(sig.reason, rules)
        if bucket is not None:
            buckets[bucket].append(sig)
    return buckets
