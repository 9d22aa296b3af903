"""
PURPOSE: Pure signal analytics for the dashboard.

    - correlation: which symbols fired from both indicators today
    - categorizer: keyword buckets for Indicator2 reasons
"""

from app.signals.categorizer import categorize_reasons
from app.signals.correlation import CorrelationRecord, correlate_signals

__all__ = [
    "CorrelationRecord",
    "correlate_signals",
    "categorize_reasons",
]
