"""
PURPOSE: Server-clock helpers for ingestion timestamps and trading-day scoping.

All signal timestamps come from the server clock in UTC. The database columns
are timezone-naive, so values are stored as naive UTC.
"""

from datetime import date, datetime, time, timezone
from typing import Optional, Union


def get_utc_now() -> datetime:
    """
    PURPOSE: Return the current UTC time as a timezone-aware datetime object.

    Returns:
        datetime: Current UTC time with timezone info.
    """
    return datetime.now(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    """
    PURPOSE: Convert a datetime to naive UTC for storage in DateTime columns.

    Naive inputs are assumed to already be UTC and are returned unchanged.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def as_utc(value: datetime) -> datetime:
    """
    PURPOSE: Attach UTC to a stored naive-UTC datetime so it serializes with an offset.

    Aware inputs are converted to UTC.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def trading_day(now: Optional[datetime] = None) -> date:
    """
    PURPOSE: Return the UTC calendar date that scopes "today" for dashboard queries.

    Args:
        now: Reference time; defaults to the server clock.
    """
    return to_naive_utc(now or get_utc_now()).date()


def format_clock(value: Union[datetime, time]) -> str:
    """Format the wall-clock part as HH:MM:SS."""
    return value.strftime("%H:%M:%S")
