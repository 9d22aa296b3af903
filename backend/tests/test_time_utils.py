"""
PURPOSE: Tests for server-clock helpers.
"""

from datetime import date, datetime, time, timedelta, timezone

from app.utils.time_utils import as_utc, format_clock, get_utc_now, to_naive_utc, trading_day


def test_get_utc_now_is_aware_utc():
    now = get_utc_now()
    assert now.tzinfo is not None
    assert now.utcoffset() == timedelta(0)


def test_to_naive_utc_converts_offsets():
    ist = timezone(timedelta(hours=5, minutes=30))
    assert to_naive_utc(datetime(2026, 10, 19, 5, 30, tzinfo=ist)) == datetime(2026, 10, 19, 0, 0)


def test_to_naive_utc_keeps_naive_values():
    value = datetime(2026, 10, 19, 12, 0)
    assert to_naive_utc(value) is value


def test_trading_day_uses_utc_date():
    ny = timezone(timedelta(hours=-4))
    assert trading_day(datetime(2026, 10, 19, 22, 0, tzinfo=ny)) == date(2026, 10, 20)


def test_format_clock():
    assert format_clock(time(9, 5, 7, 123456)) == "09:05:07"
    assert format_clock(datetime(2026, 1, 1, 23, 59, 59)) == "23:59:59"


def test_as_utc_attaches_utc_to_naive_values():
    value = as_utc(datetime(2026, 10, 19, 9, 15))
    assert value.utcoffset() == timedelta(0)
    assert value.replace(tzinfo=None) == datetime(2026, 10, 19, 9, 15)


def test_as_utc_converts_offsets():
    ist = timezone(timedelta(hours=5, minutes=30))
    value = as_utc(datetime(2026, 10, 19, 5, 30, tzinfo=ist))
    assert value.tzinfo is timezone.utc
    assert value.hour == 0
