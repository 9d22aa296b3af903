"""
PURPOSE: Tests for keyword bucketing of Indicator2 reasons.
"""

from app.config.constants import LogBucket, SignalSource
from app.signals.categorizer import categorize_reasons, match_bucket

from tests.conftest import make_signal

IND2 = SignalSource.INDICATOR2


class TestMatchBucket:

    def test_each_keyword(self):
        assert match_bucket("HVD spike") == LogBucket.HVD
        assert match_bucket("Bullish breakout") == LogBucket.BULLISH
        assert match_bucket("bearish engulfing") == LogBucket.BEARISH
        assert match_bucket("RSI Oversold") == LogBucket.OVERSOLD
        assert match_bucket("OVERBOUGHT zone") == LogBucket.OVERBOUGHT

    def test_priority_first_match_wins(self):
        assert match_bucket("bullish oversold bounce") == LogBucket.BULLISH
        assert match_bucket("overbought but bearish hvd") == LogBucket.HVD
        assert match_bucket("oversold then overbought") == LogBucket.OVERSOLD
        assert match_bucket("bearish overbought") == LogBucket.BEARISH

    def test_substring_match(self):
        assert match_bucket("hvdx") == LogBucket.HVD

    def test_no_keyword(self):
        assert match_bucket("volume surge") is None
        assert match_bucket("") is None


class TestCategorizeReasons:

    def test_all_buckets_present_even_when_empty(self):
        buckets = categorize_reasons([])
        assert set(buckets) == set(LogBucket)
        assert all(signals == [] for signals in buckets.values())

    def test_unmatched_signals_are_dropped(self):
        signals = [
            make_signal("TCS", IND2, "Bullish crossover"),
            make_signal("INFY", IND2, "Volume surge"),
        ]
        buckets = categorize_reasons(signals)
        assert sum(len(v) for v in buckets.values()) == 1
        assert buckets[LogBucket.BULLISH] == [signals[0]]

    def test_single_bucket_membership(self):
        sig = make_signal("TCS", IND2, "Bullish oversold bounce")
        buckets = categorize_reasons([sig])
        assert buckets[LogBucket.BULLISH] == [sig]
        assert buckets[LogBucket.OVERSOLD] == []

    def test_input_order_preserved_within_bucket(self):
        signals = [
            make_signal("C", IND2, "bearish", minutes=30),
            make_signal("B", IND2, "hvd", minutes=20),
            make_signal("A", IND2, "bearish div", minutes=10),
        ]
        buckets = categorize_reasons(signals)
        assert [s.symbol for s in buckets[LogBucket.BEARISH]] == ["C", "A"]
        assert [s.symbol for s in buckets[LogBucket.HVD]] == ["B"]
