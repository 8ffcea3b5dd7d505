"""Unit tests for domain/filters.py."""

from datetime import datetime, timedelta

import pytest

from trade_analytics.domain.filters import TradeFilter
from trade_analytics.domain.metrics import snapshot


class TestTradeFilter:
    """Tests for TradeFilter."""

    def test_default_keeps_everything(self, abc_trades):
        assert TradeFilter().apply(abc_trades) == list(abc_trades)

    def test_symbol_search_case_insensitive(self, abc_trades):
        result = TradeFilter(symbol_search="gbp").apply(abc_trades)
        assert [t.ticket for t in result] == ["C"]

    def test_outcome(self, abc_trades):
        assert [t.ticket for t in TradeFilter(outcome="win").apply(abc_trades)] == ["A", "C"]
        assert [t.ticket for t in TradeFilter(outcome="loss").apply(abc_trades)] == ["B"]

    def test_side(self, make_trade):
        ts = datetime(2024, 1, 1)
        trades = [make_trade("1", 1.0, ts, side="buy"), make_trade("2", 1.0, ts, side="sell")]
        assert [t.ticket for t in TradeFilter(side="sell").apply(trades)] == ["2"]

    @pytest.mark.parametrize("minutes,bucket", [
        (1, "scalp"),
        (5, "short"),
        (29, "short"),
        (30, "medium"),
        (119, "medium"),
        (120, "long"),
    ])
    def test_duration_buckets(self, make_trade, minutes, bucket):
        close = datetime(2024, 1, 1, 12, 0)
        trade = make_trade("1", 1.0, close, open_time=close - timedelta(minutes=minutes))
        assert TradeFilter(duration=bucket).apply([trade]) == [trade]
        others = [b for b in ("scalp", "short", "medium", "long") if b != bucket]
        for other in others:
            assert TradeFilter(duration=other).apply([trade]) == []

    def test_since(self, abc_trades):
        result = TradeFilter(since=datetime(2024, 1, 1, 12, 0)).apply(abc_trades)
        assert [t.ticket for t in result] == ["B", "C"]

    def test_invalid_values(self):
        with pytest.raises(ValueError, match="outcome"):
            TradeFilter(outcome="maybe")
        with pytest.raises(ValueError, match="side"):
            TradeFilter(side="long")
        with pytest.raises(ValueError, match="duration"):
            TradeFilter(duration="forever")

    def test_refilter_and_recompute(self, abc_trades):
        """Metrics of a subset equal metrics computed directly on it."""
        a, b, c = abc_trades
        subset = TradeFilter(symbol_search="EUR").apply(abc_trades)
        assert snapshot(subset, 1000.0) == snapshot([a, b], 1000.0)
