"""Unit tests for application/services/ module."""

from datetime import datetime, timedelta

import pytest

from trade_analytics.application import JournalAnalyzer, JournalAnalysisResult
from trade_analytics.domain.filters import TradeFilter
from trade_analytics.domain.metrics import snapshot
from trade_analytics.infrastructure import AnalysisConfig, ReportPaths, ReportRepository


# =============================================================================
# JournalAnalysisResult Tests
# =============================================================================

class TestJournalAnalysisResult:
    """Tests for JournalAnalysisResult dataclass."""

    def test_to_dict(self, abc_trades):
        result = JournalAnalyzer(abc_trades).analyze(initial_balance=1000.0)
        d = result.to_dict()

        assert d["trade_count"] == 3
        assert d["metrics"]["total_pnl"] == pytest.approx(70.0)
        assert d["risk"]["sqn_grade"] == "Insufficient"
        assert d["streak"] == {"kind": "loss", "count": 1}

    def test_frozen(self, abc_trades):
        result = JournalAnalyzer(abc_trades).analyze()
        with pytest.raises(AttributeError):
            result.trades = ()


# =============================================================================
# JournalAnalyzer Tests
# =============================================================================

class TestJournalAnalyzer:
    """Tests for JournalAnalyzer class."""

    def test_analyze_uses_config_balance(self, abc_trades):
        analyzer = JournalAnalyzer(abc_trades, AnalysisConfig(initial_balance=1000.0))
        result = analyzer.analyze()
        assert result.metrics.initial_balance == 1000.0
        assert result.metrics.final_balance == pytest.approx(1070.0)

    def test_analyze_with_filter(self, abc_trades):
        result = JournalAnalyzer(abc_trades).analyze(TradeFilter(outcome="win"))
        assert isinstance(result, JournalAnalysisResult)
        assert result.trade_count == 2
        assert result.metrics.total_losses == 0
        assert result.metrics == snapshot(result.trades, result.metrics.initial_balance)

    def test_config_caps_are_used(self, make_trade):
        start = datetime(2024, 1, 1)
        trades = [make_trade(str(i), 10.0 if i % 3 else -5.0, start + timedelta(hours=i))
                  for i in range(6)]
        config = AnalysisConfig(sqn_min_trades=5)
        result = JournalAnalyzer(trades, config).analyze()
        assert result.risk.sqn.is_defined

    def test_graph_respects_date_limit(self, make_trade):
        start = datetime(2024, 1, 1, 12, 0)
        trades = [make_trade(str(i), 1.0, start + timedelta(days=i)) for i in range(5)]
        analyzer = JournalAnalyzer(trades, AnalysisConfig(date_node_limit=2))
        graph = analyzer.graph(depth_level=3)
        assert len(graph.nodes_of("date")) == 2

    def test_related_by_ticket(self, chain_trades):
        analyzer = JournalAnalyzer(chain_trades)
        related = analyzer.related("A", max_depth=1)
        assert [t.ticket for t in related] == ["B", "C"]

    def test_related_unknown_ticket(self, abc_trades):
        assert JournalAnalyzer(abc_trades).related("missing") is None

    def test_related_ticket_filtered_out(self, abc_trades):
        analyzer = JournalAnalyzer(abc_trades)
        assert analyzer.related("B", trade_filter=TradeFilter(outcome="win")) is None

    def test_daily_breakdown(self, abc_trades):
        df = JournalAnalyzer(abc_trades).daily_breakdown()
        assert len(df) == 2

    def test_from_report(self, tmp_path, sample_report):
        reports = tmp_path / "reports"
        reports.mkdir()
        (reports / "jan.txt").write_text(sample_report, encoding="utf-8")

        repo = ReportRepository(ReportPaths(root=tmp_path))
        analyzer = JournalAnalyzer.from_report("jan", repo=repo)
        assert len(analyzer.trades) == 3

    def test_breakdown(self, abc_trades):
        analyzer = JournalAnalyzer(abc_trades)
        assert analyzer.breakdown("weekday")["trades"].to_list()[:2] == [2, 1]
        assert analyzer.breakdown("day").equals(analyzer.daily_breakdown())

        winners = analyzer.breakdown("holding", TradeFilter(outcome="win"))
        assert winners["trades"].sum() == 2

    def test_breakdown_unknown_key(self, abc_trades):
        with pytest.raises(ValueError, match="Unknown breakdown"):
            JournalAnalyzer(abc_trades).breakdown("quarter")

    def test_best_worst(self, abc_trades):
        best, worst = JournalAnalyzer(abc_trades).best_worst(1)
        assert [t.ticket for t in best] == ["A"]
        assert [t.ticket for t in worst] == ["B"]
