"""Journal Analysis Service: Metrics, risk and graph for a trade journal.

Orchestrates one analysis request:
- Filter the trades (symbol, outcome, side, duration, since)
- Performance snapshot and risk statistics
- Current streak, calendar and holding-time breakdowns
- Relationship graph and related-trade lookup

Nothing is kept between calls except the loaded trades, so a changed
filter always means a full recompute.
"""

from dataclasses import dataclass
import logging
from typing import Sequence

import polars as pl

from trade_analytics.domain.models import Trade
from trade_analytics.domain.filters import TradeFilter
from trade_analytics.domain.metrics import (
    MetricsSnapshot,
    RiskSnapshot,
    Streak,
    snapshot,
    risk_stats,
    current_streak,
    daily_pnl,
    weekday_pnl,
    hourly_pnl,
    weekday_hour_pnl,
    monthly_pnl,
    holding_time_pnl,
    top_trades,
)
from trade_analytics.domain.graph import (
    DepthLevel,
    TradeGraph,
    build_graph,
    related_trades,
)
from trade_analytics.infrastructure.config import AnalysisConfig, DEFAULT_CONFIG
from trade_analytics.infrastructure.repositories import ReportRepository

logger = logging.getLogger(__name__)

BREAKDOWNS = {
    "day": daily_pnl,
    "weekday": weekday_pnl,
    "hour": hourly_pnl,
    "heatmap": weekday_hour_pnl,
    "month": monthly_pnl,
    "holding": holding_time_pnl,
}


# =============================================================================
# Result Data Class
# =============================================================================

@dataclass(frozen=True, slots=True)
class JournalAnalysisResult:
    """Complete analysis of one (filtered) set of trades."""
    trades: tuple[Trade, ...]
    metrics: MetricsSnapshot
    risk: RiskSnapshot
    streak: Streak

    @property
    def trade_count(self) -> int:
        return len(self.trades)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "trade_count": self.trade_count,
            "metrics": self.metrics.to_dict(),
            "risk": self.risk.to_dict(),
            "streak": {"kind": self.streak.kind, "count": self.streak.count},
        }


# =============================================================================
# Journal Analyzer
# =============================================================================

class JournalAnalyzer:
    """Analyzes a loaded set of trades.

    Example:
        >>> analyzer = JournalAnalyzer(trades)
        >>> result = analyzer.analyze(TradeFilter(symbol_search="eur"))
        >>> result.metrics.win_rate
        >>> graph = analyzer.graph(depth_level=3, hide_orphans=True)
    """

    def __init__(
        self,
        trades: Sequence[Trade],
        config: AnalysisConfig = DEFAULT_CONFIG,
    ):
        self._trades = tuple(trades)
        self._config = config

    @classmethod
    def from_report(
        cls,
        name: str,
        repo: ReportRepository | None = None,
        config: AnalysisConfig = DEFAULT_CONFIG,
    ) -> "JournalAnalyzer":
        """Create an analyzer for a named report in the repository.

        Raises:
            RepositoryError: If the report cannot be read
        """
        repo = repo or ReportRepository()
        trades = repo.get_report(name)
        logger.info("Loaded %d trades from report %s", len(trades), name)
        return cls(trades, config)

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self._trades

    def select(self, trade_filter: TradeFilter | None = None) -> list[Trade]:
        """Apply a filter (or none) to the loaded trades."""
        if trade_filter is None:
            return list(self._trades)
        return trade_filter.apply(self._trades)

    def analyze(
        self,
        trade_filter: TradeFilter | None = None,
        initial_balance: float | None = None,
    ) -> JournalAnalysisResult:
        """Compute metrics, risk statistics and streak.

        Args:
            trade_filter: Subset to analyze (all trades if None)
            initial_balance: Overrides the configured initial balance

        Returns:
            JournalAnalysisResult for the selected trades
        """
        selected = self.select(trade_filter)
        balance = self._initial_balance(initial_balance)

        metrics = snapshot(selected, balance)
        risk = risk_stats(
            selected,
            balance,
            metrics=metrics,
            sharpe_period_cap=self._config.sharpe_period_cap,
            sqn_period_cap=self._config.sqn_period_cap,
            sqn_min_trades=self._config.sqn_min_trades,
        )

        return JournalAnalysisResult(
            trades=tuple(selected),
            metrics=metrics,
            risk=risk,
            streak=current_streak(selected),
        )

    def daily_breakdown(self, trade_filter: TradeFilter | None = None) -> pl.DataFrame:
        """Net profit per close date for the selected trades."""
        return daily_pnl(self.select(trade_filter))

    def breakdown(
        self,
        by: str,
        trade_filter: TradeFilter | None = None,
    ) -> pl.DataFrame:
        """Net profit of the selected trades grouped by one key.

        Args:
            by: One of BREAKDOWNS ("day", "weekday", "hour", "heatmap",
                "month", "holding")
            trade_filter: Subset to group (all trades if None)

        Raises:
            ValueError: If `by` is not a known breakdown
        """
        if by not in BREAKDOWNS:
            raise ValueError(f"Unknown breakdown: {by}. Use one of {list(BREAKDOWNS)}")
        return BREAKDOWNS[by](self.select(trade_filter))

    def best_worst(
        self,
        n: int = 5,
        trade_filter: TradeFilter | None = None,
    ) -> tuple[list[Trade], list[Trade]]:
        """Best and worst n selected trades by net profit."""
        selected = self.select(trade_filter)
        return top_trades(selected, n), top_trades(selected, n, worst=True)

    def graph(
        self,
        depth_level: DepthLevel = 2,
        hide_orphans: bool = False,
        trade_filter: TradeFilter | None = None,
    ) -> TradeGraph:
        """Build the relationship graph for the selected trades."""
        return build_graph(
            self.select(trade_filter),
            depth_level=depth_level,
            hide_orphans=hide_orphans,
            date_limit=self._config.date_node_limit,
        )

    def related(
        self,
        ticket: str,
        max_depth: int = 1,
        trade_filter: TradeFilter | None = None,
    ) -> list[Trade] | None:
        """Find trades related to the trade with the given ticket.

        Returns:
            Related trades, or None if the ticket is not among the
            selected trades
        """
        selected = self.select(trade_filter)
        focal = next((t for t in selected if t.ticket == ticket), None)
        if focal is None:
            return None
        return related_trades(focal, selected, max_depth=max_depth)

    def _initial_balance(self, override: float | None) -> float:
        if override is not None:
            return override
        return self._config.initial_balance
