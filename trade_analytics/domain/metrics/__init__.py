"""Trading metrics for closed-trade performance analysis.

This package provides:

- Performance: Win rate, profit factor, expectancy, equity curve, drawdown
- Breakdowns: Net profit by weekday, hour, month and holding time
- Risk: Sharpe, Sortino, Kelly, Calmar, CPC index and SQN

Usage:
    from trade_analytics.domain.metrics import snapshot, risk_stats

    metrics = snapshot(trades, initial_balance=10_000)
    risk = risk_stats(trades, initial_balance=10_000, metrics=metrics)
"""

# Performance
from trade_analytics.domain.metrics.performance import (
    DEFAULT_INITIAL_BALANCE,
    EquityPoint,
    MetricsSnapshot,
    Streak,
    snapshot,
    equity_curve,
    sort_by_close,
    current_streak,
    daily_pnl,
)

# Breakdowns
from trade_analytics.domain.metrics.breakdown import (
    WEEKDAYS,
    weekday_pnl,
    hourly_pnl,
    weekday_hour_pnl,
    monthly_pnl,
    duration_bucket,
    holding_time_pnl,
    holding_time_extremes,
    top_trades,
)

# Risk
from trade_analytics.domain.metrics.risk import (
    RiskSnapshot,
    SqnResult,
    risk_stats,
    is_flat,
    downside_deviation,
    sharpe_ratio,
    sortino_ratio,
    kelly_percent,
    cpc_index,
    classify_sqn,
    system_quality_number,
)

__all__ = [
    # Performance
    "DEFAULT_INITIAL_BALANCE",
    "EquityPoint",
    "MetricsSnapshot",
    "Streak",
    "snapshot",
    "equity_curve",
    "sort_by_close",
    "current_streak",
    "daily_pnl",
    # Breakdowns
    "WEEKDAYS",
    "weekday_pnl",
    "hourly_pnl",
    "weekday_hour_pnl",
    "monthly_pnl",
    "duration_bucket",
    "holding_time_pnl",
    "holding_time_extremes",
    "top_trades",
    # Risk
    "RiskSnapshot",
    "SqnResult",
    "risk_stats",
    "is_flat",
    "downside_deviation",
    "sharpe_ratio",
    "sortino_ratio",
    "kelly_percent",
    "cpc_index",
    "classify_sqn",
    "system_quality_number",
]
