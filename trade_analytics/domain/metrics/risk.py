"""Risk Statistics: Risk-adjusted ratios built on the performance snapshot.

Each trade's net profit is treated as one "return". Standard deviations
are population deviations (divided by n).

Formulas:
    sharpe    = mean / std * sqrt(min(n, 252))
    downside  = sqrt(Σ min(x, 0)² / n)            # n = all trades
    sortino   = mean / downside * sqrt(min(n, 252))
    recovery  = total_pnl / max_drawdown
    payoff    = avg_win / |avg_loss|
    kelly %   = (w - (1 - w) / payoff) * 100     # w = win_rate / 100
    calmar    = total_pnl / max_drawdown,  romad = calmar * 100
    cpc       = w * payoff / (1 + payoff)
    sqn       = mean / std * sqrt(min(n, 100))   # Van Tharp

Zero denominators follow safe_ratio: UNBOUNDED for a positive numerator,
0 otherwise. No function here raises on degenerate data or returns NaN.
"""

from dataclasses import dataclass
import math
from typing import Literal, Sequence

import numpy as np

from trade_analytics.domain.models import (
    Trade,
    Ratio,
    UNBOUNDED,
    safe_ratio,
    ratio_to_json,
)
from trade_analytics.domain.metrics.performance import (
    DEFAULT_INITIAL_BALANCE,
    MetricsSnapshot,
    snapshot,
)

SHARPE_PERIOD_CAP = 252
SQN_PERIOD_CAP = 100
SQN_MIN_TRADES = 10

# Relative tolerance below which a std is rounding noise
STD_EPSILON = 1e-12

SqnGrade = Literal[
    "Insufficient",
    "Poor",
    "BelowAverage",
    "Average",
    "Good",
    "Excellent",
    "Superb",
    "HolyGrail",
]

# Upper bounds (exclusive) of each SQN grade, checked in order
SQN_LADDER: tuple[tuple[float, SqnGrade], ...] = (
    (1.6, "Poor"),
    (1.9, "BelowAverage"),
    (2.4, "Average"),
    (2.9, "Good"),
    (5.0, "Excellent"),
    (7.0, "Superb"),
)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class SqnResult:
    """System Quality Number with its grade.

    Attributes:
        value: SQN value (0 when insufficient)
        grade: Classification on the Van Tharp ladder
        n: Number of trades used
    """
    value: float
    grade: SqnGrade
    n: int

    @property
    def is_defined(self) -> bool:
        """Check whether enough varied trades were available."""
        return self.grade != "Insufficient"


@dataclass(frozen=True, slots=True)
class RiskSnapshot:
    """Risk-adjusted statistics for one set of trades."""
    total_trades: int
    mean_return: float
    std_dev: float
    downside_deviation: float
    sharpe_ratio: float
    sortino_ratio: Ratio
    recovery_factor: Ratio
    payoff_ratio: Ratio
    kelly_percent: float
    calmar_ratio: Ratio
    romad: Ratio
    cpc_index: float
    profit_factor: Ratio
    win_rate: float
    max_drawdown: float
    max_drawdown_percent: float
    sqn: SqnResult

    def to_dict(self) -> dict:
        return {
            "total_trades": self.total_trades,
            "mean_return": self.mean_return,
            "std_dev": self.std_dev,
            "downside_deviation": self.downside_deviation,
            "sharpe_ratio": self.sharpe_ratio,
            "sortino_ratio": ratio_to_json(self.sortino_ratio),
            "recovery_factor": ratio_to_json(self.recovery_factor),
            "payoff_ratio": ratio_to_json(self.payoff_ratio),
            "kelly_percent": self.kelly_percent,
            "calmar_ratio": ratio_to_json(self.calmar_ratio),
            "romad": ratio_to_json(self.romad),
            "cpc_index": self.cpc_index,
            "profit_factor": ratio_to_json(self.profit_factor),
            "win_rate": self.win_rate,
            "max_drawdown": self.max_drawdown,
            "max_drawdown_percent": self.max_drawdown_percent,
            "sqn": self.sqn.value,
            "sqn_grade": self.sqn.grade,
        }


# =============================================================================
# Building Blocks
# =============================================================================

def is_flat(std: float, mean: float) -> bool:
    """Check whether a std is zero up to floating-point noise.

    Identical non-round returns (e.g. twelve trades of 0.1) leave a std
    around 1e-17 instead of exactly 0.
    """
    return std <= STD_EPSILON * max(1.0, abs(mean))


def downside_deviation(returns: Sequence[float]) -> float:
    """Root mean square of the negative returns over ALL n returns.

    Example:
        >>> downside_deviation([10.0, -10.0])
        7.0710678118654755
    """
    n = len(returns)
    if n == 0:
        return 0.0
    clipped = np.minimum(np.asarray(returns, dtype=float), 0.0)
    return float(np.sqrt(np.sum(clipped ** 2) / n))


def sharpe_ratio(
    returns: Sequence[float],
    period_cap: int = SHARPE_PERIOD_CAP,
) -> float:
    """Mean over population std, scaled by sqrt(min(n, period_cap))."""
    n = len(returns)
    if n == 0:
        return 0.0
    values = np.asarray(returns, dtype=float)
    mean = float(values.mean())
    std = float(values.std())
    if is_flat(std, mean):
        return 0.0
    return mean / std * math.sqrt(min(n, period_cap))


def sortino_ratio(
    returns: Sequence[float],
    period_cap: int = SHARPE_PERIOD_CAP,
) -> Ratio:
    """Mean over downside deviation, scaled like the Sharpe ratio.

    With no downside the result is UNBOUNDED for a positive mean, else 0.
    """
    n = len(returns)
    if n == 0:
        return 0.0
    mean = float(np.mean(returns))
    downside = downside_deviation(returns)
    if downside == 0:
        return UNBOUNDED if mean > 0 else 0.0
    return mean / downside * math.sqrt(min(n, period_cap))


def kelly_percent(win_rate: float, payoff: Ratio) -> float:
    """Kelly criterion in percent: (W - (1 - W) / R) * 100.

    Args:
        win_rate: Win rate in percent (0-100)
        payoff: Payoff ratio; 0 or UNBOUNDED gives 0
    """
    if payoff is UNBOUNDED or payoff == 0:
        return 0.0
    w = win_rate / 100
    return (w - (1 - w) / payoff) * 100


def cpc_index(win_rate: float, payoff: Ratio) -> float:
    """CPC index: W * R / (1 + R).

    For an UNBOUNDED payoff the limit value W is returned.
    """
    w = win_rate / 100
    if payoff is UNBOUNDED:
        return w
    return w * payoff / (1 + payoff)


def classify_sqn(value: float) -> SqnGrade:
    """Place an SQN value on the Van Tharp ladder."""
    for upper, grade in SQN_LADDER:
        if value < upper:
            return grade
    return "HolyGrail"


def system_quality_number(
    returns: Sequence[float],
    period_cap: int = SQN_PERIOD_CAP,
    min_trades: int = SQN_MIN_TRADES,
) -> SqnResult:
    """Van Tharp's System Quality Number.

    Undefined (0, "Insufficient") with fewer than min_trades trades or
    when every return is identical (see is_flat).

    Example:
        >>> result = system_quality_number(returns)
        >>> result.value, result.grade
        (2.1, 'Average')
    """
    n = len(returns)
    if n < min_trades:
        return SqnResult(value=0.0, grade="Insufficient", n=n)

    values = np.asarray(returns, dtype=float)
    mean = float(values.mean())
    std = float(values.std())
    if is_flat(std, mean):
        return SqnResult(value=0.0, grade="Insufficient", n=n)

    value = mean / std * math.sqrt(min(n, period_cap))
    return SqnResult(value=value, grade=classify_sqn(value), n=n)


# =============================================================================
# Risk Snapshot
# =============================================================================

def risk_stats(
    trades: Sequence[Trade],
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
    metrics: MetricsSnapshot | None = None,
    sharpe_period_cap: int = SHARPE_PERIOD_CAP,
    sqn_period_cap: int = SQN_PERIOD_CAP,
    sqn_min_trades: int = SQN_MIN_TRADES,
) -> RiskSnapshot:
    """Compute all risk statistics for a set of trades.

    Args:
        trades: Trades to analyze (any order)
        initial_balance: Starting balance for drawdown
        metrics: Precomputed snapshot of the same trades (computed if None)
        sharpe_period_cap: Cap on n for Sharpe/Sortino scaling
        sqn_period_cap: Cap on n for SQN scaling
        sqn_min_trades: Minimum trades for a defined SQN

    Returns:
        RiskSnapshot with every ratio resolved (no NaN, no exceptions)
    """
    if metrics is None:
        metrics = snapshot(trades, initial_balance)

    returns = [t.net_profit for t in trades]
    n = len(returns)
    values = np.asarray(returns, dtype=float)
    mean = float(values.mean()) if n else 0.0
    std = float(values.std()) if n else 0.0
    if is_flat(std, mean):
        std = 0.0

    payoff = safe_ratio(metrics.avg_win, abs(metrics.avg_loss))
    calmar = safe_ratio(metrics.total_pnl, metrics.max_drawdown)

    return RiskSnapshot(
        total_trades=n,
        mean_return=mean,
        std_dev=std,
        downside_deviation=downside_deviation(returns),
        sharpe_ratio=sharpe_ratio(returns, sharpe_period_cap),
        sortino_ratio=sortino_ratio(returns, sharpe_period_cap),
        recovery_factor=safe_ratio(metrics.total_pnl, metrics.max_drawdown),
        payoff_ratio=payoff,
        kelly_percent=kelly_percent(metrics.win_rate, payoff),
        calmar_ratio=calmar,
        romad=calmar if calmar is UNBOUNDED else calmar * 100,
        cpc_index=cpc_index(metrics.win_rate, payoff),
        profit_factor=metrics.profit_factor,
        win_rate=metrics.win_rate,
        max_drawdown=metrics.max_drawdown,
        max_drawdown_percent=metrics.max_drawdown_percent,
        sqn=system_quality_number(returns, sqn_period_cap, sqn_min_trades),
    )
