"""Performance Metrics: Aggregate and time-series statistics over trades.

Provides:
- snapshot: Win/loss counts, profit factor, expectancy, drawdown
- equity_curve: Balance, running peak and drawdown after each trade
- current_streak: Consecutive wins or losses ending at the latest trade
- daily_pnl: Net profit per close date as a polars DataFrame

Every function is a pure function of its input trades. Nothing is cached,
so filtering the trades and recomputing is the only way to update metrics.

Formulas:
    net_profit     = profit + commission + swap
    profit_factor  = gross_profit / gross_loss
    expectancy     = total_pnl / total_trades
    drawdown[t]    = balance[t] - max(balance[0..t])      (always <= 0)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Sequence

import polars as pl

from trade_analytics.domain.models import Trade, Ratio, safe_ratio, ratio_to_json

DEFAULT_INITIAL_BALANCE = 10_000.0

StreakKind = Literal["win", "loss", "none"]


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True, slots=True)
class EquityPoint:
    """Account state right after one trade closed.

    Attributes:
        close_time: Close time of the trade
        ticket: Ticket of the trade
        balance: Balance after the trade
        peak: Highest balance seen so far (including the initial balance)
        drawdown: balance - peak, always <= 0
        drawdown_percent: drawdown / peak * 100, or 0 when peak <= 0
    """
    close_time: datetime
    ticket: str
    balance: float
    peak: float
    drawdown: float
    drawdown_percent: float

    def to_dict(self) -> dict:
        return {
            "close_time": self.close_time.isoformat(),
            "ticket": self.ticket,
            "balance": self.balance,
            "peak": self.peak,
            "drawdown": self.drawdown,
            "drawdown_percent": self.drawdown_percent,
        }


@dataclass(frozen=True, slots=True)
class MetricsSnapshot:
    """Performance aggregate for one set of trades.

    Never stored as state; always recomputed from the trades it describes.
    """
    total_trades: int
    total_wins: int
    total_losses: int
    win_rate: float
    gross_profit: float
    gross_loss: float
    profit_factor: Ratio
    total_pnl: float
    expectancy: float
    avg_win: float
    avg_loss: float
    largest_win: float
    largest_loss: float
    initial_balance: float
    final_balance: float
    max_drawdown: float
    max_drawdown_percent: float
    equity_curve: tuple[EquityPoint, ...]

    @property
    def drawdown_series(self) -> list[float]:
        """Drawdown after each trade in close-time order."""
        return [point.drawdown for point in self.equity_curve]

    def to_dict(self, include_curve: bool = False) -> dict:
        result = {
            "total_trades": self.total_trades,
            "total_wins": self.total_wins,
            "total_losses": self.total_losses,
            "win_rate": self.win_rate,
            "gross_profit": self.gross_profit,
            "gross_loss": self.gross_loss,
            "profit_factor": ratio_to_json(self.profit_factor),
            "total_pnl": self.total_pnl,
            "expectancy": self.expectancy,
            "avg_win": self.avg_win,
            "avg_loss": self.avg_loss,
            "largest_win": self.largest_win,
            "largest_loss": self.largest_loss,
            "initial_balance": self.initial_balance,
            "final_balance": self.final_balance,
            "max_drawdown": self.max_drawdown,
            "max_drawdown_percent": self.max_drawdown_percent,
        }
        if include_curve:
            result["equity_curve"] = [p.to_dict() for p in self.equity_curve]
        return result


@dataclass(frozen=True, slots=True)
class Streak:
    """Run of consecutive wins or losses ending at the most recent trade."""
    kind: StreakKind
    count: int


# =============================================================================
# Time Series
# =============================================================================

def sort_by_close(trades: Sequence[Trade]) -> list[Trade]:
    """Return trades in ascending close-time order (stable for ties)."""
    return sorted(trades, key=lambda t: t.close_time)


def equity_curve(
    trades: Sequence[Trade],
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> list[EquityPoint]:
    """Build the equity curve and drawdown series.

    Trades are always sorted by close time first; input order is
    never assumed to be chronological.

    Args:
        trades: Trades in any order
        initial_balance: Balance before the first trade

    Returns:
        One EquityPoint per trade, oldest first

    Example:
        >>> curve = equity_curve(trades, initial_balance=1000.0)
        >>> min(p.drawdown for p in curve) <= 0
        True
    """
    balance = initial_balance
    peak = initial_balance
    points = []

    for trade in sort_by_close(trades):
        balance += trade.net_profit
        if balance > peak:
            peak = balance
        drawdown = balance - peak
        drawdown_percent = drawdown / peak * 100 if peak > 0 else 0.0
        points.append(EquityPoint(
            close_time=trade.close_time,
            ticket=trade.ticket,
            balance=balance,
            peak=peak,
            drawdown=drawdown,
            drawdown_percent=drawdown_percent,
        ))

    return points


# =============================================================================
# Snapshot
# =============================================================================

def snapshot(
    trades: Sequence[Trade],
    initial_balance: float = DEFAULT_INITIAL_BALANCE,
) -> MetricsSnapshot:
    """Compute the full performance snapshot for a set of trades.

    Args:
        trades: Trades to analyze (any subset, any order)
        initial_balance: Starting balance for the equity curve

    Returns:
        MetricsSnapshot. An empty input yields zeros everywhere.

    Example:
        >>> snap = snapshot(trades, initial_balance=10_000)
        >>> snap.win_rate, snap.profit_factor
    """
    total = len(trades)
    profits = [t.net_profit for t in trades]
    wins = [t.net_profit for t in trades if t.is_win]
    losses = [t.net_profit for t in trades if not t.is_win]

    gross_profit = sum(wins)
    gross_loss = abs(sum(losses))
    total_pnl = sum(profits)

    curve = equity_curve(trades, initial_balance)
    max_drawdown = abs(min((p.drawdown for p in curve), default=0.0))
    max_drawdown_percent = abs(min((p.drawdown_percent for p in curve), default=0.0))

    return MetricsSnapshot(
        total_trades=total,
        total_wins=len(wins),
        total_losses=len(losses),
        win_rate=len(wins) / total * 100 if total else 0.0,
        gross_profit=gross_profit,
        gross_loss=gross_loss,
        profit_factor=safe_ratio(gross_profit, gross_loss),
        total_pnl=total_pnl,
        expectancy=total_pnl / total if total else 0.0,
        avg_win=gross_profit / len(wins) if wins else 0.0,
        avg_loss=sum(losses) / len(losses) if losses else 0.0,
        largest_win=max(wins) if wins else 0.0,
        largest_loss=min(losses) if losses else 0.0,
        initial_balance=initial_balance,
        final_balance=curve[-1].balance if curve else initial_balance,
        max_drawdown=max_drawdown,
        max_drawdown_percent=max_drawdown_percent,
        equity_curve=tuple(curve),
    )


# =============================================================================
# Streaks and Daily Breakdown
# =============================================================================

def current_streak(trades: Sequence[Trade]) -> Streak:
    """Count consecutive wins or losses ending at the latest close.

    Example:
        >>> current_streak(trades)
        Streak(kind='win', count=3)
    """
    if not trades:
        return Streak(kind="none", count=0)

    latest_first = sorted(trades, key=lambda t: t.close_time, reverse=True)
    winning = latest_first[0].is_win

    count = 0
    for trade in latest_first:
        if trade.is_win != winning:
            break
        count += 1

    return Streak(kind="win" if winning else "loss", count=count)


def daily_pnl(trades: Sequence[Trade]) -> pl.DataFrame:
    """Aggregate net profit by close date.

    Returns:
        DataFrame with columns: date, trades, wins, net_profit
        (one row per close date, sorted by date)
    """
    if not trades:
        return pl.DataFrame(
            schema={
                "date": pl.Date,
                "trades": pl.UInt32,
                "wins": pl.UInt32,
                "net_profit": pl.Float64,
            }
        )

    df = pl.DataFrame({
        "date": [t.close_time.date() for t in trades],
        "net_profit": [t.net_profit for t in trades],
        "is_win": [t.is_win for t in trades],
    })

    return (
        df.group_by("date")
        .agg([
            pl.len().alias("trades"),
            pl.col("is_win").sum().cast(pl.UInt32).alias("wins"),
            pl.col("net_profit").sum().alias("net_profit"),
        ])
        .sort("date")
    )
