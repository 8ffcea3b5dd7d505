"""Breakdowns: Net profit grouped by calendar and holding-time keys.

Provides:
- weekday_pnl: By close weekday, all seven days (Monday first)
- hourly_pnl: By open hour, observed hours only
- weekday_hour_pnl: Open weekday x open hour grid, observed cells only
- monthly_pnl: By close month (YYYY-MM)
- holding_time_pnl: By holding-time bucket (scalp/short/medium/long)
- holding_time_extremes: Best and worst holding-time bucket
- top_trades: Best or worst N trades by net profit

Every frame has the same value columns: trades, wins, net_profit.
Timestamps are grouped as given (broker time), like daily_pnl.
"""

from typing import Sequence

import polars as pl

from trade_analytics.domain.models import Trade
from trade_analytics.domain.filters import DURATION_BUCKETS

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_AGGREGATES = [
    pl.len().alias("trades"),
    pl.col("is_win").sum().cast(pl.UInt32).alias("wins"),
    pl.col("net_profit").sum().alias("net_profit"),
]


def _summarize(
    trades: Sequence[Trade],
    keys: dict[str, tuple[pl.DataType, list]],
) -> pl.DataFrame:
    """Group trades by precomputed key columns and sum their outcome."""
    schema = {name: dtype for name, (dtype, _) in keys.items()}
    data = {name: values for name, (_, values) in keys.items()}
    df = pl.DataFrame(
        {
            **data,
            "net_profit": [t.net_profit for t in trades],
            "is_win": [t.is_win for t in trades],
        },
        schema={**schema, "net_profit": pl.Float64, "is_win": pl.Boolean},
    )
    names = list(keys)
    return df.group_by(names).agg(_AGGREGATES).sort(names)


def _fill_missing(labels: pl.DataFrame, summary: pl.DataFrame, on: str) -> pl.DataFrame:
    """Left-join a summary onto a fixed label table, zero-filling gaps."""
    return (
        labels.join(summary, on=on, how="left")
        .with_columns([
            pl.col("trades").fill_null(0),
            pl.col("wins").fill_null(0),
            pl.col("net_profit").fill_null(0.0),
        ])
        .sort(on)
    )


# =============================================================================
# Calendar Breakdowns
# =============================================================================

def weekday_pnl(trades: Sequence[Trade]) -> pl.DataFrame:
    """Aggregate net profit by close weekday.

    Returns:
        DataFrame with columns: weekday, trades, wins, net_profit
        (always seven rows, Monday to Sunday)

    Example:
        >>> weekday_pnl(trades).filter(pl.col("weekday") == "Friday")
    """
    summary = _summarize(trades, {
        "weekday_index": (pl.Int8, [t.close_time.isoweekday() for t in trades]),
    })
    labels = pl.DataFrame(
        {"weekday_index": list(range(1, 8)), "weekday": list(WEEKDAYS)},
        schema={"weekday_index": pl.Int8, "weekday": pl.Utf8},
    )
    return (
        _fill_missing(labels, summary, on="weekday_index")
        .select(["weekday", "trades", "wins", "net_profit"])
    )


def hourly_pnl(trades: Sequence[Trade]) -> pl.DataFrame:
    """Aggregate net profit by the hour a trade was opened (0-23)."""
    return _summarize(trades, {
        "hour": (pl.Int8, [t.open_time.hour for t in trades]),
    })


def weekday_hour_pnl(trades: Sequence[Trade]) -> pl.DataFrame:
    """Aggregate net profit on an open weekday x open hour grid.

    Returns:
        DataFrame with columns: weekday (1 = Monday), hour, trades, wins,
        net_profit. Only cells holding at least one trade appear.
    """
    return _summarize(trades, {
        "weekday": (pl.Int8, [t.open_time.isoweekday() for t in trades]),
        "hour": (pl.Int8, [t.open_time.hour for t in trades]),
    })


def monthly_pnl(trades: Sequence[Trade]) -> pl.DataFrame:
    """Aggregate net profit by close month.

    Months of different years stay separate ("2023-01" vs "2024-01").
    """
    return _summarize(trades, {
        "month": (pl.Utf8, [f"{t.close_time:%Y-%m}" for t in trades]),
    })


# =============================================================================
# Holding Time
# =============================================================================

def duration_bucket(trade: Trade) -> str:
    """Holding-time bucket of a trade. Negative durations count as scalps."""
    for name, (lower, upper) in DURATION_BUCKETS.items():
        if lower <= trade.duration < upper:
            return name
    return "long"


def holding_time_pnl(trades: Sequence[Trade]) -> pl.DataFrame:
    """Aggregate net profit by holding-time bucket.

    Returns:
        DataFrame with columns: bucket, trades, wins, net_profit
        (always one row per bucket, shortest first)
    """
    order = {name: index for index, name in enumerate(DURATION_BUCKETS)}
    summary = _summarize(trades, {
        "bucket_index": (pl.Int8, [order[duration_bucket(t)] for t in trades]),
    })
    labels = pl.DataFrame(
        {"bucket_index": list(order.values()), "bucket": list(order)},
        schema={"bucket_index": pl.Int8, "bucket": pl.Utf8},
    )
    return (
        _fill_missing(labels, summary, on="bucket_index")
        .select(["bucket", "trades", "wins", "net_profit"])
    )


def holding_time_extremes(trades: Sequence[Trade]) -> tuple[str, str] | None:
    """Best and worst holding-time bucket by net profit.

    Only reported when the best bucket made money and the worst lost
    money; otherwise None. Ties go to the shorter bucket.

    Example:
        >>> holding_time_extremes(trades)
        ('medium', 'scalp')
    """
    df = holding_time_pnl(trades)
    best = df.row(df["net_profit"].arg_max(), named=True)
    worst = df.row(df["net_profit"].arg_min(), named=True)
    if best["net_profit"] > 0 and worst["net_profit"] < 0:
        return best["bucket"], worst["bucket"]
    return None


# =============================================================================
# Best / Worst Trades
# =============================================================================

def top_trades(trades: Sequence[Trade], n: int = 5, worst: bool = False) -> list[Trade]:
    """Best (or worst) n trades by net profit, ties in input order."""
    ranked = sorted(trades, key=lambda t: t.net_profit, reverse=not worst)
    return ranked[:n]
