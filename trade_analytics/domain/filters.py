"""Trade filters: Select the subset of trades to analyze.

Metrics are never updated in place. Apply a filter, then recompute.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Sequence

from trade_analytics.domain.models import Trade

Outcome = Literal["all", "win", "loss"]
SideFilter = Literal["all", "buy", "sell"]
DurationBucket = Literal["all", "scalp", "short", "medium", "long"]

# Bucket bounds in minutes: [lower, upper)
DURATION_BUCKETS: dict[str, tuple[float, float]] = {
    "scalp": (float("-inf"), 5),
    "short": (5, 30),
    "medium": (30, 120),
    "long": (120, float("inf")),
}


@dataclass(frozen=True, slots=True)
class TradeFilter:
    """Criteria for selecting trades. Defaults select everything.

    Attributes:
        symbol_search: Case-insensitive substring of the symbol
        outcome: "win", "loss" or "all"
        side: "buy", "sell" or "all"
        duration: Holding-time bucket or "all"
        since: Keep trades closed at or after this time
    """
    symbol_search: str = ""
    outcome: Outcome = "all"
    side: SideFilter = "all"
    duration: DurationBucket = "all"
    since: datetime | None = None

    def __post_init__(self) -> None:
        if self.outcome not in ("all", "win", "loss"):
            raise ValueError(f"outcome must be 'all', 'win' or 'loss', got: {self.outcome}")
        if self.side not in ("all", "buy", "sell"):
            raise ValueError(f"side must be 'all', 'buy' or 'sell', got: {self.side}")
        if self.duration != "all" and self.duration not in DURATION_BUCKETS:
            raise ValueError(f"unknown duration bucket: {self.duration}")

    def matches(self, trade: Trade) -> bool:
        """Check whether a single trade passes every criterion."""
        if self.symbol_search and self.symbol_search.lower() not in trade.symbol.lower():
            return False
        if self.outcome == "win" and not trade.is_win:
            return False
        if self.outcome == "loss" and trade.is_win:
            return False
        if self.side != "all" and trade.side != self.side:
            return False
        if self.duration != "all":
            lower, upper = DURATION_BUCKETS[self.duration]
            if not lower <= trade.duration < upper:
                return False
        if self.since is not None and trade.close_time < self.since:
            return False
        return True

    def apply(self, trades: Sequence[Trade]) -> list[Trade]:
        """Return the matching trades in input order."""
        return [t for t in trades if self.matches(t)]
