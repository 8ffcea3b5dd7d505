"""Domain Models: Core data structures for trade analytics.

These models represent the fundamental business entities:
- Trade: One closed position with prices, timestamps and net result
- TradeSide: Literal type for trade direction
- Unbounded: Sentinel for ratios whose denominator is zero

Design Principles:
- Immutable (frozen dataclass)
- Validation in __post_init__
- Computed properties for derived values (net_profit, duration, is_win)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal

# Type alias for trade direction
TradeSide = Literal["buy", "sell"]

TRADE_SIDES = ("buy", "sell")


# =============================================================================
# Unbounded Ratio Sentinel
# =============================================================================

class Unbounded:
    """Marker for a ratio with a zero denominator and a positive numerator.

    Used instead of float("inf") so results survive JSON serialization.
    There is exactly one instance, UNBOUNDED.
    """

    _instance: Unbounded | None = None

    __slots__ = ()

    def __new__(cls) -> Unbounded:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNBOUNDED"

    def __float__(self) -> float:
        return float("inf")

    def __reduce__(self):
        return (Unbounded, ())


UNBOUNDED = Unbounded()

# A ratio is either a finite float or UNBOUNDED
Ratio = float | Unbounded


def is_unbounded(value: object) -> bool:
    """Check whether a ratio value is the UNBOUNDED sentinel."""
    return value is UNBOUNDED


def safe_ratio(numerator: float, denominator: float) -> Ratio:
    """Divide with the zero-denominator convention used by every ratio.

    Returns:
        numerator / denominator when denominator > 0,
        UNBOUNDED when denominator is 0 and numerator > 0,
        0.0 otherwise

    Example:
        >>> safe_ratio(300.0, 100.0)
        3.0
        >>> safe_ratio(50.0, 0.0)
        UNBOUNDED
        >>> safe_ratio(0.0, 0.0)
        0.0
    """
    if denominator > 0:
        return numerator / denominator
    if numerator > 0:
        return UNBOUNDED
    return 0.0


def ratio_to_json(value: Ratio) -> float | str:
    """Convert a ratio to a JSON-safe value ("unbounded" for the sentinel)."""
    if value is UNBOUNDED:
        return "unbounded"
    return float(value)


# =============================================================================
# Trade
# =============================================================================

@dataclass(frozen=True, slots=True)
class Trade:
    """A closed position from a broker report or manual entry.

    Attributes:
        ticket: Unique broker ticket (must be non-empty)
        open_time: Time the position was opened (naive or aware)
        close_time: Time the position was closed
        side: "buy" or "sell"
        size: Position size in lots (must be non-negative)
        symbol: Instrument code (e.g., "EURUSD")
        open_price: Entry price
        close_price: Exit price
        commission: Commission charged (usually negative)
        swap: Overnight swap (signed)
        profit: Gross profit before commission and swap

    Example:
        >>> trade = Trade(
        ...     ticket="1001", side="buy", size=0.1, symbol="EURUSD",
        ...     open_time=datetime(2024, 1, 1, 9, 0),
        ...     close_time=datetime(2024, 1, 1, 10, 30),
        ...     open_price=1.1000, close_price=1.1050,
        ...     commission=-0.7, swap=0.0, profit=50.0,
        ... )
        >>> trade.net_profit
        49.3
        >>> trade.duration
        90.0
    """

    ticket: str
    open_time: datetime
    close_time: datetime
    side: TradeSide
    size: float
    symbol: str
    open_price: float
    close_price: float
    commission: float = 0.0
    swap: float = 0.0
    profit: float = 0.0

    def __post_init__(self) -> None:
        """Validate fields after initialization."""
        if not self.ticket:
            raise ValueError("ticket cannot be empty")
        if self.side not in TRADE_SIDES:
            raise ValueError(f"side must be 'buy' or 'sell', got: {self.side}")
        if self.size < 0:
            raise ValueError(f"size must be non-negative, got: {self.size}")

    @property
    def net_profit(self) -> float:
        """Profit after commission and swap."""
        return self.profit + self.commission + self.swap

    @property
    def duration(self) -> float:
        """Minutes between open and close.

        Negative when the timestamps are out of order; not corrected.
        """
        return (self.close_time - self.open_time).total_seconds() / 60

    @property
    def is_win(self) -> bool:
        """A trade wins when its net profit is strictly positive."""
        return self.net_profit > 0

    def to_dict(self) -> dict:
        return {
            "ticket": self.ticket,
            "open_time": self.open_time.isoformat(),
            "close_time": self.close_time.isoformat(),
            "side": self.side,
            "size": self.size,
            "symbol": self.symbol,
            "open_price": self.open_price,
            "close_price": self.close_price,
            "commission": self.commission,
            "swap": self.swap,
            "profit": self.profit,
            "net_profit": self.net_profit,
            "duration": self.duration,
            "is_win": self.is_win,
        }


# =============================================================================
# Manual Entry
# =============================================================================

STANDARD_CONTRACT_SIZE = 100_000


def manual_trade(
    symbol: str,
    side: TradeSide,
    size: float,
    open_price: float,
    close_price: float,
    open_time: datetime,
    close_time: datetime,
    commission: float = 0.0,
    swap: float = 0.0,
    ticket: str | None = None,
    contract_size: float = STANDARD_CONTRACT_SIZE,
) -> Trade:
    """Build a Trade from manually entered values.

    Gross profit uses the notional value of the price move:
        buy:  (close_price - open_price) * size * contract_size
        sell: (open_price - close_price) * size * contract_size

    Args:
        symbol: Instrument code (upper-cased)
        side: "buy" or "sell"
        size: Position size in lots
        open_price: Entry price
        close_price: Exit price
        open_time: Entry time
        close_time: Exit time
        commission: Commission charged
        swap: Swap charged or earned
        ticket: Ticket id; defaults to MANUAL-<open time in epoch millis>
        contract_size: Units per lot (100 000 for standard FX lots)

    Returns:
        Trade satisfying net_profit = profit + commission + swap
    """
    price_move = close_price - open_price
    if side == "sell":
        price_move = -price_move
    profit = price_move * size * contract_size

    if ticket is None:
        ticket = f"MANUAL-{int(open_time.timestamp() * 1000)}"

    return Trade(
        ticket=ticket,
        open_time=open_time,
        close_time=close_time,
        side=side,
        size=size,
        symbol=symbol.strip().upper(),
        open_price=open_price,
        close_price=close_price,
        commission=commission,
        swap=swap,
        profit=profit,
    )
