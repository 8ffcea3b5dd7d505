"""Shared fixtures for trade_analytics tests."""

from datetime import datetime

import pytest

from trade_analytics.domain.models import Trade


def build_trade(
    ticket: str,
    net_profit: float,
    close_time: datetime,
    symbol: str = "EURUSD",
    open_time: datetime | None = None,
    side: str = "buy",
) -> Trade:
    """Trade whose gross profit equals net_profit (no commission or swap)."""
    return Trade(
        ticket=ticket,
        open_time=open_time or close_time,
        close_time=close_time,
        side=side,
        size=0.1,
        symbol=symbol,
        open_price=1.0,
        close_price=1.0,
        commission=0.0,
        swap=0.0,
        profit=net_profit,
    )


@pytest.fixture
def make_trade():
    """Factory fixture for building trades."""
    return build_trade


@pytest.fixture
def abc_trades():
    """Three trades: A and B share EURUSD, A and C share 2024-01-01.

    A: EURUSD, London open, closed 2024-01-01, +100
    B: EURUSD, Asia open, closed 2024-01-02, -50
    C: GBPUSD, NY Overlap open, closed 2024-01-01, +20
    """
    a = build_trade("A", 100.0, datetime(2024, 1, 1, 10, 0),
                    symbol="EURUSD", open_time=datetime(2024, 1, 1, 9, 0))
    b = build_trade("B", -50.0, datetime(2024, 1, 2, 4, 0),
                    symbol="EURUSD", open_time=datetime(2024, 1, 2, 2, 0))
    c = build_trade("C", 20.0, datetime(2024, 1, 1, 15, 0),
                    symbol="GBPUSD", open_time=datetime(2024, 1, 1, 14, 0))
    return a, b, c


@pytest.fixture
def chain_trades(abc_trades):
    """A, B, C plus D and E which are only reachable in 2 or 3 hops from A.

    D: USDJPY, New York open, closed 2024-01-05
    E: USDJPY, Asia open, closed 2024-01-07 (shares Asia with B)
    """
    d = build_trade("D", 30.0, datetime(2024, 1, 5, 20, 0),
                    symbol="USDJPY", open_time=datetime(2024, 1, 5, 18, 0))
    e = build_trade("E", -10.0, datetime(2024, 1, 7, 5, 0),
                    symbol="USDJPY", open_time=datetime(2024, 1, 7, 3, 0))
    return (*abc_trades, d, e)


SAMPLE_REPORT = "\n".join([
    "Account: 123456  Name: Demo",
    "Closed Transactions:",
    "Ticket\tOpen Time\tType\tSize\tItem\tPrice\tS / L\tT / P\tClose Time\tPrice\tCommission\tTaxes\tSwap\tProfit",
    "1001\t2024.01.01 09:00\tbuy\t0.10\teurusd\t1.10000\t0.00000\t0.00000\t2024.01.01 10:30\t1.10500\t-0.70\t0.00\t0.00\t50.00",
    "1002\t2024.01.02 14:15\tsell\t0.20\tGBPUSD\t1.27000\t0.00000\t0.00000\t2024.01.02 16:00\t1.27300\t-1.40\t0.00\t-0.30\t-60.00",
    "1000\t2024.01.01 00:00\tbalance\tDeposit\t-\t-\t-\t-\t-\t-\t-\t-\t-\t1 000.00",
    "1003\t2024.01.03 08:00\tbuy limit\t0.10\tUSDJPY\t140.000\t0.000\t0.000\t2024.01.03 08:05\t140.000\t0.00\t0.00\t0.00\t0.00\tcancelled",
    "1004\t2024.01.04 02:00\tbuy\t1.00\tXAUUSD\t2050.00\t0.00\t0.00\t2024.01.04 05:00\t2060.00\t-7.00\t0.00\t-2.50\t1 000.00",
    "Closed P/L:\t\t\t\t\t\t\t\t\t\t-9.10\t0.00\t-2.80\t990.00",
    "Open Trades:",
    "2001\t2024.01.05 09:00\tbuy\t0.10\tEURUSD\t1.09000\t0.00000\t0.00000\t\t1.09100\t0.00\t0.00\t0.00\t10.00",
])


@pytest.fixture
def sample_report() -> str:
    """Broker report with two valid trades, ledger/cancelled rows and footer."""
    return SAMPLE_REPORT
