"""Trade Analytics: Broker report parsing and closed-trade analytics.

Turns a broker statement export into trade records, derives performance
and risk statistics from any subset of them, and builds a relationship
graph by instrument, date and market session.

Architecture:
- domain/: Core business logic (trade model, metrics, graph)
- infrastructure/: Report parsing, configuration and file access
- application/: Use cases and services
- interfaces/: CLI
"""

__version__ = "0.3.0"

from trade_analytics.domain import (
    Trade,
    TradeSide,
    TradeFilter,
    UNBOUNDED,
    manual_trade,
    snapshot,
    risk_stats,
    build_graph,
    related_trades,
)
from trade_analytics.infrastructure import (
    AnalysisConfig,
    DEFAULT_CONFIG,
    ReportParser,
    parse_report,
    RepositoryError,
)

__all__ = [
    # Version
    "__version__",
    # Domain
    "Trade",
    "TradeSide",
    "TradeFilter",
    "UNBOUNDED",
    "manual_trade",
    "snapshot",
    "risk_stats",
    "build_graph",
    "related_trades",
    # Infrastructure
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "ReportParser",
    "parse_report",
    "RepositoryError",
]
