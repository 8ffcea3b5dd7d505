"""Domain Layer: Core business logic and entities.

This layer contains:
- models.py: Trade, the UNBOUNDED ratio sentinel, manual entry
- filters.py: Trade subset selection
- metrics/: Performance and risk statistics
- graph.py: Relationship graph and related-trade search
"""

from trade_analytics.domain.models import (
    Trade,
    TradeSide,
    Unbounded,
    UNBOUNDED,
    Ratio,
    is_unbounded,
    safe_ratio,
    ratio_to_json,
    manual_trade,
)
from trade_analytics.domain.filters import TradeFilter
from trade_analytics.domain.metrics import (
    MetricsSnapshot,
    RiskSnapshot,
    SqnResult,
    snapshot,
    risk_stats,
    equity_curve,
    current_streak,
    daily_pnl,
)
from trade_analytics.domain.graph import (
    GraphLayout,
    GraphNode,
    GraphEdge,
    TradeGraph,
    build_graph,
    related_trades,
    market_session,
    date_key,
)

__all__ = [
    # Models
    "Trade",
    "TradeSide",
    "Unbounded",
    "UNBOUNDED",
    "Ratio",
    "is_unbounded",
    "safe_ratio",
    "ratio_to_json",
    "manual_trade",
    # Filters
    "TradeFilter",
    # Metrics
    "MetricsSnapshot",
    "RiskSnapshot",
    "SqnResult",
    "snapshot",
    "risk_stats",
    "equity_curve",
    "current_streak",
    "daily_pnl",
    # Graph
    "GraphLayout",
    "GraphNode",
    "GraphEdge",
    "TradeGraph",
    "build_graph",
    "related_trades",
    "market_session",
    "date_key",
]
