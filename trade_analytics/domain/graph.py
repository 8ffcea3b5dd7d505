"""Relationship Graph: Trades linked to their asset, date and session.

Builds a node/edge graph for exploratory navigation:
- Trade nodes: one per trade
- Session nodes: trading session of the open time (Asia, London, ...)
- Asset nodes: one per symbol
- Date nodes: UTC calendar date of the close time (30 most recent)

Two separate "depth" parameters exist:
- depth_level (1-3): which edge tiers appear in the full graph
      1 = trade-session, 2 = + trade-asset, 3 = + trade-date
- max_depth (>= 1): how many hops related_trades() walks from a trade

Layout is positional arithmetic on concentric rings, not a force
simulation. Identical input gives identical coordinates.
"""

from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import math
from typing import Literal, Sequence

from trade_analytics.domain.models import Trade

NodeKind = Literal["trade", "asset", "date", "session"]
EdgeKind = Literal["session", "asset", "date"]
DepthLevel = Literal[1, 2, 3]

DATE_NODE_LIMIT = 30

# (start hour inclusive, end hour exclusive, session name), UTC
SESSION_BANDS: tuple[tuple[int, int, str], ...] = (
    (0, 8, "Asia"),
    (8, 13, "London"),
    (13, 17, "NY Overlap"),
    (17, 22, "New York"),
)
OFF_HOURS_SESSION = "Asia"
MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
              "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


# =============================================================================
# Keys
# =============================================================================

def _as_utc(ts: datetime) -> datetime:
    # Naive timestamps are taken to be UTC already
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc)


def market_session(ts: datetime) -> str:
    """Classify a timestamp into a market session by its UTC hour.

    Example:
        >>> market_session(datetime(2024, 1, 1, 9, 30))
        'London'
        >>> market_session(datetime(2024, 1, 1, 23, 0))
        'Asia'
    """
    hour = _as_utc(ts).hour
    for start, end, name in SESSION_BANDS:
        if start <= hour < end:
            return name
    return OFF_HOURS_SESSION


def date_key(ts: datetime) -> date:
    """UTC calendar date of a timestamp."""
    return _as_utc(ts).date()


def date_label(day: date) -> str:
    """Short "DD Mon" label, independent of the process locale."""
    return f"{day.day:02d} {MONTH_ABBR[day.month - 1]}"


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class GraphLayout:
    """Ring radii and angle offsets of the radial layout."""

    center_x: float = 0.0
    center_y: float = 0.0
    session_radius: float = 200.0
    trade_radius: float = 350.0
    asset_radius: float = 550.0
    date_radius: float = 700.0
    trade_angle_offset: float = -math.pi / 2
    date_angle_offset: float = -math.pi / 4

    def ring_position(
        self, index: int, count: int, radius: float, offset: float = 0.0
    ) -> tuple[float, float]:
        """Position of item `index` of `count` spread evenly on a ring."""
        angle = index / count * 2 * math.pi + offset
        return (
            self.center_x + math.cos(angle) * radius,
            self.center_y + math.sin(angle) * radius,
        )


DEFAULT_LAYOUT = GraphLayout()


@dataclass(frozen=True, slots=True)
class GraphNode:
    """A node of the relationship graph, tagged by kind.

    Trade nodes carry the trade; group nodes (asset, date, session) carry
    the member count and summed net profit of their group.
    """
    id: str
    kind: NodeKind
    label: str
    x: float
    y: float
    trade: Trade | None = None
    trades_count: int = 0
    total_profit: float = 0.0

    @property
    def is_trade(self) -> bool:
        return self.kind == "trade"

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "kind": self.kind,
            "label": self.label,
            "position": {"x": self.x, "y": self.y},
        }
        if self.trade is not None:
            data["ticket"] = self.trade.ticket
            data["symbol"] = self.trade.symbol
            data["profit"] = self.trade.net_profit
        else:
            data["trades_count"] = self.trades_count
            data["total_profit"] = self.total_profit
        return data


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """Undirected link between a trade node and a group node."""
    id: str
    source: str
    target: str
    kind: EdgeKind

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "kind": self.kind,
        }


@dataclass(frozen=True, slots=True)
class TradeGraph:
    """Nodes and edges of one graph build."""
    nodes: tuple[GraphNode, ...]
    edges: tuple[GraphEdge, ...]

    def nodes_of(self, kind: NodeKind) -> list[GraphNode]:
        return [n for n in self.nodes if n.kind == kind]

    def edges_of(self, kind: EdgeKind) -> list[GraphEdge]:
        return [e for e in self.edges if e.kind == kind]

    def to_dict(self) -> dict:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


@dataclass
class _Group:
    """Accumulator for one asset/date/session group."""
    trades: list[Trade] = field(default_factory=list)
    total_profit: float = 0.0

    def add(self, trade: Trade) -> None:
        self.trades.append(trade)
        self.total_profit += trade.net_profit


# =============================================================================
# Graph Construction
# =============================================================================

def trade_node_id(trade: Trade) -> str:
    return f"trade-{trade.ticket}"


def _group_trades(
    trades: Sequence[Trade],
) -> tuple[dict[str, _Group], dict[date, _Group], dict[str, _Group]]:
    """Group trades by symbol, close date and session (first-seen order)."""
    assets: dict[str, _Group] = {}
    dates: dict[date, _Group] = {}
    sessions: dict[str, _Group] = {}

    for trade in trades:
        assets.setdefault(trade.symbol, _Group()).add(trade)
        dates.setdefault(date_key(trade.close_time), _Group()).add(trade)
        sessions.setdefault(market_session(trade.open_time), _Group()).add(trade)

    return assets, dates, sessions


def build_graph(
    trades: Sequence[Trade],
    depth_level: DepthLevel = 2,
    hide_orphans: bool = False,
    layout: GraphLayout = DEFAULT_LAYOUT,
    date_limit: int = DATE_NODE_LIMIT,
) -> TradeGraph:
    """Build the relationship graph for a set of trades.

    Args:
        trades: Trades to place (duplicates are not removed)
        depth_level: Edge tiers to include (1, 2 or 3); assumed valid
        hide_orphans: Drop group nodes that ended up with no edges
        layout: Ring radii and offsets
        date_limit: Number of most recent dates shown at depth 3

    Returns:
        TradeGraph with session, trade, asset and (depth 3) date nodes

    Example:
        >>> graph = build_graph(trades, depth_level=1)
        >>> {e.kind for e in graph.edges}
        {'session'}
    """
    assets, dates, sessions = _group_trades(trades)
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []

    # Inner ring: sessions
    for index, (session, group) in enumerate(sessions.items()):
        x, y = layout.ring_position(index, len(sessions), layout.session_radius)
        nodes.append(GraphNode(
            id=f"session-{session}",
            kind="session",
            label=session,
            x=x,
            y=y,
            trades_count=len(group.trades),
            total_profit=group.total_profit,
        ))

    # Middle ring: trades in close-time order
    ordered = sorted(trades, key=lambda t: t.close_time)
    for index, trade in enumerate(ordered):
        x, y = layout.ring_position(
            index, len(ordered), layout.trade_radius, layout.trade_angle_offset
        )
        nodes.append(GraphNode(
            id=trade_node_id(trade),
            kind="trade",
            label=f"#{trade.ticket}",
            x=x,
            y=y,
            trade=trade,
        ))
        if depth_level >= 1:
            session = market_session(trade.open_time)
            edges.append(GraphEdge(
                id=f"edge-trade-session-{trade.ticket}",
                source=trade_node_id(trade),
                target=f"session-{session}",
                kind="session",
            ))

    # Outer ring: assets in first-seen order
    for index, (symbol, group) in enumerate(assets.items()):
        x, y = layout.ring_position(index, len(assets), layout.asset_radius)
        nodes.append(GraphNode(
            id=f"asset-{symbol}",
            kind="asset",
            label=symbol,
            x=x,
            y=y,
            trades_count=len(group.trades),
            total_profit=group.total_profit,
        ))
        if depth_level >= 2:
            for trade in group.trades:
                edges.append(GraphEdge(
                    id=f"edge-trade-asset-{trade.ticket}-{symbol}",
                    source=trade_node_id(trade),
                    target=f"asset-{symbol}",
                    kind="asset",
                ))

    # Outermost ring: most recent dates, oldest first
    if depth_level >= 3:
        recent = sorted(dates)[-date_limit:] if date_limit > 0 else []
        for index, day in enumerate(recent):
            group = dates[day]
            key = day.isoformat()
            x, y = layout.ring_position(
                index, len(recent), layout.date_radius, layout.date_angle_offset
            )
            nodes.append(GraphNode(
                id=f"date-{key}",
                kind="date",
                label=date_label(day),
                x=x,
                y=y,
                trades_count=len(group.trades),
                total_profit=group.total_profit,
            ))
            for trade in group.trades:
                edges.append(GraphEdge(
                    id=f"edge-trade-date-{trade.ticket}-{key}",
                    source=trade_node_id(trade),
                    target=f"date-{key}",
                    kind="date",
                ))

    if hide_orphans:
        connected = {e.target for e in edges} | {e.source for e in edges}
        nodes = [n for n in nodes if n.is_trade or n.id in connected]

    return TradeGraph(nodes=tuple(nodes), edges=tuple(edges))


# =============================================================================
# Related Trades
# =============================================================================

def are_related(a: Trade, b: Trade) -> bool:
    """Two trades are adjacent when they share symbol, close date or session."""
    return (
        a.symbol == b.symbol
        or date_key(a.close_time) == date_key(b.close_time)
        or market_session(a.open_time) == market_session(b.open_time)
    )


def related_trades(
    focal: Trade,
    all_trades: Sequence[Trade],
    max_depth: int = 1,
) -> list[Trade]:
    """Find trades reachable from `focal` within max_depth hops.

    Breadth-first search over the are_related() relation. A visited set
    of tickets prevents revisiting; the focal ticket is never returned.

    Args:
        focal: Trade to start from
        all_trades: Candidate trades
        max_depth: Hop limit; 1 returns only directly related trades

    Returns:
        Related trades in the order of all_trades

    Example:
        >>> [t.ticket for t in related_trades(a, [a, b, c], max_depth=1)]
        ['B', 'C']
    """
    visited = {focal.ticket}
    queue: deque[tuple[Trade, int]] = deque([(focal, 0)])

    while queue:
        current, depth = queue.popleft()
        if depth >= max_depth:
            continue
        for candidate in all_trades:
            if candidate.ticket in visited:
                continue
            if are_related(current, candidate):
                visited.add(candidate.ticket)
                queue.append((candidate, depth + 1))

    visited.discard(focal.ticket)
    return [t for t in all_trades if t.ticket in visited]
