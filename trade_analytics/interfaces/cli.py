"""Command Line Interface for Trade Analytics.

Provides CLI access to analytics functions:
- metrics: Performance and risk summary of a report
- graph: Relationship graph of a report
- related: Trades related to one ticket
- breakdown: Net profit by day, weekday, hour, month or holding time

Usage:
    python -m trade_analytics metrics REPORT [--balance B] [--symbol S]
    python -m trade_analytics graph REPORT [--depth {1,2,3}] [--hide-orphans]
    python -m trade_analytics related REPORT TICKET [--max-depth N] [--json]
    python -m trade_analytics breakdown REPORT [--by KEY] [--top N]
"""

import argparse
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from trade_analytics import __version__
from trade_analytics.domain.filters import TradeFilter, DURATION_BUCKETS
from trade_analytics.domain.metrics import holding_time_extremes
from trade_analytics.domain.models import Ratio, UNBOUNDED
from trade_analytics.infrastructure import DEFAULT_CONFIG, ReportRepository, RepositoryError
from trade_analytics.application import JournalAnalyzer
from trade_analytics.application.services.journal import BREAKDOWNS

logger = logging.getLogger(__name__)


def _fmt_ratio(value: Ratio, digits: int = 2) -> str:
    if value is UNBOUNDED:
        return "∞"
    return f"{value:.{digits}f}"


def _load(args: argparse.Namespace) -> JournalAnalyzer:
    trades = ReportRepository().read_file(Path(args.report))
    logger.info("Loaded %d trades from %s", len(trades), args.report)
    return JournalAnalyzer(trades, DEFAULT_CONFIG)


def _filter_from_args(args: argparse.Namespace) -> TradeFilter:
    return TradeFilter(
        symbol_search=args.symbol or "",
        outcome=args.outcome,
        side=args.side,
        duration=args.duration,
        since=args.since,
    )


def cmd_metrics(args: argparse.Namespace) -> int:
    """Show performance and risk summary."""
    analyzer = _load(args)
    result = analyzer.analyze(_filter_from_args(args), initial_balance=args.balance)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    m = result.metrics
    r = result.risk

    print(f"Trade Analytics v{__version__}")
    print("=" * 50)
    print()

    print("[Performance]")
    print(f"  Trades:          {m.total_trades}  ({m.total_wins} W / {m.total_losses} L)")
    print(f"  Win rate:        {m.win_rate:.2f}%")
    print(f"  Net PNL:         {m.total_pnl:+,.2f}")
    print(f"  Profit factor:   {_fmt_ratio(m.profit_factor)}")
    print(f"  Expectancy:      {m.expectancy:+,.2f}")
    print(f"  Avg win / loss:  {m.avg_win:+,.2f} / {m.avg_loss:+,.2f}")
    print(f"  Largest win:     {m.largest_win:+,.2f}")
    print(f"  Largest loss:    {m.largest_loss:+,.2f}")
    print(f"  Max drawdown:    {m.max_drawdown:,.2f} ({m.max_drawdown_percent:.2f}%)")
    print(f"  Final balance:   {m.final_balance:,.2f}")
    print()

    print("[Risk]")
    print(f"  Sharpe:          {r.sharpe_ratio:.2f}")
    print(f"  Sortino:         {_fmt_ratio(r.sortino_ratio)}")
    print(f"  Recovery factor: {_fmt_ratio(r.recovery_factor)}")
    print(f"  Payoff ratio:    {_fmt_ratio(r.payoff_ratio)}")
    print(f"  Kelly:           {r.kelly_percent:.1f}%")
    print(f"  Calmar:          {_fmt_ratio(r.calmar_ratio)}")
    print(f"  RoMaD:           {_fmt_ratio(r.romad)}%")
    print(f"  CPC index:       {r.cpc_index:.3f}")
    print(f"  SQN:             {r.sqn.value:.2f} ({r.sqn.grade})")
    print()

    if result.streak.count >= 2:
        print(f"Current streak: {result.streak.count} {result.streak.kind}s")

    return 0


def cmd_graph(args: argparse.Namespace) -> int:
    """Build the relationship graph."""
    analyzer = _load(args)
    graph = analyzer.graph(depth_level=args.depth, hide_orphans=args.hide_orphans)

    if args.json:
        print(json.dumps(graph.to_dict(), indent=2))
        return 0

    print(f"[Graph depth {args.depth}]")
    for kind in ("trade", "session", "asset", "date"):
        print(f"  {kind:<8} nodes: {len(graph.nodes_of(kind))}")
    for kind in ("session", "asset", "date"):
        print(f"  {kind:<8} edges: {len(graph.edges_of(kind))}")
    print()

    for node in graph.nodes:
        if node.is_trade:
            continue
        print(f"  {node.kind:<8} {node.label:<12} {node.trades_count:>5} trades "
              f"{node.total_profit:>+12,.2f}")

    return 0


def cmd_related(args: argparse.Namespace) -> int:
    """List trades related to one ticket."""
    analyzer = _load(args)
    related = analyzer.related(args.ticket, max_depth=args.max_depth)

    if related is None:
        print(f"Ticket not found: {args.ticket}")
        return 1

    if args.json:
        print(json.dumps({
            "ticket": args.ticket,
            "max_depth": args.max_depth,
            "related": [t.to_dict() for t in related],
        }, indent=2))
        return 0

    print(f"[Related to #{args.ticket}, max depth {args.max_depth}]")
    print(f"{'Ticket':<12} {'Symbol':<10} {'Side':<5} {'Closed':<17} {'Net':>10}")
    print("-" * 58)
    for trade in related:
        print(f"{trade.ticket:<12} {trade.symbol:<10} {trade.side:<5} "
              f"{trade.close_time:%Y-%m-%d %H:%M} {trade.net_profit:>+10.2f}")
    print(f"\n{len(related)} related trades")

    return 0


def cmd_breakdown(args: argparse.Namespace) -> int:
    """Show net profit grouped by one key, plus best and worst trades."""
    analyzer = _load(args)
    df = analyzer.breakdown(args.by)
    best, worst = analyzer.best_worst(args.top)

    if args.json:
        print(json.dumps({
            "by": args.by,
            "rows": df.to_dicts(),
            "best": [t.to_dict() for t in best],
            "worst": [t.to_dict() for t in worst],
        }, indent=2, default=str))
        return 0

    print(f"[Net profit by {args.by}]")
    keys = [c for c in df.columns if c not in ("trades", "wins", "net_profit")]
    for row in df.iter_rows(named=True):
        label = " ".join(str(row[k]) for k in keys)
        print(f"  {label:<12} {row['trades']:>5} trades {row['wins']:>5} wins "
              f"{row['net_profit']:>+12,.2f}")
    if len(df) == 0:
        print("  No trades")

    if args.by == "holding":
        extremes = holding_time_extremes(analyzer.trades)
        if extremes is not None:
            print(f"\nBest holding time: {extremes[0]}, worst: {extremes[1]}")

    for title, trades in (("Best", best), ("Worst", worst)):
        print(f"\n[{title} {args.top}]")
        for trade in trades:
            print(f"  #{trade.ticket:<10} {trade.symbol:<10} "
                  f"{trade.close_time:%Y-%m-%d} {trade.net_profit:>+12,.2f}")

    return 0


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return number


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        prog="trade_analytics",
        description="Trade Analytics - Broker Report Performance Analysis",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show parser warnings and debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # metrics command
    metrics_parser = subparsers.add_parser("metrics", help="Performance and risk summary")
    metrics_parser.add_argument("report", help="Path to broker report")
    metrics_parser.add_argument(
        "-b", "--balance",
        type=float,
        default=None,
        help=f"Initial balance (default {DEFAULT_CONFIG.initial_balance:,.0f})",
    )
    metrics_parser.add_argument("--symbol", help="Symbol substring filter")
    metrics_parser.add_argument("--outcome", choices=("all", "win", "loss"), default="all")
    metrics_parser.add_argument("--side", choices=("all", "buy", "sell"), default="all")
    metrics_parser.add_argument(
        "--duration",
        choices=("all", *DURATION_BUCKETS),
        default="all",
    )
    metrics_parser.add_argument(
        "--since",
        type=datetime.fromisoformat,
        help="Only trades closed at/after (ISO date)",
    )
    metrics_parser.add_argument("--json", action="store_true", help="Print JSON")

    # graph command
    graph_parser = subparsers.add_parser("graph", help="Relationship graph")
    graph_parser.add_argument("report", help="Path to broker report")
    graph_parser.add_argument(
        "-d", "--depth",
        type=int,
        choices=(1, 2, 3),
        default=2,
        help="Edge tiers: 1=session, 2=+asset, 3=+date",
    )
    graph_parser.add_argument(
        "--hide-orphans",
        action="store_true",
        help="Drop group nodes without edges",
    )
    graph_parser.add_argument("--json", action="store_true", help="Print JSON")

    # related command
    related_parser = subparsers.add_parser("related", help="Related trades")
    related_parser.add_argument("report", help="Path to broker report")
    related_parser.add_argument("ticket", help="Ticket of the focal trade")
    related_parser.add_argument(
        "-m", "--max-depth",
        type=_positive_int,
        default=1,
        help="Hops to follow from the focal trade",
    )
    related_parser.add_argument("--json", action="store_true", help="Print JSON")

    # breakdown command
    breakdown_parser = subparsers.add_parser("breakdown", help="Grouped net profit")
    breakdown_parser.add_argument("report", help="Path to broker report")
    breakdown_parser.add_argument(
        "--by",
        choices=tuple(BREAKDOWNS),
        default="weekday",
        help="Grouping key",
    )
    breakdown_parser.add_argument(
        "--top",
        type=_positive_int,
        default=5,
        help="Number of best and worst trades to list",
    )
    breakdown_parser.add_argument("--json", action="store_true", help="Print JSON")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "metrics": cmd_metrics,
        "graph": cmd_graph,
        "related": cmd_related,
        "breakdown": cmd_breakdown,
    }

    try:
        return commands[args.command](args)
    except RepositoryError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
