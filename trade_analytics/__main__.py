"""Entry point for running trade_analytics as a module.

Usage:
    python -m trade_analytics [command] [options]

Commands:
    metrics     Performance and risk summary of a report
    graph       Relationship graph (session/asset/date tiers)
    related     Trades related to a ticket
    breakdown   Net profit by day, weekday, hour, month or holding time

Examples:
    python -m trade_analytics metrics statement.txt --balance 5000
    python -m trade_analytics graph statement.txt --depth 3 --hide-orphans
    python -m trade_analytics related statement.txt 12345678 --max-depth 2
    python -m trade_analytics breakdown statement.txt --by holding --top 3
"""

import sys

from trade_analytics.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
