"""Report Repository: Access to broker statement exports.

Reads reports/{name}.txt files and parses them into Trade lists.
Also offers a polars view of trades for tabular export.
"""

from pathlib import Path
from typing import Sequence

import polars as pl

from trade_analytics.domain.models import Trade
from trade_analytics.infrastructure.config import ReportPaths, ReportFormat, DEFAULT_PATHS, DEFAULT_FORMAT
from trade_analytics.infrastructure.parsing import ReportParser
from trade_analytics.infrastructure.repositories.base import Repository, RepositoryError

TRADE_SCHEMA = {
    "ticket": pl.Utf8,
    "open_time": pl.Datetime,
    "close_time": pl.Datetime,
    "side": pl.Utf8,
    "size": pl.Float64,
    "symbol": pl.Utf8,
    "open_price": pl.Float64,
    "close_price": pl.Float64,
    "commission": pl.Float64,
    "swap": pl.Float64,
    "profit": pl.Float64,
    "net_profit": pl.Float64,
    "duration": pl.Float64,
    "is_win": pl.Boolean,
}


def trades_to_frame(trades: Sequence[Trade]) -> pl.DataFrame:
    """Tabular view of trades, one row per trade in input order.

    Returns:
        DataFrame with the TRADE_SCHEMA columns
    """
    rows = [
        {
            "ticket": t.ticket,
            "open_time": t.open_time,
            "close_time": t.close_time,
            "side": t.side,
            "size": t.size,
            "symbol": t.symbol,
            "open_price": t.open_price,
            "close_price": t.close_price,
            "commission": t.commission,
            "swap": t.swap,
            "profit": t.profit,
            "net_profit": t.net_profit,
            "duration": t.duration,
            "is_win": t.is_win,
        }
        for t in trades
    ]
    return pl.DataFrame(rows, schema=TRADE_SCHEMA)


class ReportRepository(Repository[list[Trade]]):
    """Repository for broker statement reports.

    Example:
        >>> repo = ReportRepository()
        >>> trades = repo.get_report("2024-01")
        >>> names = repo.list_reports()
    """

    def __init__(
        self,
        paths: ReportPaths = DEFAULT_PATHS,
        report_format: ReportFormat = DEFAULT_FORMAT,
    ):
        self._paths = paths
        self._parser = ReportParser(report_format)
        self._cache: dict[str, list[Trade]] = {}

    def get_all(self) -> list[Trade]:
        """Load trades of every report, in report-name order.

        Raises:
            RepositoryError: If there are no reports
        """
        names = self.list_reports()
        if not names:
            raise RepositoryError("No reports found", str(self._paths.reports_dir))

        trades = []
        for name in names:
            trades.extend(self.get_report(name))
        return trades

    def get_report(self, name: str) -> list[Trade]:
        """Load the trades of a single report by name."""
        if name in self._cache:
            return self._cache[name]

        trades = self.read_file(self._paths.report_path(name))
        self._cache[name] = trades
        return trades

    def read_file(self, path: Path) -> list[Trade]:
        """Parse a report file at any path (not cached).

        Raises:
            RepositoryError: If the file is missing, unreadable or not UTF-8
        """
        if not path.exists():
            raise RepositoryError("Report not found", str(path))

        try:
            text = path.read_text(encoding="utf-8-sig")
        except UnicodeDecodeError as e:
            raise RepositoryError(f"Report is not valid UTF-8: {e.reason}", str(path))
        except OSError as e:
            raise RepositoryError(f"Failed to read report: {e}", str(path))

        return self._parser.parse(text)

    def get_frame(self, name: str) -> pl.DataFrame:
        """Load a report as a polars DataFrame."""
        return trades_to_frame(self.get_report(name))

    def list_reports(self) -> list[str]:
        """Get names of all available reports."""
        return self._paths.list_reports()

    def clear_cache(self) -> None:
        """Clear cached trades."""
        self._cache.clear()
