"""Configuration: Centralized paths and settings.

This module provides:
- ReportPaths: Where broker reports are read from
- ReportFormat: Markers and column rules of the broker report text
- AnalysisConfig: Parameters for metric and graph algorithms

Directory Structure:
    reports/
    ├── 2024-01.txt          # Broker statement exports
    └── ...
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ReportPaths:
    """File paths for broker reports.

    Attributes:
        root: Project root directory
        pattern: Glob used to discover report files
    """

    root: Path = Path(".")
    pattern: str = "*.txt"

    @property
    def reports_dir(self) -> Path:
        """Directory holding broker statement exports."""
        return self.root / "reports"

    def report_path(self, name: str) -> Path:
        """Path to a named report.

        Accepts a bare stem ("2024-01") or a file name ("2024-01.txt").
        """
        path = self.reports_dir / name
        if path.suffix:
            return path
        return path.with_suffix(Path(self.pattern).suffix or ".txt")

    def list_reports(self) -> list[str]:
        """List all report file names."""
        if not self.reports_dir.exists():
            return []
        return sorted(p.name for p in self.reports_dir.glob(self.pattern) if p.is_file())

    def validate(self) -> list[str]:
        """Check which required paths are missing.

        Returns:
            List of missing paths (empty if all exist)
        """
        missing = []
        if not self.reports_dir.exists():
            missing.append(str(self.reports_dir))
        return missing


@dataclass(frozen=True)
class ReportFormat:
    """Layout of the closed-transactions section in a broker report.

    Markers are matched case-insensitively as substrings of a line.

    Attributes:
        anchor: Marks the start of the closed-transactions section
        terminators: Any of these ends the section (totals/footer)
        skip_markers: Ledger or cancelled rows that are not trades
        timestamp_formats: strptime formats tried in order
        min_fields: Rows with fewer tab-separated fields are ignored
    """

    anchor: str = "closed transactions"
    terminators: tuple[str, ...] = ("total", "closed p/l", "open trades")
    skip_markers: tuple[str, ...] = (
        "balance",
        "deposit",
        "withdrawal",
        "credit",
        "cancelled",
        "canceled",
    )
    timestamp_formats: tuple[str, ...] = ("%Y.%m.%d %H:%M", "%Y.%m.%d %H:%M:%S")
    min_fields: int = 10


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for analysis algorithms.

    Attributes:
        initial_balance: Starting balance for equity curve and drawdown
        sharpe_period_cap: Cap on n in sqrt(n) scaling of Sharpe/Sortino
        sqn_period_cap: Cap on n in sqrt(n) scaling of SQN
        sqn_min_trades: Below this SQN is reported as insufficient
        date_node_limit: Most recent distinct dates shown in the graph
        contract_size: Units per lot for manually entered trades
    """

    initial_balance: float = 10_000.0
    sharpe_period_cap: int = 252
    sqn_period_cap: int = 100
    sqn_min_trades: int = 10
    date_node_limit: int = 30
    contract_size: float = 100_000.0


# Default instances
DEFAULT_PATHS = ReportPaths()
DEFAULT_FORMAT = ReportFormat()
DEFAULT_CONFIG = AnalysisConfig()
