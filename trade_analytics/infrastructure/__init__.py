"""Infrastructure layer for Trade Analytics.

Contains:
- config: Report paths, report format and analysis configuration
- parsing: Broker report text parser
- repositories: Report file access
"""

from trade_analytics.infrastructure.config import (
    ReportPaths,
    ReportFormat,
    AnalysisConfig,
    DEFAULT_PATHS,
    DEFAULT_FORMAT,
    DEFAULT_CONFIG,
)
from trade_analytics.infrastructure.parsing import (
    ReportParser,
    parse_report,
)
from trade_analytics.infrastructure.repositories import (
    Repository,
    RepositoryError,
    ReportRepository,
    trades_to_frame,
)

__all__ = [
    # Config
    "ReportPaths",
    "ReportFormat",
    "AnalysisConfig",
    "DEFAULT_PATHS",
    "DEFAULT_FORMAT",
    "DEFAULT_CONFIG",
    # Parsing
    "ReportParser",
    "parse_report",
    # Repositories
    "Repository",
    "RepositoryError",
    "ReportRepository",
    "trades_to_frame",
]
