"""Data repositories for Trade Analytics.

Provides abstracted data access through the Repository pattern:
- ReportRepository: Broker statement exports parsed into trades
"""

from trade_analytics.infrastructure.repositories.base import Repository, RepositoryError
from trade_analytics.infrastructure.repositories.report_repo import (
    ReportRepository,
    TRADE_SCHEMA,
    trades_to_frame,
)

__all__ = [
    "Repository",
    "RepositoryError",
    "ReportRepository",
    "TRADE_SCHEMA",
    "trades_to_frame",
]
