"""Application Services for Trade Analytics.

Services orchestrate repository access and domain calculations.

Available services:
- JournalAnalyzer: Metrics, risk, graph and related trades for a journal
"""

from trade_analytics.application.services.journal import (
    JournalAnalyzer,
    JournalAnalysisResult,
)

__all__ = [
    "JournalAnalyzer",
    "JournalAnalysisResult",
]
