"""Application Layer: Use cases and service orchestration.

This layer contains:
- services/: Business logic orchestration
  - journal.py: Filtered metrics, risk statistics and relationship graph
"""

from trade_analytics.application.services import (
    JournalAnalyzer,
    JournalAnalysisResult,
)

__all__ = [
    "JournalAnalyzer",
    "JournalAnalysisResult",
]
