"""Reconciliation and ranking pipeline.

Components:
- MetricFetcher: Token Terminal API → explorer page → fallback
- TableParser: Fed release text → ranked banks
- RankMerger: insert metric entity, re-rank, window
- Orchestrator: main coordinator
"""

from bankrank.pipeline.merger import RankMerger
from bankrank.pipeline.metric import (
    ExtractionRule,
    LastKnownGood,
    MetricFetcher,
    PlausibleRange,
)
from bankrank.pipeline.orchestrator import Orchestrator, RankingResult
from bankrank.pipeline.parser import TableParser

__all__ = [
    "ExtractionRule",
    "LastKnownGood",
    "MetricFetcher",
    "PlausibleRange",
    "Orchestrator",
    "RankingResult",
    "RankMerger",
    "TableParser",
]
