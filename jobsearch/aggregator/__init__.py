"""
Aggregator Service

Provider fan-out with retry/fallback, and cross-provider deduplication.
"""

from .deduplicator import dedup_key, deduplicate
from .fallback import FallbackResult, FallbackRunner
from .job_aggregator import AggregationResult, JobAggregator, ProviderOutcome, ProviderRunStat

__all__ = [
    "AggregationResult",
    "FallbackResult",
    "FallbackRunner",
    "JobAggregator",
    "ProviderOutcome",
    "ProviderRunStat",
    "dedup_key",
    "deduplicate",
]
