"""
Query building service.

Builds the provider search phrase from skills and an optional query.
"""

from .query_builder import (
    EnhancedSearch,
    QueryBuilder,
    SearchEnhancer,
    SearchPlan,
    build_search_query,
)
from .title_patterns import FALLBACK_QUERIES

__all__ = [
    "EnhancedSearch",
    "FALLBACK_QUERIES",
    "QueryBuilder",
    "SearchEnhancer",
    "SearchPlan",
    "build_search_query",
]
