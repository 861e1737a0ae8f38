"""
Job models.

Canonical posting model, field normalization helpers and request parsing.
"""

from .job_posting import JobPosting
from .search_request import SearchRequest, parse_search_request

__all__ = ["JobPosting", "SearchRequest", "parse_search_request"]
