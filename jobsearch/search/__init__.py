"""
Search Service

Pipeline entry point: request in, ranked and bounded postings out.
"""

from .job_search_service import JobSearchService, SearchOutcome

__all__ = ["JobSearchService", "SearchOutcome"]
