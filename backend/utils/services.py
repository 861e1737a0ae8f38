from functools import lru_cache

from jobsearch.search import JobSearchService
from jobsearch.shared import SearchSettings


@lru_cache(maxsize=1)
def get_job_search_service() -> JobSearchService:
    """
    Get the process-wide JobSearchService.

    Settings are read from the environment on first use; adapters and the
    chat client are shared across requests.

    Returns:
        JobSearchService instance
    """
    return JobSearchService(settings=SearchSettings.from_env())
