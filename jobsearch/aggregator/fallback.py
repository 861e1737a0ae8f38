"""
Retry/fallback runner for a single provider.

Runs the provider with the initial query and, when that yields nothing or
fails, walks a fixed list of generic queries until one returns postings.
Each attempt runs on an AttemptExecutor and is bounded by a timeout that
starts when the call starts; a timeout counts as a failed attempt. In-flight
calls that time out are abandoned, not cancelled, and never delay the run.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from ..jobs.job_posting import JobPosting
from ..query.title_patterns import FALLBACK_QUERIES
from ..shared.concurrency import AttemptExecutor
from ..shared.errors import AttemptTimeoutError

logger = logging.getLogger(__name__)

FetchFn = Callable[[str], list[JobPosting]]


@dataclass
class FallbackResult:
    """Outcome of one provider run across all attempts."""

    jobs: list[JobPosting] = field(default_factory=list)
    query_used: str | None = None
    attempts: int = 0
    last_error: str | None = None


class FallbackRunner:
    """
    Runs one provider fetch with a per-attempt timeout and fallback queries.

    Holds configuration only; the same runner can drive any number of
    providers concurrently.
    """

    def __init__(
        self,
        fallback_queries: Sequence[str] = FALLBACK_QUERIES,
        attempt_timeout: float = 30.0,
    ):
        if attempt_timeout <= 0:
            raise ValueError(f"attempt_timeout must be positive, got: {attempt_timeout}")
        self.fallback_queries = tuple(fallback_queries)
        self.attempt_timeout = attempt_timeout

    def queries_for(self, initial_query: str) -> list[str]:
        """Initial query followed by every fallback that differs from it."""
        return [initial_query, *(q for q in self.fallback_queries if q != initial_query)]

    def max_attempts(self, initial_query: str) -> int:
        return len(self.queries_for(initial_query))

    async def _attempt(
        self, executor: AttemptExecutor, provider_name: str, fetch: FetchFn, query: str
    ) -> list[JobPosting]:
        try:
            return await executor.run(fetch, query, timeout=self.attempt_timeout)
        except TimeoutError as e:
            raise AttemptTimeoutError(provider_name, self.attempt_timeout) from e

    async def run(
        self,
        provider_name: str,
        fetch: FetchFn,
        initial_query: str,
        executor: AttemptExecutor | None = None,
    ) -> FallbackResult:
        """
        Run fetch with the initial query, then fallbacks, until one returns postings.

        Args:
            provider_name: Name used in logs and errors
            fetch: Callable taking a search phrase and returning postings
            initial_query: Phrase tried first
            executor: Shared executor for the aggregation run; a private one
                sized for every attempt is used when omitted

        Returns:
            FallbackResult; jobs is empty when every attempt failed or was empty
        """
        if executor is None:
            with AttemptExecutor(self.max_attempts(initial_query), name=provider_name) as own:
                return await self.run(provider_name, fetch, initial_query, own)

        result = FallbackResult()

        for query in self.queries_for(initial_query):
            result.attempts += 1
            kind = "initial" if result.attempts == 1 else "fallback"
            try:
                jobs = await self._attempt(executor, provider_name, fetch, query)
            except Exception as e:
                result.last_error = str(e)
                logger.warning(f"{provider_name} failed with {kind} query '{query}': {e}")
                continue

            if jobs:
                logger.info(
                    f"{provider_name} returned {len(jobs)} jobs with {kind} query: '{query}'"
                )
                result.jobs = list(jobs)
                result.query_used = query
                return result

        logger.info(
            f"{provider_name} returned 0 jobs after trying {result.attempts} queries"
        )
        return result
