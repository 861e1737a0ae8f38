"""
Job search pipeline entry point.

Wires the query builder, provider aggregator, deduplicator and ranker into
one call. `search(payload)` is the wire-level contract used by the HTTP
layer; `run(request)` / `run_async(request)` return the full SearchOutcome
with per-provider diagnostics.
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from ..aggregator.deduplicator import deduplicate
from ..aggregator.fallback import FallbackRunner
from ..aggregator.job_aggregator import JobAggregator, ProviderRunStat
from ..enricher.chatgpt_client import ChatGPTClient
from ..extractor.provider_registry import ProviderSet, build_providers
from ..jobs.job_posting import JobPosting
from ..jobs.search_request import SearchRequest, parse_search_request
from ..query.query_builder import QueryBuilder, SearchEnhancer
from ..ranker.job_ranker import JobRanker, JobScorer
from ..shared.config import SearchSettings
from ..shared.errors import sanitize_error_message
from ..shared.structured_logging import get_structured_logger

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Final postings plus the phrase used and per-provider stats."""

    jobs: list[JobPosting] = field(default_factory=list)
    query: str = ""
    stats: list[ProviderRunStat] = field(default_factory=list)
    raw_count: int = 0
    unique_count: int = 0

    @property
    def errors(self) -> list[str]:
        return [f"{s.name}: {s.error_message}" for s in self.stats if s.error_message]

    def to_response(self) -> dict[str, Any]:
        return {"jobs": [job.to_dict() for job in self.jobs]}


class JobSearchService:
    """
    Service for running one job search end to end.

    Holds no per-request mutable state; concurrent requests share only the
    configured adapters and clients.
    """

    def __init__(
        self,
        settings: SearchSettings | None = None,
        providers: ProviderSet | None = None,
        assistant: Any = None,
        runner: FallbackRunner | None = None,
    ):
        """
        Initialize the search service.

        Args:
            settings: Process configuration; read from the environment if omitted
            providers: Provider adapters; built from settings if omitted
            assistant: Optional object implementing enhance_search/score_jobs;
                a ChatGPTClient is built from settings if omitted
            runner: Retry/fallback runner; built from settings if omitted
        """
        self.settings = settings or SearchSettings.from_env()
        self.providers = providers if providers is not None else build_providers(self.settings)
        if assistant is None:
            assistant = ChatGPTClient.from_settings(self.settings)
        self.assistant = assistant

        timeout = self.settings.attempt_timeout
        enhancer: SearchEnhancer | None = None
        scorer: JobScorer | None = None
        if hasattr(assistant, "enhance_search"):
            enhancer = assistant
        if hasattr(assistant, "score_jobs"):
            scorer = assistant

        self.query_builder = QueryBuilder(enhancer=enhancer, timeout=timeout)
        self.aggregator = JobAggregator(
            self.providers, runner=runner or FallbackRunner(attempt_timeout=timeout)
        )
        self.ranker = JobRanker(
            scorer=scorer,
            batch_size=self.settings.rank_batch_size,
            result_limit=self.settings.result_limit,
            timeout=timeout,
        )

    async def run_async(self, request: SearchRequest) -> SearchOutcome:
        """
        Run the pipeline for one parsed request.

        Provider failures never raise here; they show up as empty results and
        in the returned stats.
        """
        log = get_structured_logger(__name__, request_id=uuid.uuid4().hex[:8])
        log.info(
            f"Job search started: skills={list(request.skills)}, "
            f"query={request.free_text_query!r}, resume={request.has_resume}"
        )

        plan = await self.query_builder.build_plan(request.skills, request.free_text_query)
        log = log.bind(query=plan.query)
        aggregation = await self.aggregator.aggregate(plan, request.skills)
        unique = deduplicate(aggregation.jobs)
        ranked = await self.ranker.rank(unique, request.resume_text, request.skills)

        outcome = SearchOutcome(
            jobs=ranked,
            query=plan.query,
            stats=aggregation.stats,
            raw_count=len(aggregation.jobs),
            unique_count=len(unique),
        )
        self._log_summary(log, outcome)
        return outcome

    def run(self, request: SearchRequest) -> SearchOutcome:
        """
        Synchronous wrapper around run_async.

        Safe to call from a thread that already runs an event loop; the
        pipeline then runs on a fresh loop in a worker thread.
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return asyncio.run(self.run_async(request))

        logger.warning(
            "run called from async context. Use run_async instead. "
            "Creating new event loop in thread."
        )

        def run_in_new_loop() -> SearchOutcome:
            new_loop = asyncio.new_event_loop()
            asyncio.set_event_loop(new_loop)
            try:
                return new_loop.run_until_complete(self.run_async(request))
            finally:
                new_loop.close()

        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as executor:
            return executor.submit(run_in_new_loop).result()

    def search(self, payload: Any) -> dict[str, Any]:
        """
        Search for jobs matching a request body.

        Args:
            payload: Request body with skills, optional query and resumeText

        Returns:
            {"jobs": [...]} on success or provider-level failure;
            {"jobs": [], "error": ...} if the pipeline itself faulted

        Raises:
            SearchRequestError: If the payload is malformed
        """
        request = parse_search_request(payload)
        try:
            return self.run(request).to_response()
        except Exception as e:
            logger.error(f"Job search failed: {e}", exc_info=True)
            return {"jobs": [], "error": sanitize_error_message(e)}

    @staticmethod
    def _log_summary(log: logging.LoggerAdapter, outcome: SearchOutcome) -> None:
        counts = ", ".join(f"{s.name}={s.job_count}" for s in outcome.stats) or "none"
        log.info(
            f"Job search finished: raw={outcome.raw_count}, "
            f"unique={outcome.unique_count}, returned={len(outcome.jobs)}, providers: {counts}"
        )
        if outcome.errors:
            log.warning(f"Provider errors: {'; '.join(outcome.errors)}")

        if outcome.jobs:
            return

        lines = [f"No jobs found for query '{outcome.query}'."]
        if not outcome.stats:
            lines.append("  No providers are configured.")
        for stat in outcome.stats:
            reason = stat.error_message or "returned no results for any query"
            lines.append(f"  {stat.name}: {reason}")
        if outcome.stats and not any(s.error_message for s in outcome.stats):
            lines.append("  All providers responded but found nothing; try broader skills.")
        log.warning("\n".join(lines))
