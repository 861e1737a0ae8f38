"""
Job aggregator for multi-provider job collection.

Runs every configured provider through the fallback runner and merges the
results:
- Free providers run first, one after another
- Paid providers run as concurrent tasks joined with settle-all semantics;
  each task converts its own failure into a ProviderOutcome, so one engine
  failing never cancels or hides its siblings
- Every attempt of the run gets its own worker on a per-run AttemptExecutor,
  so hung providers cannot starve healthy ones and are not waited for
- A ProviderRunStat (name, job count, error) is recorded per provider

Total failure is not an error: it resolves to an empty job list.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..extractor.base_client import JobProvider
from ..extractor.provider_registry import ProviderSet
from ..jobs.job_posting import JobPosting
from ..query.query_builder import SearchPlan
from ..shared.concurrency import AttemptExecutor
from ..shared.structured_logging import log_with_context
from .fallback import FallbackRunner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderRunStat:
    """Diagnostics for one provider run."""

    name: str
    job_count: int
    error_message: str | None = None


@dataclass(frozen=True)
class ProviderOutcome:
    """Success-or-failure result of one provider task."""

    jobs: tuple[JobPosting, ...]
    stat: ProviderRunStat

    @property
    def failed(self) -> bool:
        return self.stat.error_message is not None and not self.jobs


@dataclass
class AggregationResult:
    """Merged postings plus per-provider stats, in run order."""

    jobs: list[JobPosting] = field(default_factory=list)
    stats: list[ProviderRunStat] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [f"{s.name}: {s.error_message}" for s in self.stats if s.error_message]

    def counts(self) -> dict[str, int]:
        return {s.name: s.job_count for s in self.stats}


class JobAggregator:
    """
    Aggregates postings from all configured providers.

    Holds no per-request state; aggregate() may be awaited concurrently.
    """

    def __init__(self, providers: ProviderSet, runner: FallbackRunner | None = None):
        """
        Initialize aggregator.

        Args:
            providers: Free and paid provider adapters
            runner: Fallback runner applied to every provider
        """
        self.providers = providers
        self.runner = runner or FallbackRunner()

    async def run_provider(
        self,
        provider: JobProvider,
        plan: SearchPlan,
        skills: Sequence[str] = (),
        executor: AttemptExecutor | None = None,
    ) -> ProviderOutcome:
        """
        Run one provider through the fallback runner.

        Never raises; any failure is captured in the returned outcome.
        """
        name = provider.name
        fetch = functools.partial(provider.fetch, location=plan.location, skills=tuple(skills))
        try:
            result = await self.runner.run(name, fetch, plan.query, executor)
        except Exception as e:
            log_with_context(
                logger,
                logging.ERROR,
                f"Provider run crashed: {e}",
                exc_info=True,
                provider=name,
            )
            return ProviderOutcome(jobs=(), stat=ProviderRunStat(name, 0, str(e)))

        error = None if result.jobs else result.last_error
        outcome = ProviderOutcome(
            jobs=tuple(result.jobs),
            stat=ProviderRunStat(name, len(result.jobs), error),
        )
        if outcome.failed:
            log_with_context(
                logger,
                logging.WARNING,
                f"No jobs after {result.attempts} attempt(s): {error}",
                provider=name,
            )
        return outcome

    async def aggregate(self, plan: SearchPlan, skills: Sequence[str] = ()) -> AggregationResult:
        """
        Collect postings from every provider.

        Args:
            plan: Search plan with phrase and location hint
            skills: Candidate skills, for providers that search by skill

        Returns:
            AggregationResult with postings concatenated in provider order
        """
        aggregation = AggregationResult()
        provider_count = len(self.providers.free) + len(self.providers.paid)
        if not provider_count:
            logger.warning("No job providers configured")
            return aggregation

        workers = provider_count * self.runner.max_attempts(plan.query)
        with AttemptExecutor(workers, name="job-provider") as executor:
            for provider in self.providers.free:
                outcome = await self.run_provider(provider, plan, skills, executor)
                self._record(aggregation, outcome)

            if self.providers.paid:
                tasks = [
                    asyncio.create_task(self.run_provider(provider, plan, skills, executor))
                    for provider in self.providers.paid
                ]
                results = await asyncio.gather(*tasks, return_exceptions=True)
            else:
                results = []

            for provider, outcome in zip(self.providers.paid, results, strict=True):
                if isinstance(outcome, BaseException):
                    logger.error(f"[JOB SEARCH ERROR][{provider.name}]: {outcome}")
                    outcome = ProviderOutcome(
                        jobs=(), stat=ProviderRunStat(provider.name, 0, str(outcome))
                    )
                self._record(aggregation, outcome)

        logger.info(
            f"Aggregated {len(aggregation.jobs)} jobs from {len(aggregation.stats)} provider(s)"
        )
        return aggregation

    @staticmethod
    def _record(aggregation: AggregationResult, outcome: ProviderOutcome) -> None:
        aggregation.jobs.extend(outcome.jobs)
        aggregation.stats.append(outcome.stat)
