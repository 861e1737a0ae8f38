"""
Job Ranker Service

Scores deduplicated postings against a candidate's resume (when one is
given) and produces the final, bounded ordering.

Ordering keys, in priority order:
1. Scored postings before unscored ones
2. Higher match score first
3. More skills first
4. Shorter title first
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from ..jobs.job_posting import JobPosting
from ..shared.concurrency import AttemptExecutor

logger = logging.getLogger(__name__)

DEFAULT_RESULT_LIMIT = 50
DEFAULT_BATCH_SIZE = 5


@dataclass(frozen=True)
class JobScore:
    """Relevance of one posting to the resume."""

    match_score: int
    recommendation: str | None = None


class JobScorer(Protocol):
    """Scores one batch of postings; returns a mapping of posting id to score."""

    def score_jobs(
        self, resume_text: str, jobs: Sequence[JobPosting], skills: Sequence[str]
    ) -> dict[str, JobScore] | None:
        ...


def clamp_score(value: float) -> int:
    """Round and clamp to the 0-100 range."""
    return max(0, min(100, round(value)))


def recommendation_for(match_score: int, label: str | None = None) -> str:
    """
    Map a score to a recommendation badge.

    high: score >= 80 or labelled high; medium: score >= 50 or labelled
    medium; low otherwise.
    """
    if label == "high" or match_score >= 80:
        return "high"
    if label == "medium" or match_score >= 50:
        return "medium"
    return "low"


def sort_key(job: JobPosting) -> tuple[int, int, int, int]:
    scored = job.match_score is not None
    return (
        0 if scored else 1,
        -(job.match_score or 0),
        -len(job.skills),
        len(job.title),
    )


def sort_jobs(jobs: Sequence[JobPosting]) -> list[JobPosting]:
    """Stable sort by the ranking keys."""
    return sorted(jobs, key=sort_key)


class JobRanker:
    """
    Service for ranking postings.

    Scoring is best-effort: without resume text, without a scorer, or when a
    scoring batch fails, the affected postings are left unscored and the
    deterministic tie-break keys decide their order.
    """

    def __init__(
        self,
        scorer: JobScorer | None = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
        result_limit: int = DEFAULT_RESULT_LIMIT,
        timeout: float = 30.0,
    ):
        """
        Initialize the job ranker.

        Args:
            scorer: Optional external scorer (e.g. a chat model client)
            batch_size: Number of postings sent per scoring call
            result_limit: Maximum number of postings returned
            timeout: Time budget per scoring batch in seconds

        Raises:
            ValueError: If batch_size or result_limit is not a positive integer
        """
        if not isinstance(batch_size, int) or batch_size <= 0:
            raise ValueError(f"batch_size must be a positive integer, got: {batch_size}")
        if not isinstance(result_limit, int) or result_limit <= 0:
            raise ValueError(f"result_limit must be a positive integer, got: {result_limit}")

        self.scorer = scorer
        self.batch_size = batch_size
        self.result_limit = result_limit
        self.timeout = timeout

    async def _score_batch(
        self,
        executor: AttemptExecutor,
        resume_text: str,
        batch: list[JobPosting],
        skills: Sequence[str],
    ) -> list[JobPosting]:
        try:
            scores = await executor.run(
                self.scorer.score_jobs, resume_text, batch, list(skills), timeout=self.timeout
            )
        except TimeoutError:
            logger.warning(f"Scoring batch timed out after {self.timeout}s, leaving unscored")
            return batch
        except Exception as e:
            logger.warning(f"AI ranking failed for batch, leaving unscored: {e}")
            return batch

        if not isinstance(scores, dict) or not scores:
            return batch

        annotated = []
        for job in batch:
            score = scores.get(job.id)
            if score is None:
                annotated.append(job)
                continue
            match_score = clamp_score(score.match_score)
            annotated.append(
                job.with_score(match_score, recommendation_for(match_score, score.recommendation))
            )
        return annotated

    async def score(
        self, jobs: Sequence[JobPosting], resume_text: str | None, skills: Sequence[str] = ()
    ) -> list[JobPosting]:
        """
        Annotate postings with match scores, batch by batch.

        Returns postings unchanged when there is no resume text or no scorer.
        """
        if not resume_text or not resume_text.strip() or self.scorer is None:
            return list(jobs)

        jobs = list(jobs)
        scored: list[JobPosting] = []
        total_batches = (len(jobs) + self.batch_size - 1) // self.batch_size
        if total_batches == 0:
            return scored
        with AttemptExecutor(total_batches, name="job-scorer") as executor:
            for batch_idx in range(total_batches):
                start = batch_idx * self.batch_size
                batch = jobs[start : start + self.batch_size]
                scored.extend(await self._score_batch(executor, resume_text, batch, skills))

        scored_count = sum(1 for job in scored if job.match_score is not None)
        logger.info(f"Scored {scored_count}/{len(scored)} jobs in {total_batches} batch(es)")
        return scored

    async def rank(
        self, jobs: Sequence[JobPosting], resume_text: str | None, skills: Sequence[str] = ()
    ) -> list[JobPosting]:
        """
        Score, sort and truncate postings.

        Args:
            jobs: Deduplicated postings
            resume_text: Candidate resume text, if any
            skills: Candidate skills

        Returns:
            At most result_limit postings in final order
        """
        scored = await self.score(jobs, resume_text, skills)
        return sort_jobs(scored)[: self.result_limit]
