"""
Root pytest configuration and shared fixtures.

This file contains configuration and fixtures shared across all test types.
Directory-specific conftest.py files can override or extend these fixtures.
"""

from collections.abc import Callable, Sequence

import pytest

from jobsearch.jobs.job_posting import JobPosting
from jobsearch.shared.config import SearchSettings


class StubProvider:
    """
    In-memory provider satisfying the JobProvider contract.

    responses maps a query to the postings returned for it, or to an
    exception instance that is raised instead. Unknown queries return [].
    """

    def __init__(
        self,
        name: str,
        responses: dict[str, list[JobPosting] | Exception] | None = None,
        default: list[JobPosting] | Exception | None = None,
        hook: Callable[[str], None] | None = None,
    ):
        self.name = name
        self.responses = responses or {}
        self.default = default if default is not None else []
        self.hook = hook
        self.calls: list[dict] = []

    def fetch(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        skills: Sequence[str] = (),
    ) -> list[JobPosting]:
        self.calls.append(
            {"query": query, "location": location, "engine": engine, "skills": tuple(skills)}
        )
        if self.hook:
            self.hook(query)
        result = self.responses.get(query, self.default)
        if isinstance(result, Exception):
            raise result
        return list(result)


def build_job(
    job_id: str = "remotive-default-1",
    title: str = "Backend Engineer",
    company: str = "Acme Inc.",
    url: str = "https://acme.com/jobs/1",
    source: str = "Remotive",
    skills: Sequence[str] = (),
    **kwargs,
) -> JobPosting:
    """Build a JobPosting with sensible test defaults."""
    location = kwargs.pop("location", "Remote")
    description = kwargs.pop("description", "Build APIs in Python.")
    return JobPosting(
        id=job_id,
        title=title,
        company=company,
        location=location,
        description=description,
        url=url,
        source=source,
        skills=tuple(skills),
        **kwargs,
    )


@pytest.fixture
def make_job():
    """Factory fixture for JobPosting instances."""
    return build_job


@pytest.fixture
def stub_provider_cls():
    """The StubProvider class, for tests that need several named providers."""
    return StubProvider


@pytest.fixture
def free_only_settings():
    """Settings with every credentialed provider and the AI assistant disabled."""
    return SearchSettings(attempt_timeout=1.0)
