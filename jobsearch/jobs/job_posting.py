"""
Job domain model.

Canonical representation of job postings shared by every provider adapter,
the deduplicator and the ranker.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from .job_utils import (
    DEFAULT_LOCATION,
    NO_DESCRIPTION,
    NO_TITLE,
    UNKNOWN_COMPANY,
    clean_text,
    clean_url,
    string_skills,
)


@dataclass(frozen=True)
class JobPosting:
    """
    Canonical job posting model.

    Instances are immutable; ranking produces annotated copies via
    with_score(). Construction re-applies the field defaults so that no
    posting can carry a blank required field or an invalid apply URL.
    """

    id: str
    title: str
    company: str
    location: str
    description: str
    url: str
    source: str
    logo_url: str | None = None
    skills: tuple[str, ...] = field(default_factory=tuple)
    salary_min: float | None = None
    salary_max: float | None = None
    salary_currency: str | None = None
    job_type: str | None = None
    match_score: int | None = None
    recommendation: str | None = None

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("JobPosting id must not be empty")
        # Frozen dataclass: normalise through object.__setattr__
        object.__setattr__(self, "title", clean_text(self.title, NO_TITLE))
        object.__setattr__(self, "company", clean_text(self.company, UNKNOWN_COMPANY))
        object.__setattr__(self, "location", clean_text(self.location, DEFAULT_LOCATION))
        object.__setattr__(self, "description", clean_text(self.description, NO_DESCRIPTION))
        object.__setattr__(self, "url", clean_url(self.url))
        object.__setattr__(self, "skills", tuple(string_skills(list(self.skills))))
        if self.match_score is not None and not 0 <= self.match_score <= 100:
            raise ValueError(f"match_score must be within 0-100, got {self.match_score}")

    def with_score(self, match_score: int, recommendation: str | None = None) -> JobPosting:
        """Return a copy annotated with a ranking score."""
        return replace(self, match_score=match_score, recommendation=recommendation)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to the JSON response shape.

        Optional fields are omitted when unset.
        """
        result: dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "location": self.location,
            "description": self.description,
            "url": self.url,
            "source": self.source,
            "skills": list(self.skills),
        }
        optional = {
            "logoUrl": self.logo_url,
            "salaryMin": self.salary_min,
            "salaryMax": self.salary_max,
            "salaryCurrency": self.salary_currency,
            "jobType": self.job_type,
            "matchScore": self.match_score,
            "recommendation": self.recommendation,
        }
        result.update({key: value for key, value in optional.items() if value is not None})
        return result
