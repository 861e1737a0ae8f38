"""
Remotive API Client

Free job source; needs no credentials and is always available.

Docs: https://remotive.com/api-documentation
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..jobs.job_posting import JobPosting
from ..jobs.job_utils import (
    DEFAULT_LOCATION,
    NO_TITLE,
    UNKNOWN_COMPANY,
    build_job_id,
    clean_text,
    clean_url,
    detect_job_type,
    extract_salary,
    string_skills,
    strip_html,
    truncate_description,
)
from .base_client import BaseAPIClient

logger = logging.getLogger(__name__)


class RemotiveClient(BaseAPIClient):
    """
    Client for the Remotive remote-jobs API.

    Field mapping:
    - id -> id ("remotive-default-{id}")
    - title, company_name -> title, company
    - candidate_required_location -> location (default "Remote")
    - description (markup stripped) -> description (truncated)
    - url -> url, company_logo -> logo_url, tags -> skills
    """

    provider = "remotive"
    source_label = "Remotive"

    def __init__(self, result_limit: int = 20, timeout: float = 30.0, **kwargs: Any):
        """
        Initialize Remotive client.

        Args:
            result_limit: Maximum number of postings requested per search
            timeout: Fetch time budget in seconds, retries included
        """
        super().__init__(base_url="https://remotive.com/api", timeout=timeout, **kwargs)
        self.result_limit = result_limit

    def fetch(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        skills: Sequence[str] = (),
    ) -> list[JobPosting]:
        """
        Search Remotive.

        Remotive has no geographic filter, so location is ignored.
        """
        params = {"search": query, "limit": str(self.result_limit)}
        data = self._make_request("/remote-jobs", params=params)
        records = data.get("jobs") or []
        logger.debug(f"Remotive returned {len(records)} raw records for '{query}'")
        return self.map_records(records)

    def _map_record(self, record: dict[str, Any]) -> JobPosting:
        raw_description = record.get("description")
        description = truncate_description(
            strip_html(raw_description) if isinstance(raw_description, str) else None
        )
        salary_min, salary_max, currency = extract_salary(record)
        logo = record.get("company_logo")

        return JobPosting(
            id=build_job_id(self.provider, "default", record.get("id")),
            title=clean_text(record.get("title"), NO_TITLE),
            company=clean_text(record.get("company_name"), UNKNOWN_COMPANY),
            location=clean_text(record.get("candidate_required_location"), DEFAULT_LOCATION),
            description=description,
            url=clean_url(record.get("url")),
            source=self.source_label,
            logo_url=logo.strip() if isinstance(logo, str) and logo.strip() else None,
            skills=tuple(string_skills(record.get("tags"))),
            salary_min=salary_min,
            salary_max=salary_max,
            salary_currency=currency,
            job_type=detect_job_type(description),
        )
