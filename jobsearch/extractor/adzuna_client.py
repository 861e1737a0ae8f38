"""
Adzuna API Client

Salary-aware aggregator; requires an app id and app key.

Docs: https://developer.adzuna.com/overview
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
    pick_logo_url,
    truncate_description,
)
from .base_client import BaseAPIClient

logger = logging.getLogger(__name__)


def _first_object(value: Any) -> dict[str, Any]:
    """Adzuna returns company/location/category either as an object or a list of them."""
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, dict) else {}


def _category_tags(value: Any) -> list[str]:
    categories = value if isinstance(value, list) else [value]
    tags = []
    for category in categories:
        if isinstance(category, dict):
            tag = category.get("tag")
            if isinstance(tag, str) and tag.strip():
                tags.append(tag.strip())
    return tags


class AdzunaClient(BaseAPIClient):
    """
    Client for the Adzuna job search API.

    Field mapping:
    - id -> id ("adzuna-default-{id}")
    - title -> title, company.display_name -> company
    - location.display_name -> location (default "Remote")
    - description -> description (truncated)
    - redirect_url -> url
    - company.logo_url -> logo_url (else derived from company name)
    - category.tag -> skills
    - salary_min / salary_max / salary_currency -> salary fields
    """

    provider = "adzuna"
    source_label = "Adzuna"

    def __init__(
        self,
        app_id: str,
        app_key: str,
        country: str = "us",
        results_per_page: int = 25,
        timeout: float = 30.0,
        **kwargs: Any,
    ):
        """
        Initialize Adzuna client.

        Args:
            app_id: Adzuna application id
            app_key: Adzuna application key
            country: Two-letter country code used in the search path
            results_per_page: Page size requested from Adzuna
            timeout: Fetch time budget in seconds, retries included
        """
        if not app_id or not app_key:
            raise ValueError("Adzuna app_id and app_key are required")
        super().__init__(base_url="https://api.adzuna.com/v1/api/jobs", timeout=timeout, **kwargs)
        self.app_id = app_id
        self.app_key = app_key
        self.country = country.lower()
        self.results_per_page = results_per_page

    @staticmethod
    def build_what(query: str, skills: Sequence[str] = ()) -> str:
        """Search text: the query, else the top three skills, else "developer"."""
        what = (query or "").strip()
        if not what and skills:
            what = " ".join(s.strip() for s in list(skills)[:3] if s.strip())
        return what or "developer"

    def fetch(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        skills: Sequence[str] = (),
    ) -> list[JobPosting]:
        params = {
            "app_id": self.app_id,
            "app_key": self.app_key,
            "results_per_page": str(self.results_per_page),
            "what": self.build_what(query, skills),
        }
        data = self._make_request(f"/{self.country}/search/1", params=params)
        records = data.get("results") or []
        logger.debug(f"Adzuna returned {len(records)} raw records")
        return self.map_records(records, limit=self.results_per_page)

    def _map_record(self, record: dict[str, Any]) -> JobPosting:
        company_obj = _first_object(record.get("company"))
        location_obj = _first_object(record.get("location"))
        company = clean_text(company_obj.get("display_name"), UNKNOWN_COMPANY)
        description = truncate_description(record.get("description"))
        salary_min, salary_max, currency = extract_salary(record)

        return JobPosting(
            id=build_job_id(self.provider, "default", record.get("id")),
            title=clean_text(record.get("title"), NO_TITLE),
            company=company,
            location=clean_text(location_obj.get("display_name"), DEFAULT_LOCATION),
            description=description,
            url=clean_url(record.get("redirect_url")),
            source=self.source_label,
            logo_url=pick_logo_url(company_obj.get("logo_url"), company),
            skills=tuple(_category_tags(record.get("category"))),
            salary_min=salary_min,
            salary_max=salary_max,
            salary_currency=currency,
            job_type=detect_job_type(description),
        )
