"""
JSearch API Client

Metasearch provider reached through RapidAPI. One client instance is created
per engine (linkedin, indeed, ...); each instance tags its postings with the
engine name as source.
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
    string_skills,
    truncate_description,
)
from .base_client import BaseAPIClient

logger = logging.getLogger(__name__)


def _location_string(record: dict[str, Any]) -> str:
    """Combine city/state/country into one location, defaulting to Remote."""
    city = record.get("job_city")
    if city:
        parts = [str(city)]
        for key in ("job_state", "job_country"):
            if record.get(key):
                parts.append(str(record[key]))
        return clean_text(", ".join(parts), DEFAULT_LOCATION)
    if record.get("job_country"):
        return clean_text(str(record["job_country"]), DEFAULT_LOCATION)
    return DEFAULT_LOCATION


def _description(record: dict[str, Any]) -> str:
    description = record.get("job_description")
    if isinstance(description, str) and description.strip():
        return truncate_description(description)

    highlights = record.get("job_highlights")
    if isinstance(highlights, dict):
        summary = highlights.get("summary")
        if isinstance(summary, list) and summary and isinstance(summary[0], str):
            return truncate_description(summary[0])

    return truncate_description(None)


def _apply_url(record: dict[str, Any]) -> str:
    for key in ("job_apply_link", "job_google_link"):
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            return clean_url(value)
    return clean_url(None)


class JSearchClient(BaseAPIClient):
    """
    Client for the JSearch API bound to one engine.

    Field mapping:
    - job_id -> id ("jsearch-{engine}-{job_id}")
    - job_title, employer_name -> title, company
    - job_city/job_state/job_country -> location
    - job_description (or first highlight summary) -> description
    - job_apply_link / job_google_link -> url
    - employer_logo -> logo_url (else derived from company name)
    - job_required_skills -> skills
    """

    provider = "jsearch"
    max_records = 20

    def __init__(
        self,
        api_key: str,
        engine: str | None = None,
        api_host: str = "jsearch.p.rapidapi.com",
        timeout: float = 30.0,
        **kwargs: Any,
    ):
        """
        Initialize JSearch API client.

        Args:
            api_key: RapidAPI key
            engine: Job board engine this instance searches (None for JSearch default)
            api_host: RapidAPI host header value
            timeout: Fetch time budget in seconds, retries included
        """
        if not api_key:
            raise ValueError("JSearch API key is required")
        super().__init__(base_url=f"https://{api_host}", timeout=timeout, **kwargs)
        self.api_key = api_key
        self.api_host = api_host
        self.engine = engine

    @property
    def name(self) -> str:
        return self.engine or "jsearch"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "X-RapidAPI-Key": self.api_key,
            "X-RapidAPI-Host": self.api_host,
        }

    def search_jobs(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        page: int = 1,
        num_pages: int = 1,
    ) -> dict[str, Any]:
        """
        Search for jobs using JSearch API.

        Args:
            query: Job search query (e.g., "backend developer Python")
            location: Job location; the generic "remote" is not sent
            engine: Engine name (e.g., "linkedin")
            page: Page number (default: 1)
            num_pages: Number of pages to fetch (default: 1)

        Returns:
            API response with job postings data
        """
        params = {"query": query, "page": str(page), "num_pages": str(num_pages)}
        if location and location.lower() != "remote":
            params["location"] = location
        if engine:
            params["engine"] = engine
        return self._make_request("/search", params=params)

    def fetch(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        skills: Sequence[str] = (),
    ) -> list[JobPosting]:
        engine = engine or self.engine
        data = self.search_jobs(query, location=location, engine=engine)
        records = data.get("data") or []
        logger.debug(f"JSearch [{engine or 'default'}] returned {len(records)} raw records")
        return self.map_records(records, limit=self.max_records, engine=engine)

    def _map_record(self, record: dict[str, Any], engine: str | None = None) -> JobPosting:
        engine_tag = engine or "default"
        company = clean_text(record.get("employer_name"), UNKNOWN_COMPANY)
        description = _description(record)
        salary_min, salary_max, currency = extract_salary(record)

        return JobPosting(
            id=build_job_id(self.provider, engine_tag, record.get("job_id")),
            title=clean_text(record.get("job_title"), NO_TITLE),
            company=company,
            location=_location_string(record),
            description=description,
            url=_apply_url(record),
            source=engine or "JSearch",
            logo_url=pick_logo_url(record.get("employer_logo"), company),
            skills=tuple(string_skills(record.get("job_required_skills"))),
            salary_min=salary_min,
            salary_max=salary_max,
            salary_currency=currency,
            job_type=detect_job_type(description),
        )
