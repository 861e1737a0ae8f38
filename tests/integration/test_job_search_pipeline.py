"""
Integration tests for the query → fetch → dedupe → rank flow.

Tests the complete pipeline through the real provider adapters:
1. Build the search phrase from skills
2. Fetch from the free source and every configured JSearch engine (HTTP mocked)
3. Collapse cross-provider duplicates
4. Rank and bound the result
"""

from unittest.mock import patch

import pytest
import requests

from jobsearch.jobs.search_request import SearchRequest
from jobsearch.search.job_search_service import JobSearchService
from jobsearch.shared.config import SearchSettings

# Mark all tests in this module as integration tests
pytestmark = pytest.mark.integration

REMOTIVE_PAYLOAD = {
    "jobs": [
        {
            "id": 1,
            "url": "https://acme.com/jobs/42?utm_source=remotive",
            "title": "Backend Engineer",
            "company_name": "Acme Inc.",
            "tags": ["java"],
            "candidate_required_location": "Worldwide",
            "description": "<p>Remote Java backend work.</p>",
        }
    ]
}

LINKEDIN_PAYLOAD = {
    "status": "OK",
    "data": [
        {
            "job_id": "li-1",
            "job_title": "backend engineer",
            "employer_name": "acme inc",
            "job_description": "Same role, listed on LinkedIn.",
            "job_apply_link": "https://acme.com/jobs/42",
            "job_required_skills": ["Java", "Spring", "SQL"],
        },
        {
            "job_id": "li-2",
            "job_title": "Java Platform Engineer",
            "employer_name": "Globex",
            "job_city": "Austin",
            "job_state": "TX",
            "job_description": "Hybrid, 2 days onsite.",
            "job_apply_link": "https://globex.com/careers/li-2",
            "job_required_skills": ["Java", "Kubernetes"],
        },
    ],
}


@pytest.fixture
def settings():
    return SearchSettings(
        jsearch_api_key="rapid-key",
        jsearch_engines=("linkedin", "indeed"),
        attempt_timeout=2.0,
    )


def test_pipeline_merges_providers_and_survives_failing_engine(settings, fake_http_cls):
    fake_http = fake_http_cls(
        {
            "remotive.com": REMOTIVE_PAYLOAD,
            "jsearch:linkedin": LINKEDIN_PAYLOAD,
            "jsearch:indeed": requests.ConnectionError("indeed unreachable"),
        }
    )
    service = JobSearchService(settings=settings)

    with patch.object(requests.Session, "get", side_effect=fake_http):
        outcome = service.run(SearchRequest(skills=("Java",)))

    assert outcome.query == "software engineer Java"
    assert outcome.raw_count == 3
    assert outcome.unique_count == 2
    # Remotive's copy of the Acme posting wins; the Globex posting has more skills
    assert [job.id for job in outcome.jobs] == ["jsearch-linkedin-li-2", "remotive-default-1"]

    counts = {stat.name: stat.job_count for stat in outcome.stats}
    assert counts == {"remotive": 1, "linkedin": 2, "indeed": 0}
    assert any("indeed unreachable" in error for error in outcome.errors)

    remotive_queries = [p["search"] for url, p in fake_http.calls if "remotive.com" in url]
    assert remotive_queries == ["software engineer Java"]
    linkedin_params = [p for url, p in fake_http.calls if p.get("engine") == "linkedin"]
    assert linkedin_params[0]["location"] == "USA"


def test_pipeline_wire_response(settings, fake_http_cls):
    fake_http = fake_http_cls({"remotive.com": REMOTIVE_PAYLOAD, "jsearch:": {"data": []}})
    service = JobSearchService(settings=settings)

    with patch.object(requests.Session, "get", side_effect=fake_http):
        response = service.search({"skills": ["Java"], "query": "backend engineer"})

    assert response == {
        "jobs": [
            {
                "id": "remotive-default-1",
                "title": "Backend Engineer",
                "company": "Acme Inc.",
                "location": "Worldwide",
                "description": "Remote Java backend work.",
                "url": "https://acme.com/jobs/42?utm_source=remotive",
                "source": "Remotive",
                "skills": ["java"],
                "salaryCurrency": "USD",
                "jobType": "remote",
            }
        ]
    }


def test_every_provider_failing_returns_empty_jobs(fake_http_cls):
    """End to end: only the free source, failing on every attempt."""
    fake_http = fake_http_cls({"remotive.com": requests.Timeout("read timed out")})
    service = JobSearchService(settings=SearchSettings(attempt_timeout=2.0))

    with patch.object(requests.Session, "get", side_effect=fake_http):
        response = service.search({"skills": ["Java"]})

    assert response == {"jobs": []}
    assert len(fake_http.calls) == 7

