"""
Pytest configuration and fixtures for unit tests.

Unit tests are fast, isolated tests that don't require external dependencies.
"""

from unittest.mock import MagicMock

import pytest
import requests


def _response(status_code: int = 200, payload=None, reason: str = "OK", text: str = ""):
    response = MagicMock(spec=requests.Response)
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.reason = reason
    response.text = text
    if isinstance(payload, Exception):
        response.json.side_effect = payload
    else:
        response.json.return_value = payload
    return response


@pytest.fixture
def mock_response():
    """Factory for mocked requests.Response objects."""
    return _response


@pytest.fixture
def sample_remotive_payload():
    """Sample Remotive /remote-jobs response."""
    return {
        "job-count": 2,
        "jobs": [
            {
                "id": 1901,
                "url": "https://remotive.com/remote-jobs/software-dev/backend-engineer-1901",
                "title": "Backend Engineer",
                "company_name": "Acme Inc.",
                "company_logo": "https://remotive.com/job/1901/logo",
                "tags": ["python", "django", "", None],
                "candidate_required_location": "USA Only",
                "description": "<p>Work <b>remotely</b> on our Python services.</p>",
            },
            {
                "id": 1902,
                "url": "",
                "title": "",
                "company_name": None,
                "tags": [],
                "candidate_required_location": "",
                "description": "",
            },
        ],
    }


@pytest.fixture
def sample_jsearch_payload():
    """Sample JSearch /search response."""
    return {
        "status": "OK",
        "request_id": "req-1",
        "data": [
            {
                "job_id": "abc123",
                "job_title": "Java Developer",
                "employer_name": "Globex",
                "employer_logo": None,
                "job_city": "Austin",
                "job_state": "TX",
                "job_country": "US",
                "job_description": "Hybrid role, 3 days onsite. " + "x" * 600,
                "job_apply_link": "https://globex.com/careers/abc123",
                "job_required_skills": ["Java", "Spring"],
                "job_min_salary": None,
            },
            {
                "job_id": "def456",
                "job_title": "Platform Engineer",
                "employer_name": "Initech",
                "job_description": "",
                "job_highlights": {"summary": ["Own the deployment platform."]},
                "job_apply_link": "",
                "job_google_link": "https://www.google.com/search?q=def456",
            },
        ],
    }


@pytest.fixture
def sample_adzuna_payload():
    """Sample Adzuna search response."""
    return {
        "count": 1,
        "results": [
            {
                "id": "4242",
                "title": "Data Engineer",
                "company": {"display_name": "Umbrella Corp"},
                "location": [{"display_name": "Boston, MA"}],
                "description": "Build pipelines. Fully remote.",
                "redirect_url": "https://www.adzuna.com/details/4242",
                "category": {"tag": "it-jobs", "label": "IT Jobs"},
                "salary_min": 90000,
                "salary_max": 120000,
            }
        ],
    }
