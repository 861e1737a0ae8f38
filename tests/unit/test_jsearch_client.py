"""Unit tests for JSearchClient (search_jobs, fetch and record mapping)."""

from unittest.mock import patch

import pytest

from jobsearch.extractor.jsearch_client import JSearchClient
from jobsearch.shared.errors import ProviderFetchError


@pytest.fixture
def client():
    """JSearchClient bound to the linkedin engine."""
    return JSearchClient(api_key="test-key", engine="linkedin")


class TestJSearchClientInit:
    def test_requires_api_key(self):
        with pytest.raises(ValueError, match="API key is required"):
            JSearchClient(api_key="")

    def test_name_follows_engine(self, client):
        assert client.name == "linkedin"
        assert JSearchClient(api_key="k").name == "jsearch"

    def test_headers_carry_rapidapi_credentials(self, client):
        headers = client._get_headers()
        assert headers["X-RapidAPI-Key"] == "test-key"
        assert headers["X-RapidAPI-Host"] == "jsearch.p.rapidapi.com"


class TestJSearchClientSearchJobs:
    def test_search_jobs_params(self, client):
        with patch.object(client, "_make_request") as m:
            m.return_value = {"status": "OK", "data": []}
            client.search_jobs("java developer", location="USA", engine="linkedin")
        m.assert_called_once_with(
            "/search",
            params={
                "query": "java developer",
                "page": "1",
                "num_pages": "1",
                "location": "USA",
                "engine": "linkedin",
            },
        )

    def test_remote_location_is_not_sent(self, client):
        with patch.object(client, "_make_request") as m:
            m.return_value = {"data": []}
            client.search_jobs("java developer", location="Remote")
        assert "location" not in m.call_args.kwargs["params"]

    def test_request_error_propagates(self, client):
        with patch.object(client, "_make_request") as m:
            m.side_effect = ProviderFetchError("linkedin", "API returned 429", status_code=429)
            with pytest.raises(ProviderFetchError, match="429"):
                client.fetch("java")


class TestJSearchClientFetch:
    def test_fetch_maps_records(self, client, sample_jsearch_payload):
        with patch.object(client, "_make_request", return_value=sample_jsearch_payload):
            jobs = client.fetch("java", location="USA")

        first, second = jobs
        assert first.id == "jsearch-linkedin-abc123"
        assert first.title == "Java Developer"
        assert first.company == "Globex"
        assert first.location == "Austin, TX, US"
        assert first.description.endswith("...")
        assert len(first.description) == 503
        assert first.url == "https://globex.com/careers/abc123"
        assert first.source == "linkedin"
        assert first.logo_url == "https://logo.clearbit.com/globex.com"
        assert first.skills == ("Java", "Spring")
        assert first.job_type == "hybrid"

        assert second.description == "Own the deployment platform."
        assert second.url == "https://www.google.com/search?q=def456"
        assert second.location == "Remote"

    def test_fetch_engine_argument_overrides_instance_engine(self, client, sample_jsearch_payload):
        with patch.object(client, "_make_request", return_value=sample_jsearch_payload) as m:
            jobs = client.fetch("java", engine="indeed")

        assert m.call_args.kwargs["params"]["engine"] == "indeed"
        assert jobs[0].id == "jsearch-indeed-abc123"
        assert jobs[0].source == "indeed"

    def test_fetch_caps_records(self, client):
        records = [{"job_id": str(i), "job_title": "Engineer"} for i in range(25)]
        with patch.object(client, "_make_request", return_value={"data": records}):
            jobs = client.fetch("java")
        assert len(jobs) == JSearchClient.max_records

    def test_fetch_missing_data_gives_empty(self, client):
        with patch.object(client, "_make_request", return_value={"status": "OK"}):
            assert client.fetch("java") == []
