"""Unit tests for RemotiveClient and the shared BaseAPIClient behaviour."""

from unittest.mock import patch

import pytest
import requests

from jobsearch.extractor.base_client import (
    MIN_REQUEST_TIMEOUT,
    JobProvider,
    request_timeout_for,
    retry_backoff_total,
)
from jobsearch.extractor.remotive_client import RemotiveClient
from jobsearch.jobs.job_utils import NO_DESCRIPTION, NO_TITLE, NO_URL, UNKNOWN_COMPANY
from jobsearch.shared.errors import ProviderFetchError


@pytest.fixture
def client():
    return RemotiveClient()


class TestRemotiveFetch:
    def test_fetch_sends_search_and_limit(self, client, mock_response, sample_remotive_payload):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(payload=sample_remotive_payload)
            client.fetch("software engineer Java", location="USA")

        m.assert_called_once_with(
            "https://remotive.com/api/remote-jobs",
            headers={"Accept": "application/json"},
            params={"search": "software engineer Java", "limit": "20"},
            timeout=client.request_timeout,
        )

    def test_fetch_maps_records(self, client, mock_response, sample_remotive_payload):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(payload=sample_remotive_payload)
            jobs = client.fetch("python")

        assert len(jobs) == 2
        job = jobs[0]
        assert job.id == "remotive-default-1901"
        assert job.title == "Backend Engineer"
        assert job.company == "Acme Inc."
        assert job.location == "USA Only"
        assert job.description == "Work remotely on our Python services."
        assert job.url.startswith("https://remotive.com/")
        assert job.source == "Remotive"
        assert job.logo_url == "https://remotive.com/job/1901/logo"
        assert job.skills == ("python", "django")
        assert job.job_type == "remote"
        assert job.salary_currency == "USD"

    def test_fetch_applies_defaults_to_sparse_record(
        self, client, mock_response, sample_remotive_payload
    ):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(payload=sample_remotive_payload)
            job = client.fetch("python")[1]

        assert job.id == "remotive-default-1902"
        assert job.title == NO_TITLE
        assert job.company == UNKNOWN_COMPANY
        assert job.location == "Remote"
        assert job.description == NO_DESCRIPTION
        assert job.url == NO_URL
        assert job.logo_url is None

    def test_fetch_empty_jobs_list(self, client, mock_response):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(payload={"jobs": []})
            assert client.fetch("nothing") == []

    def test_satisfies_provider_contract(self, client):
        assert isinstance(client, JobProvider)
        assert client.name == "remotive"


class TestBaseClientErrors:
    def test_non_success_status_raises(self, client, mock_response):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(status_code=503, reason="Service Unavailable")
            with pytest.raises(ProviderFetchError, match="503") as exc_info:
                client.fetch("python")

        assert exc_info.value.status_code == 503
        assert exc_info.value.provider == "remotive"

    def test_network_error_raises(self, client):
        with patch.object(client.session, "get") as m:
            m.side_effect = requests.ConnectionError("connection reset")
            with pytest.raises(ProviderFetchError, match="connection reset"):
                client.fetch("python")

    def test_invalid_json_raises(self, client, mock_response):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(payload=ValueError("Expecting value"), text="<html>")
            with pytest.raises(ProviderFetchError, match="Invalid JSON"):
                client.fetch("python")

    def test_non_object_json_raises(self, client, mock_response):
        with patch.object(client.session, "get") as m:
            m.return_value = mock_response(payload=["not", "an", "object"])
            with pytest.raises(ProviderFetchError, match="Unexpected response type"):
                client.fetch("python")


class TestRequestBudget:
    def test_default_tries_fit_the_fetch_budget(self, client):
        tries = client.max_retries + 1
        backoff = retry_backoff_total(client.max_retries, client.retry_backoff_factor)

        assert client.timeout == 30.0
        assert client.request_timeout * tries + backoff <= client.timeout + 1e-9

    @pytest.mark.parametrize("budget", [2.0, 5.0, 12.5])
    def test_tries_fit_small_budgets(self, budget):
        client = RemotiveClient(timeout=budget)
        backoff = retry_backoff_total(client.max_retries, client.retry_backoff_factor)

        assert client.request_timeout * (client.max_retries + 1) + backoff <= budget + 1e-9

    def test_backoff_skips_first_retry(self):
        assert retry_backoff_total(0, 0.5) == 0
        assert retry_backoff_total(1, 0.5) == 0
        assert retry_backoff_total(2, 0.5) == 1.0
        assert retry_backoff_total(3, 0.5) == 3.0

    def test_budget_smaller_than_backoff_uses_floor(self):
        assert request_timeout_for(0.2, 2, 0.5) == MIN_REQUEST_TIMEOUT

    def test_retry_after_header_is_not_honoured(self, client):
        adapter = client.session.get_adapter("https://remotive.com")
        assert adapter.max_retries.respect_retry_after_header is False


class TestMapRecords:
    def test_bad_record_is_skipped(self, client, make_job):
        good = make_job()
        with patch.object(client, "_map_record", side_effect=[ValueError("bad record"), good]):
            jobs = client.map_records([{"id": 1}, {"id": 2}])
        assert jobs == [good]

    def test_non_object_records_are_skipped(self, client):
        jobs = client.map_records(["oops", None, {"id": 7, "title": "Engineer"}])
        assert [job.id for job in jobs] == ["remotive-default-7"]

    def test_non_list_records_give_empty(self, client):
        assert client.map_records({"id": 1}) == []

    def test_limit_caps_records(self, client):
        records = [{"id": i, "title": f"Engineer {i}"} for i in range(5)]
        assert len(client.map_records(records, limit=3)) == 3
