"""
Base API Client

Abstract base class for job provider clients with common functionality:
- HTTP session with retry on transient statuses
- Response/JSON error handling mapped to ProviderFetchError
- Per-record mapping isolation
- Logging
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..jobs.job_posting import JobPosting
from ..shared.errors import ProviderFetchError

logger = logging.getLogger(__name__)

# Query parameters that must never reach the logs
SENSITIVE_PARAMS = {"api_key", "app_key", "app_id", "token", "key"}

MIN_REQUEST_TIMEOUT = 0.1


def retry_backoff_total(max_retries: int, backoff_factor: float) -> float:
    """Seconds urllib3 sleeps between tries when every retry is used."""
    # urllib3 skips the sleep before the first retry
    return sum(backoff_factor * 2 ** (n - 1) for n in range(2, max_retries + 1))


def request_timeout_for(budget: float, max_retries: int, backoff_factor: float) -> float:
    """
    Per-try socket timeout that keeps all tries plus backoff within budget.

    Falls back to MIN_REQUEST_TIMEOUT when the backoff alone exceeds budget.
    """
    remaining = budget - retry_backoff_total(max_retries, backoff_factor)
    return max(remaining / (max_retries + 1), MIN_REQUEST_TIMEOUT)


@runtime_checkable
class JobProvider(Protocol):
    """
    Contract every provider adapter satisfies.

    Attributes:
        name: Identifier used in run statistics (e.g. "remotive", "linkedin")
    """

    name: str

    def fetch(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        skills: Sequence[str] = (),
    ) -> list[JobPosting]:
        """
        Fetch postings for one search phrase.

        Providers that do not filter by location, engine or skills ignore them.

        Raises:
            ProviderFetchError: On network failure, non-success status or bad payload
        """
        ...


class BaseAPIClient(ABC):
    """
    Abstract base class for provider API clients.

    Subclasses implement fetch() to build the provider request and
    _map_record() to turn one provider-native record into a JobPosting.
    Clients hold no per-request state, so one instance may serve concurrent
    fetches.
    """

    provider: str = "provider"

    def __init__(
        self,
        base_url: str,
        max_retries: int = 2,
        retry_backoff_factor: float = 0.5,
        timeout: float = 30.0,
    ):
        """
        Initialize the API client.

        Args:
            base_url: Base URL for the API
            max_retries: Maximum number of HTTP-level retry attempts
            retry_backoff_factor: Multiplier for exponential backoff
            timeout: Total time budget for one fetch, retries and backoff included
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.retry_backoff_factor = retry_backoff_factor
        self.timeout = timeout
        self.request_timeout = request_timeout_for(timeout, max_retries, retry_backoff_factor)

        # Configure session with retry strategy
        self.session = requests.Session()
        retry_strategy = Retry(
            total=max_retries,
            backoff_factor=retry_backoff_factor,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET"],
            raise_on_status=False,
            respect_retry_after_header=False,
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

    @property
    def name(self) -> str:
        return self.provider

    def _get_headers(self) -> dict[str, str]:
        """
        Get default headers for API requests.

        Subclasses can override this to add API-specific headers.
        """
        return {"Accept": "application/json"}

    def _make_request(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Make a GET request and return the parsed JSON body.

        Args:
            endpoint: API endpoint (relative to base_url)
            params: Query parameters

        Returns:
            Parsed JSON response

        Raises:
            ProviderFetchError: If the request fails, returns a non-2xx status
                or the body is not a JSON object
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.get(
                url, headers=self._get_headers(), params=params, timeout=self.request_timeout
            )
        except requests.RequestException as e:
            logger.error(f"{self.name} request failed: {e}")
            raise ProviderFetchError(self.name, f"Request failed: {e}") from e

        self._log_request(endpoint, params, response.status_code)
        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> dict[str, Any]:
        """
        Handle API response and extract JSON data.

        Args:
            response: HTTP response object

        Returns:
            Parsed JSON response data

        Raises:
            ProviderFetchError: If response indicates an error
        """
        if not response.ok:
            logger.error(
                f"{self.name} API error {response.status_code}: {response.reason} "
                f"{response.text[:500]}"
            )
            raise ProviderFetchError(
                self.name,
                f"API returned {response.status_code}: {response.reason}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Failed to parse JSON response from {self.name}: {e}")
            logger.error(f"Response text: {response.text[:500]}")
            raise ProviderFetchError(self.name, f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise ProviderFetchError(
                self.name, f"Unexpected response type: {type(data).__name__}"
            )
        return data

    def _log_request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        """Log API request details."""
        if params:
            safe_params = {k: v for k, v in params.items() if k not in SENSITIVE_PARAMS}
            logger.info(f"{self.name} API request: {endpoint} with params: {safe_params}")
        else:
            logger.info(f"{self.name} API request: {endpoint}")

        if status_code:
            logger.debug(f"Response status: {status_code}")

    def map_records(
        self, records: Any, limit: int | None = None, **context: Any
    ) -> list[JobPosting]:
        """
        Map provider-native records into JobPostings.

        A record that fails to map is skipped and logged; the rest are kept.
        """
        if not isinstance(records, list):
            return []

        jobs: list[JobPosting] = []
        for idx, record in enumerate(records[:limit] if limit else records):
            if not isinstance(record, dict):
                logger.warning(f"{self.name}: skipping non-object record at index {idx}")
                continue
            try:
                jobs.append(self._map_record(record, **context))
            except Exception as e:
                logger.warning(
                    f"{self.name}: skipping record at index {idx}: {e}. "
                    f"Excerpt: {str(record)[:200]}"
                )
        return jobs

    @abstractmethod
    def _map_record(self, record: dict[str, Any], **context: Any) -> JobPosting:
        """Map one provider-native record into a JobPosting."""

    @abstractmethod
    def fetch(
        self,
        query: str,
        location: str | None = None,
        engine: str | None = None,
        skills: Sequence[str] = (),
    ) -> list[JobPosting]:
        """Fetch and map postings for one search phrase."""
