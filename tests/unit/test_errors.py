"""Unit tests for pipeline error types and message sanitizing."""

import pytest

from jobsearch.shared.errors import (
    AttemptTimeoutError,
    ProviderFetchError,
    SearchRequestError,
    sanitize_error_message,
)


def test_provider_fetch_error_message():
    error = ProviderFetchError("linkedin", "API returned 429: Too Many Requests", status_code=429)
    assert str(error) == "linkedin: API returned 429: Too Many Requests"
    assert error.provider == "linkedin"
    assert error.status_code == 429


def test_attempt_timeout_is_a_fetch_error():
    error = AttemptTimeoutError("remotive", 30.0)
    assert isinstance(error, ProviderFetchError)
    assert str(error) == "remotive: Request timeout after 30s"
    assert error.timeout == 30.0


@pytest.mark.parametrize(
    "error,expected",
    [
        (
            SearchRequestError("'skills' must be an array of strings"),
            "'skills' must be an array of strings",
        ),
        (OSError("/etc/secrets/key.pem not found"), "Job search failed. Please try again later."),
        (
            RuntimeError("invalid api key supplied"),
            "Job provider authentication failed. Please check configuration.",
        ),
        (RuntimeError("boom"), "An unexpected error occurred. Please try again later."),
    ],
)
def test_sanitize_error_message(error, expected):
    assert sanitize_error_message(error) == expected
