"""
Error types shared across the search pipeline.
"""

from __future__ import annotations


class ProviderFetchError(Exception):
    """
    Raised by a provider adapter when a fetch fails.

    Covers network failures, non-success HTTP statuses and unparseable
    payloads. The retry/fallback runner treats it as a failed attempt.
    """

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(f"{provider}: {message}")


class AttemptTimeoutError(ProviderFetchError):
    """A single provider attempt exceeded its time budget."""

    def __init__(self, provider: str, timeout: float):
        self.timeout = timeout
        super().__init__(provider, f"Request timeout after {timeout:g}s")


class SearchRequestError(ValueError):
    """The incoming search request body is malformed."""


def sanitize_error_message(error: Exception) -> str:
    """Sanitize error messages to avoid leaking sensitive information.

    Args:
        error: Exception object

    Returns:
        Sanitized error message safe for client display
    """
    if isinstance(error, SearchRequestError):
        return str(error)

    error_str = str(error).lower()

    # Remove potential file paths
    if "/" in str(error) or "\\" in str(error):
        return "Job search failed. Please try again later."

    # Remove API keys
    if ("api" in error_str or "app" in error_str) and ("key" in error_str or "token" in error_str):
        return "Job provider authentication failed. Please check configuration."

    # Generic fallback for unknown errors
    return "An unexpected error occurred. Please try again later."
