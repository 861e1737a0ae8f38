"""
Shared infrastructure for the search pipeline.

Configuration, error types and structured logging used across packages.
"""

from .config import SearchSettings, load_environment
from .errors import (
    AttemptTimeoutError,
    ProviderFetchError,
    SearchRequestError,
    sanitize_error_message,
)
from .structured_logging import configure_logging, get_structured_logger, log_with_context

__all__ = [
    "AttemptTimeoutError",
    "ProviderFetchError",
    "SearchRequestError",
    "SearchSettings",
    "configure_logging",
    "get_structured_logger",
    "load_environment",
    "log_with_context",
    "sanitize_error_message",
]
