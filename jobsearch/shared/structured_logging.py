"""
Structured Logging Utilities

Provides utilities for structured logging with request/provider context
throughout the search pipeline.
"""

from __future__ import annotations

import logging
from typing import Any

STRUCTURED_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"


def _format_context(context: dict[str, Any]) -> str:
    parts = [f"{key}={value}" for key, value in context.items() if value is not None]
    return " | ".join(parts)


class StructuredLoggerAdapter(logging.LoggerAdapter):
    """
    Logger adapter that adds structured context to log messages.

    Usage:
        logger = get_structured_logger(__name__, request_id="ab12", provider="remotive")
        logger.info("Fetching jobs")  # Logs with context
    """

    def __init__(self, logger: logging.Logger, **context: Any):
        super().__init__(logger, context)

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        """
        Process log message to add context.

        Args:
            msg: Log message
            kwargs: Logging keyword arguments

        Returns:
            Tuple of (message, updated kwargs)
        """
        context_str = _format_context(self.extra) or "none"
        kwargs.setdefault("extra", {})["context"] = context_str
        return msg, kwargs

    def bind(self, **context: Any) -> StructuredLoggerAdapter:
        """Return a new adapter with additional context fields."""
        return StructuredLoggerAdapter(self.logger, **{**self.extra, **context})


def get_structured_logger(name: str, **context: Any) -> StructuredLoggerAdapter:
    """
    Get a structured logger with context.

    Args:
        name: Logger name (typically __name__)
        **context: Context fields (e.g., request_id="ab12", provider="linkedin")

    Returns:
        StructuredLoggerAdapter instance
    """
    base_logger = logging.getLogger(name)
    return StructuredLoggerAdapter(base_logger, **context)


def log_with_context(
    logger: logging.Logger, level: int, msg: str, exc_info: bool = False, **context: Any
) -> None:
    """
    Log a message with additional context fields.

    Convenience function for adding context to a single log message.

    Args:
        logger: Logger instance
        level: Log level (logging.INFO, logging.ERROR, etc.)
        msg: Log message
        exc_info: Attach the current exception traceback
        **context: Additional context fields
    """
    context_str = _format_context(context)
    full_msg = f"[{context_str}] {msg}" if context_str else msg
    logger.log(level, full_msg, exc_info=exc_info)


class _DefaultContextFilter(logging.Filter):
    """Fill in ``context`` for records not emitted through an adapter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = "none"
        return True


def configure_logging(level: int = logging.INFO) -> None:
    """
    Configure root logging with the structured format.

    Safe to call more than once; handlers are only installed the first time.
    """
    root = logging.getLogger()
    if any(getattr(h, "_structured", False) for h in root.handlers):
        root.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(STRUCTURED_FORMAT))
    handler.addFilter(_DefaultContextFilter())
    handler._structured = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(level)
