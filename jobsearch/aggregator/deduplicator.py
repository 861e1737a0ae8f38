"""
Cross-provider deduplication.

Postings are keyed on normalized company, title and apply URL
(host + path). The first occurrence of each key is kept and relative order
is otherwise preserved.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from urllib.parse import urlsplit

from ..jobs.job_posting import JobPosting
from ..jobs.job_utils import NO_URL

logger = logging.getLogger(__name__)

# Anything that is not a letter, digit or whitespace
_PUNCTUATION_RE = re.compile(r"[^\w\s]|_")


def normalize_text(value: str) -> str:
    """Lowercase, trim and drop punctuation."""
    return _PUNCTUATION_RE.sub("", value.lower().strip())


def _strip_trailing_slash(value: str) -> str:
    return value[:-1] if value.endswith("/") else value


def normalize_url(url: str | None) -> str:
    """
    Reduce an apply URL to host + path.

    Query string, fragment and one trailing slash are removed. Unparseable
    URLs fall back to plain string splitting. The "#" sentinel and missing
    URLs give an empty string.
    """
    if not url or url == NO_URL:
        return ""

    try:
        parts = urlsplit(url)
        if not parts.netloc or not parts.hostname:
            raise ValueError(f"No host in URL: {url}")
        return parts.hostname + _strip_trailing_slash(parts.path)
    except ValueError:
        base = url.split("?")[0].split("#")[0]
        return _strip_trailing_slash(base).lower()


def dedup_key(job: JobPosting) -> str | None:
    """
    Build the company_title_url key for a posting.

    Returns None when company or title is not a usable string.
    """
    if not isinstance(job.company, str) or not isinstance(job.title, str):
        return None
    if not job.company or not job.title:
        return None
    return f"{normalize_text(job.company)}_{normalize_text(job.title)}_{normalize_url(job.url)}"


def deduplicate(jobs: Iterable[JobPosting]) -> list[JobPosting]:
    """
    Remove duplicate postings, keeping the first occurrence.

    Args:
        jobs: Postings from all providers, in aggregation order

    Returns:
        Postings with unique dedup keys, original relative order preserved
    """
    seen: set[str] = set()
    unique: list[JobPosting] = []

    for job in jobs:
        key = dedup_key(job)
        if key is None:
            logger.warning(f"Skipping job with missing required fields: {job.id}")
            continue
        if key in seen:
            continue
        seen.add(key)
        unique.append(job)

    return unique
