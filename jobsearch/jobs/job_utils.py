"""
Field normalization helpers for provider records.

Every adapter maps provider-native records through these helpers so that
emitted postings share the same defaults: non-empty title, company,
location and description, and an apply URL that is either absolute http(s)
or the "#" sentinel.
"""

from __future__ import annotations

import re
import time
import uuid
from typing import Any

NO_TITLE = "No title"
UNKNOWN_COMPANY = "Unknown company"
DEFAULT_LOCATION = "Remote"
NO_DESCRIPTION = "No description available"
NO_URL = "#"
DESCRIPTION_LIMIT = 500
DEFAULT_CURRENCY = "USD"

_HTML_TAG_RE = re.compile(r"<[^>]*>")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")

# Order matters: remote indicators are checked first, then refined to hybrid
REMOTE_KEYWORDS = ["remote", "work from home", "wfh", "work remotely", "fully remote"]
HYBRID_WITH_REMOTE_KEYWORDS = [
    "hybrid",
    "2 days",
    "3 days",
    "part onsite",
    "part remote",
    "flexible",
]
HYBRID_KEYWORDS = ["hybrid", "2 days onsite", "3 days onsite", "part onsite", "part remote"]


def clean_text(value: Any, default: str) -> str:
    """Return the stripped string value, or default when missing/blank/non-string."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return default


def strip_html(text: str) -> str:
    """Remove markup tags from a description."""
    return _HTML_TAG_RE.sub("", text)


def truncate_description(value: Any, limit: int = DESCRIPTION_LIMIT) -> str:
    """
    Truncate a description to limit characters with an ellipsis marker.

    Non-string or blank input yields the "No description available" default.
    """
    if not isinstance(value, str):
        return NO_DESCRIPTION
    text = value.strip()
    if not text:
        return NO_DESCRIPTION
    if len(text) > limit:
        text = text[:limit].strip() + "..."
    return text or NO_DESCRIPTION


def clean_url(value: Any) -> str:
    """Return an absolute http(s) URL or the "#" sentinel."""
    if isinstance(value, str):
        url = value.strip()
        if url.startswith("http://") or url.startswith("https://"):
            return url
    return NO_URL


def derive_logo_url(company: str) -> str | None:
    """
    Derive a logo URL from the company name.

    Uses the Clearbit logo endpoint keyed on the lowercase alphanumeric
    company name. Returns None when nothing usable remains.
    """
    if not company or company == UNKNOWN_COMPANY:
        return None
    slug = _NON_ALNUM_RE.sub("", company.lower())
    if not slug:
        return None
    return f"https://logo.clearbit.com/{slug}.com"


def pick_logo_url(provider_logo: Any, company: str) -> str | None:
    """Prefer the provider-supplied logo, else derive one from the company name."""
    if isinstance(provider_logo, str) and provider_logo.strip():
        return provider_logo.strip()
    return derive_logo_url(company)


def string_skills(values: Any) -> list[str]:
    """Keep only non-empty string entries, in order."""
    if not isinstance(values, list):
        return []
    return [v.strip() for v in values if isinstance(v, str) and v.strip()]


def _positive_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value if value > 0 else None


def extract_salary(record: dict[str, Any]) -> tuple[float | None, float | None, str]:
    """
    Extract (salary_min, salary_max, currency) from a provider record.

    salary_avg fills whichever bound is missing. Currency comes from
    salary_currency or currency, upper-cased, defaulting to USD.
    """
    salary_min = _positive_number(record.get("salary_min"))
    salary_max = _positive_number(record.get("salary_max"))

    salary_avg = _positive_number(record.get("salary_avg"))
    if salary_avg is not None:
        if salary_min is None:
            salary_min = salary_avg
        if salary_max is None:
            salary_max = salary_avg

    currency = DEFAULT_CURRENCY
    for key in ("salary_currency", "currency"):
        value = record.get(key)
        if isinstance(value, str) and value.strip():
            currency = value.strip().upper()
            break

    return salary_min, salary_max, currency


def detect_job_type(description: Any) -> str:
    """
    Detect remote / hybrid / onsite from description text.

    Rules:
    - Remote indicators present: hybrid if any hybrid hint also appears, else remote
    - Otherwise hybrid indicators alone give hybrid
    - Everything else is onsite
    """
    if not isinstance(description, str) or not description:
        return "onsite"

    text = description.lower()
    if any(keyword in text for keyword in REMOTE_KEYWORDS):
        if any(keyword in text for keyword in HYBRID_WITH_REMOTE_KEYWORDS):
            return "hybrid"
        return "remote"

    if any(keyword in text for keyword in HYBRID_KEYWORDS):
        return "hybrid"

    return "onsite"


def build_job_id(provider_tag: str, engine_tag: str, native_id: Any = None) -> str:
    """
    Build a posting id as {provider}-{engine}-{native id or random suffix}.
    """
    if native_id is None or (isinstance(native_id, str) and not native_id.strip()):
        suffix = f"{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}"
    else:
        suffix = str(native_id).strip()
    return f"{provider_tag}-{engine_tag}-{suffix}"
