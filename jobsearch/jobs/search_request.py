"""
Search request model and validation.

Validates the incoming {skills, query?, resumeText?} body before any
provider is contacted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..shared.errors import SearchRequestError


@dataclass(frozen=True)
class SearchRequest:
    """Pipeline input."""

    skills: tuple[str, ...] = field(default_factory=tuple)
    free_text_query: str | None = None
    resume_text: str | None = None

    @property
    def has_resume(self) -> bool:
        return bool(self.resume_text and self.resume_text.strip())


def _optional_string(payload: dict[str, Any], key: str) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise SearchRequestError(f"'{key}' must be a string")
    return value


def parse_search_request(payload: Any) -> SearchRequest:
    """
    Validate a raw request body and build a SearchRequest.

    Args:
        payload: Decoded JSON body

    Returns:
        SearchRequest with skills stripped of surrounding whitespace and
        blank entries removed

    Raises:
        SearchRequestError: If the body is not an object, skills is missing
            or not a list of strings, or query/resumeText are not strings
    """
    if not isinstance(payload, dict):
        raise SearchRequestError("Request body must be a JSON object")

    skills_raw = payload.get("skills")
    if not isinstance(skills_raw, list):
        raise SearchRequestError("'skills' must be an array of strings")
    if any(not isinstance(skill, str) for skill in skills_raw):
        raise SearchRequestError("'skills' must be an array of strings")

    skills = tuple(skill.strip() for skill in skills_raw if skill.strip())

    return SearchRequest(
        skills=skills,
        free_text_query=_optional_string(payload, "query"),
        resume_text=_optional_string(payload, "resumeText"),
    )
