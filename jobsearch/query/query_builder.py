"""
Search query builder.

Turns a skill list and optional free-text query into the single search
phrase sent to every provider, plus a location hint for providers that
support geographic filtering.

Precedence for the phrase:
1. Explicit free-text query (trimmed)
2. Skill heuristic: "{title for first mapped skill} {top skill}"
3. Literal "software engineer"

The optional text-generation enhancement only contributes keywords,
locations and seniority; any failure falls back to deterministic values.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from ..shared.concurrency import AttemptExecutor
from .title_patterns import (
    DEFAULT_LOCATIONS,
    DEFAULT_QUERY,
    DEFAULT_SENIORITY,
    DEFAULT_TITLE,
    MAX_FALLBACK_KEYWORDS,
    SKILL_TO_TITLE,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnhancedSearch:
    """Search hints derived from a skill list."""

    keywords: tuple[str, ...] = field(default_factory=tuple)
    locations: tuple[str, ...] = field(default_factory=tuple)
    seniority: tuple[str, ...] = field(default_factory=tuple)


class SearchEnhancer(Protocol):
    """Anything that can turn skills into search hints (e.g. a chat model)."""

    def enhance_search(self, skills: Sequence[str]) -> EnhancedSearch | None:
        ...


@dataclass(frozen=True)
class SearchPlan:
    """Output of the query builder."""

    query: str
    location: str | None = None
    hints: EnhancedSearch = field(default_factory=EnhancedSearch)
    enhanced: bool = False


def title_for_skills(skills: Sequence[str]) -> str:
    """Return the job title for the first skill found in SKILL_TO_TITLE."""
    for skill in skills:
        title = SKILL_TO_TITLE.get(skill.strip().lower())
        if title:
            return title
    return DEFAULT_TITLE


def build_search_query(skills: Sequence[str], free_text_query: str | None = None) -> str:
    """
    Build the search phrase deterministically.

    Args:
        skills: Candidate skills in priority order
        free_text_query: Explicit query typed by the user

    Returns:
        Non-empty search phrase

    Example:
        >>> build_search_query(["Java"])
        'software engineer Java'
    """
    if free_text_query and free_text_query.strip():
        return free_text_query.strip()

    skills = [s for s in skills if s and s.strip()]
    if skills:
        title = title_for_skills(skills)
        top_skill = skills[0].strip()
        return f"{title} {top_skill}" if top_skill else title

    return DEFAULT_QUERY


def fallback_hints(skills: Sequence[str], free_text_query: str | None = None) -> EnhancedSearch:
    """Deterministic hints used when enhancement is unavailable or fails."""
    skills = [s.strip() for s in skills if s and s.strip()]
    if not skills:
        query = (free_text_query or "").strip()
        return EnhancedSearch(
            keywords=(query,) if query else (),
            locations=DEFAULT_LOCATIONS,
            seniority=(),
        )

    keywords = [*skills, *(f"{skill} developer" for skill in skills), " ".join(skills[:2])]
    return EnhancedSearch(
        keywords=tuple(keywords[:MAX_FALLBACK_KEYWORDS]),
        locations=DEFAULT_LOCATIONS,
        seniority=DEFAULT_SENIORITY,
    )


def pick_location(locations: Sequence[str]) -> str | None:
    """First location that is not the generic "remote"."""
    for location in locations:
        if location and location.strip() and location.strip().lower() != "remote":
            return location.strip()
    return None


class QueryBuilder:
    """
    Builds a SearchPlan, optionally consulting a SearchEnhancer.

    The enhancer call is bounded by timeout and never raises past this class.
    """

    def __init__(self, enhancer: SearchEnhancer | None = None, timeout: float = 30.0):
        self.enhancer = enhancer
        self.timeout = timeout

    async def _enhance(self, skills: Sequence[str]) -> EnhancedSearch | None:
        if self.enhancer is None or not skills:
            return None
        try:
            with AttemptExecutor(1, name="search-enhancer") as executor:
                result = await executor.run(
                    self.enhancer.enhance_search, list(skills), timeout=self.timeout
                )
        except TimeoutError:
            logger.warning(f"Search enhancement timed out after {self.timeout}s, using fallback")
            return None
        except Exception as e:
            logger.warning(f"Search enhancement failed, using fallback: {e}")
            return None

        if result is None or not (result.keywords or result.locations or result.seniority):
            return None
        return result

    async def build_plan(
        self, skills: Sequence[str], free_text_query: str | None = None
    ) -> SearchPlan:
        """
        Build the search plan for one request.

        Args:
            skills: Candidate skills
            free_text_query: Optional explicit query

        Returns:
            SearchPlan whose query is never empty
        """
        query = build_search_query(skills, free_text_query)
        enhanced = await self._enhance(skills)
        hints = enhanced or fallback_hints(skills, free_text_query)

        plan = SearchPlan(
            query=query,
            location=pick_location(hints.locations),
            hints=hints,
            enhanced=enhanced is not None,
        )
        logger.info(
            f"Search plan: query='{plan.query}', location={plan.location!r}, "
            f"enhanced={plan.enhanced}"
        )
        return plan
