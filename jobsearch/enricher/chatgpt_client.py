"""ChatGPT assistant for job search.

Optional text-generation collaborator used by the pipeline to:
- Turn a skill list into search keywords, locations and seniority
- Score batches of postings against a candidate's resume

Works with the OpenAI API or any OpenAI-compatible endpoint (such as GitHub
Models). Every public method is best-effort and returns None on failure.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Sequence
from typing import Any

from openai import OpenAI

from ..jobs.job_posting import JobPosting
from ..query.query_builder import EnhancedSearch
from ..ranker.job_ranker import JobScore
from ..shared.config import SearchSettings
from .chatgpt_prompts import (
    ENHANCE_SEARCH_SYSTEM_PROMPT,
    SCORE_JOBS_SYSTEM_PROMPT,
    build_enhance_search_prompt,
    build_score_jobs_prompt,
)

logger = logging.getLogger(__name__)

_VALID_RECOMMENDATIONS = {"high", "medium", "low"}


def _string_list(value: Any) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(v.strip() for v in value if isinstance(v, str) and v.strip())


class ChatGPTClient:
    """
    Client for search enhancement and resume scoring via a chat model.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
    ):
        """
        Initialize the client.

        Args:
            api_key: OpenAI API key or GitHub token
            model: Chat model name
            base_url: Optional OpenAI-compatible endpoint
            max_retries: Maximum number of attempts per call
            retry_delay: Base delay in seconds between attempts
            timeout: HTTP timeout per call in seconds

        Raises:
            ValueError: If the API key is missing or max_retries is not positive
        """
        if not api_key or api_key.lower() in ("test", "none", ""):
            raise ValueError(
                "API key is required and must be valid. "
                "Set OPENAI_API_KEY or GITHUB_TOKEN environment variable."
            )
        if not isinstance(max_retries, int) or max_retries <= 0:
            raise ValueError(f"max_retries must be a positive integer, got: {max_retries}")

        self.model = model
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.client = OpenAI(api_key=api_key, base_url=base_url, timeout=timeout, max_retries=0)

    @classmethod
    def from_settings(cls, settings: SearchSettings) -> ChatGPTClient | None:
        """Build a client when AI credentials are configured, else None."""
        if not settings.ai_enabled:
            logger.info("AI assistant disabled - OPENAI_API_KEY/GITHUB_TOKEN not configured")
            return None
        return cls(
            api_key=settings.ai_api_key,
            model=settings.ai_model,
            base_url=settings.ai_base_url,
            timeout=settings.attempt_timeout,
        )

    def _build_api_params(self, max_tokens: int) -> dict[str, Any]:
        """
        Build API parameters based on model type.

        Newer models take max_completion_tokens and no temperature; older
        ones take max_tokens and temperature 0.3.
        """
        model_lower = self.model.lower()
        is_newer_model = any(tag in model_lower for tag in ("o1", "o3", "gpt-5"))

        api_params: dict[str, Any] = {"model": self.model}
        if is_newer_model:
            api_params["max_completion_tokens"] = max_tokens
        else:
            api_params["max_tokens"] = max_tokens
            api_params["temperature"] = 0.3
        return api_params

    def _should_retry_without_json(self, error_str: str) -> bool:
        """Check if error indicates JSON mode is not supported."""
        lowered = error_str.lower()
        return "response_format" in lowered or (
            "unsupported" in lowered and "parameter" in lowered
        )

    def _is_authentication_error(self, error_str: str) -> bool:
        """Check if error is an authentication error."""
        lowered = error_str.lower()
        return "401" in error_str or "invalid_api_key" in lowered or "authentication" in lowered

    def _parse_json_response(self, response_text: str) -> Any:
        """
        Parse JSON response, handling markdown code blocks.

        Raises:
            json.JSONDecodeError: If response cannot be parsed as JSON
        """
        response_text = response_text.strip()
        if response_text.startswith("```"):
            lines = response_text.split("\n")
            json_lines = [line for line in lines if not line.strip().startswith("```")]
            response_text = "\n".join(json_lines)
        return json.loads(response_text)

    def _call_openai_api(self, system_prompt: str, prompt: str, max_tokens: int) -> str | None:
        """
        Call the chat completion API with retry logic.

        Returns:
            Response text, or None if all retries failed
        """
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": prompt},
        ]
        tried_without_json = False

        attempt = 0
        while attempt < self.max_retries:
            api_params = self._build_api_params(max_tokens)
            api_params["messages"] = messages
            if not tried_without_json:
                api_params["response_format"] = {"type": "json_object"}

            try:
                response = self.client.chat.completions.create(**api_params)
            except Exception as e:
                error_str = f"{type(e).__name__}: {e}"
                logger.warning(
                    f"Chat API call failed (attempt {attempt + 1}/{self.max_retries}): {error_str}"
                )

                if not tried_without_json and self._should_retry_without_json(error_str):
                    logger.warning(f"JSON mode not supported for {self.model}, retrying without it")
                    tried_without_json = True
                    continue

                if self._is_authentication_error(error_str):
                    logger.error("Chat API authentication failed. Skipping retries.")
                    return None

                attempt += 1
                if attempt < self.max_retries:
                    time.sleep(self.retry_delay * attempt)
                continue

            if not response.choices:
                logger.warning("Chat API returned empty or missing choices")
                return None
            content = response.choices[0].message.content
            if not content or not content.strip():
                logger.warning("Chat API returned empty content in response")
                return None
            return content.strip()

        logger.error(f"All {self.max_retries} retries failed for chat API call")
        return None

    def enhance_search(self, skills: Sequence[str]) -> EnhancedSearch | None:
        """
        Turn skills into keywords, locations and seniority levels.

        Returns:
            EnhancedSearch, or None if the call or parsing failed
        """
        skills = [s for s in skills if s and s.strip()]
        if not skills:
            return None

        response_text = self._call_openai_api(
            ENHANCE_SEARCH_SYSTEM_PROMPT, build_enhance_search_prompt(skills), max_tokens=200
        )
        if not response_text:
            return None

        try:
            parsed = self._parse_json_response(response_text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse search enhancement response: {e}")
            return None
        if not isinstance(parsed, dict):
            return None

        return EnhancedSearch(
            keywords=_string_list(parsed.get("keywords")),
            locations=_string_list(parsed.get("locations")),
            seniority=_string_list(parsed.get("seniority")),
        )

    def score_jobs(
        self, resume_text: str, jobs: Sequence[JobPosting], skills: Sequence[str]
    ) -> dict[str, JobScore] | None:
        """
        Score one batch of postings against the resume.

        Returns:
            Mapping of posting id to JobScore for every id the model scored,
            or None if the call or parsing failed
        """
        if not jobs:
            return {}

        job_dicts = [
            {"id": j.id, "title": j.title, "company": j.company, "description": j.description}
            for j in jobs
        ]
        response_text = self._call_openai_api(
            SCORE_JOBS_SYSTEM_PROMPT,
            build_score_jobs_prompt(resume_text, job_dicts, list(skills)),
            max_tokens=min(100 * len(jobs), 1000),
        )
        if not response_text:
            return None

        try:
            parsed = self._parse_json_response(response_text)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to parse ranking response: {e}")
            return None

        entries = parsed.get("scores") if isinstance(parsed, dict) else parsed
        if not isinstance(entries, list):
            return None

        known_ids = {j.id for j in jobs}
        scores: dict[str, JobScore] = {}
        for entry in entries:
            if not isinstance(entry, dict):
                continue
            job_id = entry.get("id")
            raw_score = entry.get("matchScore")
            if job_id not in known_ids or isinstance(raw_score, bool):
                continue
            if not isinstance(raw_score, (int, float)):
                continue
            label = entry.get("recommendation")
            scores[job_id] = JobScore(
                match_score=max(0, min(100, round(raw_score))),
                recommendation=label if label in _VALID_RECOMMENDATIONS else None,
            )
        return scores
