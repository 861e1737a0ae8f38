"""
Search configuration.

Provider credentials and pipeline limits are read once from the process
environment into an immutable SearchSettings instance, which is then passed
to the adapters and the text-generation client at construction.
"""

from __future__ import annotations

import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_JSEARCH_HOST = "jsearch.p.rapidapi.com"
DEFAULT_JSEARCH_ENGINES = (
    "linkedin",
    "indeed",
    "glassdoor",
    "google_jobs",
    "careerjet",
    "zip_recruiter",
    "monster",
)
GITHUB_MODELS_BASE_URL = "https://models.github.ai/inference"
DEFAULT_AI_MODEL = "gpt-4o-mini"

# Values that look like a credential but are placeholders
_PLACEHOLDER_VALUES = {"", "test", "none", "null", "changeme"}


def load_environment(repo_root: Path | None = None) -> None:
    """
    Load .env files into the process environment.

    Looks for .env.{ENVIRONMENT} first and falls back to .env, mirroring the
    backend configuration.
    """
    root = repo_root or Path(__file__).resolve().parents[2]
    environment = os.getenv("ENVIRONMENT", "development")
    env_file = root / f".env.{environment}"
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        env_path = root / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=True)


def _credential(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or value.strip().lower() in _PLACEHOLDER_VALUES:
        return None
    return value.strip()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using default {default}")
        return default
    if not math.isfinite(value) or value <= 0:
        logger.warning(f"{name} must be a positive number, got {value}, using default {default}")
        return default
    return value


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"Invalid value for {name}: {raw!r}, using default {default}")
        return default
    if value <= 0:
        logger.warning(f"{name} must be positive, got {value}, using default {default}")
        return default
    return value


@dataclass(frozen=True)
class SearchSettings:
    """Read-only configuration for one process."""

    jsearch_api_key: str | None = None
    jsearch_api_host: str = DEFAULT_JSEARCH_HOST
    jsearch_engines: tuple[str, ...] = DEFAULT_JSEARCH_ENGINES
    adzuna_app_id: str | None = None
    adzuna_app_key: str | None = None
    adzuna_country: str = "us"
    ai_api_key: str | None = None
    ai_base_url: str | None = None
    ai_model: str = DEFAULT_AI_MODEL
    attempt_timeout: float = 30.0
    result_limit: int = 50
    rank_batch_size: int = 5

    @property
    def jsearch_enabled(self) -> bool:
        return bool(self.jsearch_api_key)

    @property
    def adzuna_enabled(self) -> bool:
        return bool(self.adzuna_app_id and self.adzuna_app_key)

    @property
    def ai_enabled(self) -> bool:
        return bool(self.ai_api_key)

    @classmethod
    def from_env(cls) -> SearchSettings:
        """
        Build settings from environment variables.

        OPENAI_API_KEY takes precedence over GITHUB_TOKEN. When only
        GITHUB_TOKEN is set, the client talks to the GitHub Models inference
        endpoint unless OPENAI_BASE_URL overrides it.
        """
        engines_raw = os.getenv("JSEARCH_ENGINES", "")
        engines = tuple(e.strip() for e in engines_raw.split(",") if e.strip())

        openai_key = _credential("OPENAI_API_KEY")
        github_token = _credential("GITHUB_TOKEN")
        base_url = os.getenv("OPENAI_BASE_URL") or None
        if not openai_key and github_token and not base_url:
            base_url = GITHUB_MODELS_BASE_URL

        return cls(
            jsearch_api_key=_credential("JSEARCH_API_KEY"),
            jsearch_api_host=os.getenv("JSEARCH_API_HOST") or DEFAULT_JSEARCH_HOST,
            jsearch_engines=engines or DEFAULT_JSEARCH_ENGINES,
            adzuna_app_id=_credential("ADZUNA_APP_ID"),
            adzuna_app_key=_credential("ADZUNA_APP_KEY"),
            adzuna_country=(os.getenv("ADZUNA_COUNTRY") or "us").lower(),
            ai_api_key=openai_key or github_token,
            ai_base_url=base_url,
            ai_model=os.getenv("JOB_SEARCH_AI_MODEL") or DEFAULT_AI_MODEL,
            attempt_timeout=_float_env("JOB_SEARCH_ATTEMPT_TIMEOUT", 30.0),
            result_limit=_int_env("JOB_SEARCH_RESULT_LIMIT", 50),
            rank_batch_size=_int_env("JOB_SEARCH_RANK_BATCH_SIZE", 5),
        )
