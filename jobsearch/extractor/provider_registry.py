"""
Provider registry.

Builds the provider adapters available for the current configuration. The
free source is always present; credentialed families are included only when
their credentials are configured and are otherwise skipped silently.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..shared.config import SearchSettings
from .adzuna_client import AdzunaClient
from .base_client import JobProvider
from .jsearch_client import JSearchClient
from .remotive_client import RemotiveClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProviderSet:
    """Adapters grouped by how the aggregator runs them."""

    free: tuple[JobProvider, ...] = field(default_factory=tuple)
    paid: tuple[JobProvider, ...] = field(default_factory=tuple)

    @property
    def names(self) -> list[str]:
        return [p.name for p in (*self.free, *self.paid)]


def build_providers(settings: SearchSettings) -> ProviderSet:
    """
    Build providers from settings.

    Args:
        settings: Process configuration

    Returns:
        ProviderSet with the free source first and one paid adapter per
        configured Adzuna account and JSearch engine
    """
    timeout = settings.attempt_timeout
    free: list[JobProvider] = [RemotiveClient(timeout=timeout)]
    paid: list[JobProvider] = []

    if settings.adzuna_enabled:
        paid.append(
            AdzunaClient(
                app_id=settings.adzuna_app_id,
                app_key=settings.adzuna_app_key,
                country=settings.adzuna_country,
                timeout=timeout,
            )
        )
    else:
        logger.info("Adzuna disabled - ADZUNA_APP_ID/ADZUNA_APP_KEY not configured")

    if settings.jsearch_enabled:
        for engine in settings.jsearch_engines:
            paid.append(
                JSearchClient(
                    api_key=settings.jsearch_api_key,
                    engine=engine,
                    api_host=settings.jsearch_api_host,
                    timeout=timeout,
                )
            )
    else:
        logger.info("JSearch disabled - JSEARCH_API_KEY not configured")

    providers = ProviderSet(free=tuple(free), paid=tuple(paid))
    logger.info(f"Configured providers: {', '.join(providers.names)}")
    return providers
