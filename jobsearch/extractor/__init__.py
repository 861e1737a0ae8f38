"""
Extractor Services Package

This package contains the provider adapters that fetch job postings from
external APIs:
- Base API client abstraction and provider contract
- Remotive (free), JSearch (metasearch, per engine) and Adzuna (salary-aware)
- Registry that builds adapters from configuration
"""

from .adzuna_client import AdzunaClient
from .base_client import BaseAPIClient, JobProvider
from .jsearch_client import JSearchClient
from .provider_registry import ProviderSet, build_providers
from .remotive_client import RemotiveClient

__all__ = [
    "AdzunaClient",
    "BaseAPIClient",
    "JSearchClient",
    "JobProvider",
    "ProviderSet",
    "RemotiveClient",
    "build_providers",
]
