"""Enricher service package.

Optional chat-model assistant used for search enhancement and resume scoring.
"""

from .chatgpt_client import ChatGPTClient

__all__ = ["ChatGPTClient"]
