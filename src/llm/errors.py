# src/llm/errors.py - v1
"""Errors raised by vision clients.

Adapters translate SDK exceptions into these so the orchestrator can
classify failures without importing provider SDKs.
"""

from __future__ import annotations


class ProviderError(Exception):
    """The provider call failed for a reason other than rate limiting."""


class ProviderRateLimitError(ProviderError):
    """The provider signalled overload (HTTP 429 / rate limit)."""


class EmptyResponseError(ProviderError):
    """The provider returned no completion text."""


class MissingCredentialsError(ProviderError):
    """No API key is configured for the provider."""
