# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation from settings."""

from __future__ import annotations

from creatorlens.cache.base_cache_store import BaseCacheStore
from creatorlens.cache.memory_store import InMemoryCacheStore
from creatorlens.config.settings import Settings


def create_cache_store(settings: Settings | None = None) -> BaseCacheStore:
    """Instantiate the analysis cache.

    Args:
        settings: Application settings. Defaults to built-in sizing.

    Returns:
        A fresh, empty cache store owned by the caller.
    """
    if settings is None:
        return InMemoryCacheStore()

    return InMemoryCacheStore(
        max_size=settings.cache_max_size,
        ttl_ms=settings.cache_ttl_ms,
        sweep_batch_size=settings.cache_sweep_batch_size,
    )
