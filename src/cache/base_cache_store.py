# src/cache/base_cache_store.py - v2
"""Abstract analysis cache interface.

The cache is an optimization layer only: a miss costs an extra billed call,
never a wrong answer. Implementations are process-local.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from creatorlens.cache.models import CacheEntry, CacheStats


class BaseCacheStore(ABC):
    """Unified interface for analysis cache backends."""

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Return the live entry for ``key``, or None if absent or expired."""

    @abstractmethod
    async def set(self, key: str, entry: CacheEntry) -> None:
        """Store an entry, evicting old entries first when at capacity."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove an entry if present."""

    @abstractmethod
    async def purge_expired(self) -> int:
        """Remove every expired entry. Returns the number removed."""

    @abstractmethod
    async def stats(self) -> CacheStats:
        """Size, capacity, hit rate and observed savings."""
