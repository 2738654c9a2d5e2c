# src/cache/memory_store.py - v2
"""In-process analysis cache with TTL expiry and batch eviction.

Entries expire ``ttl_ms`` after they were cached. Expired entries are
dropped lazily when read, and proactively by ``purge_expired`` (driven by
the background sweeper).

Eviction is a batch approximation of LRU, not true LRU: when the store is
full, the oldest 10% of entries *by insertion time* are removed at once,
regardless of how recently they were read.

The store is local to one process. There is no single-flight protection:
two concurrent misses on the same key both reach the model, and the second
``set`` replaces the first.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from itertools import islice
from typing import Callable

from creatorlens.cache.base_cache_store import BaseCacheStore
from creatorlens.cache.models import CacheEntry, CacheStats

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 1000
DEFAULT_TTL_MS = 7 * 24 * 60 * 60 * 1000
EVICTION_FRACTION = 0.1
MIN_MAX_SIZE = 10  # smallest capacity whose eviction batch is >= 1


def epoch_millis() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class InMemoryCacheStore(BaseCacheStore):
    """Bounded, TTL-expiring key/value store guarded by an asyncio lock."""

    def __init__(
        self,
        max_size: int = DEFAULT_MAX_SIZE,
        ttl_ms: int = DEFAULT_TTL_MS,
        sweep_batch_size: int = 500,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        if max_size < MIN_MAX_SIZE:
            raise ValueError(f"max_size must be >= {MIN_MAX_SIZE}")
        self._max_size = max_size
        self._ttl_ms = ttl_ms
        self._sweep_batch_size = max(1, sweep_batch_size)
        self._clock = clock
        # dict order is insertion order; eviction relies on it.
        self._entries: dict[str, CacheEntry] = {}
        self._lock = asyncio.Lock()
        self._purge_lock = asyncio.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def eviction_batch(self) -> int:
        """Number of entries removed when the store is full."""
        return math.floor(self._max_size * EVICTION_FRACTION)

    def __len__(self) -> int:
        return len(self._entries)

    async def get(self, key: str) -> CacheEntry | None:
        """Return the entry for ``key`` if present and unexpired."""
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                self._misses += 1
                logger.debug("Dropped expired cache entry %s", key[:50])
                return None

            self._hits += 1
            logger.info("Cache hit for key %s", key[:50])
            return entry

    async def set(self, key: str, entry: CacheEntry) -> None:
        """Insert ``entry`` under ``key``.

        Replacing an existing key never evicts. Otherwise, if the store is
        full, the oldest ``floor(max_size * 0.1)`` entries are removed first.
        """
        async with self._lock:
            if key in self._entries:
                # Re-inserted entries count as new for eviction order.
                del self._entries[key]
            elif len(self._entries) >= self._max_size:
                self._evict_oldest(self.eviction_batch)

            self._entries[key] = entry
            logger.info("Cached analysis. Cache size: %d", len(self._entries))

    async def delete(self, key: str) -> None:
        async with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        """Drop every entry and reset hit/miss counters."""
        async with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    async def purge_expired(self) -> int:
        """Remove all expired entries in batches.

        The store lock is released between batches so readers and writers
        can interleave with a long sweep. Concurrent purges run one after
        the other.
        """
        async with self._purge_lock:
            async with self._lock:
                keys = list(self._entries)

            removed = 0
            for start in range(0, len(keys), self._sweep_batch_size):
                batch = keys[start : start + self._sweep_batch_size]
                async with self._lock:
                    now = self._clock()
                    for key in batch:
                        entry = self._entries.get(key)
                        if entry is not None and self._is_expired(entry, now):
                            del self._entries[key]
                            removed += 1
                await asyncio.sleep(0)

        if removed:
            logger.info("Cleaned up %d expired cache entries", removed)
        return removed

    async def stats(self) -> CacheStats:
        async with self._lock:
            lookups = self._hits + self._misses
            return CacheStats(
                size=len(self._entries),
                max_size=self._max_size,
                hit_rate=self._hits / lookups if lookups else 0.0,
                hits=self._hits,
                misses=self._misses,
                total_savings_usd=sum(e.cost_usd for e in self._entries.values()),
            )

    # --- Internal helpers ---

    def _is_expired(self, entry: CacheEntry, now: int) -> bool:
        return now - entry.cached_at_ms > self._ttl_ms

    def _evict_oldest(self, count: int) -> None:
        """Remove the ``count`` earliest-inserted entries. Caller holds the lock."""
        victims = list(islice(self._entries, count))
        for key in victims:
            del self._entries[key]
        logger.info(
            "Cache full (%d entries), evicted %d oldest", self._max_size, len(victims)
        )
