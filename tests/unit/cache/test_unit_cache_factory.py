# tests/unit/cache/test_unit_cache_factory.py - v1
"""Tests for cache/cache_factory.py."""

from __future__ import annotations

from creatorlens.cache.cache_factory import create_cache_store
from creatorlens.cache.memory_store import InMemoryCacheStore
from creatorlens.config.settings import Settings


class TestCreateCacheStore:
    def test_default(self):
        store = create_cache_store()
        assert isinstance(store, InMemoryCacheStore)
        assert store.max_size == 1000

    def test_from_settings(self):
        s = Settings(_env_file=None, cache_max_size=50)
        store = create_cache_store(s)
        assert store.max_size == 50
        assert store.eviction_batch == 5

    def test_fresh_instance_each_call(self):
        assert create_cache_store() is not create_cache_store()
