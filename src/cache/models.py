# src/cache/models.py - v2
"""Cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from pydantic import BaseModel

from creatorlens.core.models import StructuredAnalysis


class CacheEntry(BaseModel):
    """A parsed analysis kept to avoid a repeat billed call. Never mutated."""

    analysis: StructuredAnalysis
    cached_at_ms: int
    cost_usd: float = 0.0


class CacheStats(BaseModel):
    """Point-in-time cache report. Reporting only; no effect on behavior."""

    size: int
    max_size: int
    hit_rate: float = 0.0
    hits: int = 0
    misses: int = 0
    total_savings_usd: float = 0.0
