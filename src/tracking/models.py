# src/tracking/models.py - v2
"""Tracking domain models: AnalysisCallRecord."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

from creatorlens.core.models import ComplexityTier


class AnalysisCallRecord(BaseModel):
    """One model invocation made by the analyzer."""

    call_id: str
    timestamp: datetime
    platform: str
    username: str
    tier: ComplexityTier
    model: str
    attempt: int = 1
    degraded: bool = False
    status: Literal["success", "rate_limited", "failed"]
    total_tokens: int | None = None
    latency_ms: int = 0
    estimated_cost_usd: float = 0.0
    error: str | None = None
