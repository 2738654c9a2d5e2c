# src/tracking/call_logger.py - v3
"""Model call logging: records every vision invocation for cost tracking.

Only the most recent records are kept; totals cover every call made.
"""

from __future__ import annotations

import logging
import uuid
from collections import Counter, deque
from datetime import datetime, timezone

from creatorlens.core.models import ComplexityTier
from creatorlens.tracking.models import AnalysisCallRecord

logger = logging.getLogger(__name__)

DEFAULT_MAX_RECORDS = 1000


class CallLogger:
    """Accumulates call records for the lifetime of an analyzer."""

    def __init__(self, max_records: int = DEFAULT_MAX_RECORDS) -> None:
        if max_records < 1:
            raise ValueError("max_records must be >= 1")
        self._records: deque[AnalysisCallRecord] = deque(maxlen=max_records)
        self._total_calls = 0
        self._total_cost_usd = 0.0
        self._calls_by_model: Counter[str] = Counter()

    def record(
        self,
        platform: str,
        username: str,
        tier: ComplexityTier,
        model: str,
        status: str,
        attempt: int = 1,
        degraded: bool = False,
        total_tokens: int | None = None,
        latency_ms: int = 0,
        cost_usd: float = 0.0,
        error: str | None = None,
    ) -> AnalysisCallRecord:
        """Record a model invocation.

        Args:
            platform: Platform of the analyzed profile.
            username: Analyzed username.
            tier: Tier the call was made at.
            model: Model id used.
            status: success, rate_limited or failed.
            attempt: 1-based attempt number within one analyze() call.
            degraded: Whether the call ran under the degraded plan.
            total_tokens: Provider-reported token usage, if any.
            latency_ms: Provider round trip.
            cost_usd: Estimated cost.
            error: Error message for failed calls.

        Returns:
            The recorded AnalysisCallRecord.
        """
        record = AnalysisCallRecord(
            call_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc),
            platform=platform,
            username=username,
            tier=tier,
            model=model,
            attempt=attempt,
            degraded=degraded,
            status=status,
            total_tokens=total_tokens,
            latency_ms=latency_ms,
            estimated_cost_usd=cost_usd,
            error=error,
        )
        self._records.append(record)
        self._total_calls += 1
        self._total_cost_usd += record.estimated_cost_usd
        self._calls_by_model[record.model] += 1
        logger.debug(
            "Call %d recorded: %s %s (%s)", self._total_calls, model, status, tier
        )
        return record

    @property
    def records(self) -> list[AnalysisCallRecord]:
        """Most recent calls, oldest first."""
        return list(self._records)

    @property
    def max_records(self) -> int:
        return self._records.maxlen or 0

    @property
    def total_calls(self) -> int:
        return self._total_calls

    @property
    def total_cost_usd(self) -> float:
        """Estimated spend across all recorded calls."""
        return self._total_cost_usd

    def calls_by_model(self) -> dict[str, int]:
        return dict(self._calls_by_model)
