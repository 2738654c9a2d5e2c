# src/tracking/metrics.py - v2
"""Cost/caching report for an external metrics surface."""

from __future__ import annotations

from pydantic import BaseModel

from creatorlens.cache.models import CacheStats
from creatorlens.routing.complexity import PREMIUM_THRESHOLD
from creatorlens.tracking.call_logger import CallLogger

HEALTHY_UTILIZATION = 0.9
HIGH_UTILIZATION = 0.8
LOW_UTILIZATION = 0.3
LOW_SAVINGS_USD = 10.0


class MetricsReport(BaseModel):
    """Aggregated cache and spend figures with operator guidance."""

    cache_size: int
    cache_max_size: int
    utilization_percent: int
    hit_rate: float
    total_savings_usd: float
    cache_healthy: bool
    model_calls: dict[str, int] = {}
    total_model_cost_usd: float = 0.0
    estimated_monthly_savings_usd: float = 0.0
    optimization_tips: list[str] = []
    recommended_actions: list[str] = []


def estimate_monthly_savings(
    hit_rate: float,
    daily_requests: int = 100,
    avg_cost_per_request: float = 0.02,
) -> float:
    """Projected monthly spend avoided by cache hits, rounded to cents."""
    daily = daily_requests * hit_rate * avg_cost_per_request
    return round(daily * 30, 2)


def optimization_tips(stats: CacheStats) -> list[str]:
    tips: list[str] = []
    if stats.size < stats.max_size * LOW_UTILIZATION:
        tips.append(
            "Cache utilization is low - analyze more profiles to build the cache"
        )
    if stats.total_savings_usd < LOW_SAVINGS_USD:
        tips.append("Increase cache duration for frequently analyzed creators")
    tips.append(
        "Unverified creators with 5K-10K followers and no website get basic analysis"
    )
    tips.append(
        f"Premium analysis starts at complexity score {PREMIUM_THRESHOLD}: "
        "verified accounts with more than 100K followers always qualify"
    )
    return tips


def recommended_actions(stats: CacheStats) -> list[str]:
    actions: list[str] = []
    if stats.size > stats.max_size * HIGH_UTILIZATION:
        actions.append("Cache is getting full - oldest entries will be evicted in batches")
    if stats.size == 0:
        actions.append("Cache is empty - analyze some profiles to start saving costs")
    else:
        actions.append("Cache is healthy and saving costs on repeated analyses")
    return actions


def build_metrics_report(stats: CacheStats, calls: CallLogger | None = None) -> MetricsReport:
    """Combine cache stats and call history into a report.

    Args:
        stats: Current cache statistics.
        calls: Call history of the analyzer, if available.

    Returns:
        MetricsReport ready to serialize.
    """
    utilization = round(stats.size / stats.max_size * 100) if stats.max_size else 0
    return MetricsReport(
        cache_size=stats.size,
        cache_max_size=stats.max_size,
        utilization_percent=utilization,
        hit_rate=stats.hit_rate,
        total_savings_usd=stats.total_savings_usd,
        cache_healthy=stats.size < stats.max_size * HEALTHY_UTILIZATION,
        model_calls=calls.calls_by_model() if calls is not None else {},
        total_model_cost_usd=calls.total_cost_usd if calls is not None else 0.0,
        estimated_monthly_savings_usd=estimate_monthly_savings(stats.hit_rate),
        optimization_tips=optimization_tips(stats),
        recommended_actions=recommended_actions(stats),
    )
