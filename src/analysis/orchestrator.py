# src/analysis/orchestrator.py - v1
"""Analysis orchestrator: one profile capture in, one AnalysisOutcome out.

Flow per call:
  1. Credential check (missing key fails immediately, no retry)
  2. Classify the profile into a tier and select its model configuration
  3. Build the cache key and return a cached analysis when present
  4. Otherwise invoke the vision model, parse, estimate cost, cache
  5. On a retryable error (rate limiting by default), degrade the request
     via the retry policy and invoke again; at most ``max_attempts`` calls

Every failure is returned as ``AnalysisOutcome(success=False)``; nothing
raises past ``analyze`` except task cancellation.
"""

from __future__ import annotations

import asyncio
import base64
import logging
import uuid
from typing import Callable

from creatorlens.analysis.prompts import build_prompt
from creatorlens.analysis.response_parser import parse_analysis
from creatorlens.cache.base_cache_store import BaseCacheStore
from creatorlens.cache.cache_factory import create_cache_store
from creatorlens.cache.fingerprint import build_cache_key, image_fingerprint
from creatorlens.cache.memory_store import epoch_millis
from creatorlens.cache.models import CacheEntry, CacheStats
from creatorlens.cache.sweeper import ExpirySweeper
from creatorlens.config.settings import Settings
from creatorlens.core.models import AnalysisOutcome, ComplexityTier, ProfileHints
from creatorlens.llm.base_client import BaseVisionClient
from creatorlens.llm.client_factory import create_vision_client
from creatorlens.llm.models import VisionRequest
from creatorlens.llm.retry import AttemptPlan, RetryPolicy, classify_error, default_retry_policy
from creatorlens.logging.context import set_request_context, set_tier_context
from creatorlens.routing.complexity import classify, factors_from_hints
from creatorlens.routing.model_selector import ModelConfiguration, select
from creatorlens.tracking.call_logger import CallLogger
from creatorlens.tracking.cost_calculator import estimate_cost
from creatorlens.tracking.metrics import MetricsReport, build_metrics_report

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS_ERROR = "Vision model API key not configured"
EMPTY_IMAGE_ERROR = "Image payload is empty"
HIGH_DEMAND_ERROR = "Analysis temporarily unavailable due to high demand"


class CreatorAnalyzer:
    """Cost-aware, cache-backed creator profile analyzer."""

    def __init__(
        self,
        client: BaseVisionClient | None,
        cache_store: BaseCacheStore | None = None,
        settings: Settings | None = None,
        retry_policy: RetryPolicy | None = None,
        call_logger: CallLogger | None = None,
        clock: Callable[[], int] = epoch_millis,
    ) -> None:
        self._settings = settings or Settings()
        self._client = client
        self._cache = cache_store or create_cache_store(self._settings)
        self._retry_policy = retry_policy or default_retry_policy(
            self._settings.degrade_follower_cap
        )
        self._calls = call_logger or CallLogger()
        self._clock = clock
        self._sweeper = ExpirySweeper(
            self._cache, interval_s=self._settings.cache_sweep_interval_seconds
        )

    @property
    def cache(self) -> BaseCacheStore:
        return self._cache

    @property
    def call_log(self) -> CallLogger:
        return self._calls

    @property
    def sweeper(self) -> ExpirySweeper:
        return self._sweeper

    # --- Lifecycle ---

    def start(self) -> None:
        """Start the background expiry sweep. Requires a running event loop."""
        self._sweeper.start()

    async def stop(self) -> None:
        """Stop the background expiry sweep."""
        await self._sweeper.stop()

    async def __aenter__(self) -> CreatorAnalyzer:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    # --- Public API ---

    async def analyze(
        self,
        image_bytes: bytes,
        platform: str,
        username: str,
        hints: ProfileHints | None = None,
    ) -> AnalysisOutcome:
        """Analyze one captured profile.

        Args:
            image_bytes: Raw profile screenshot.
            platform: Source platform (instagram, tiktok, youtube, ...).
            username: Profile handle.
            hints: Follower count, verification and website signals.

        Returns:
            AnalysisOutcome; ``success`` is False on any failure.
        """
        set_request_context(uuid.uuid4().hex[:12], platform, username)

        if self._client is None or not self._client.is_configured:
            logger.warning("Vision model API key not provided, skipping analysis")
            return AnalysisOutcome(success=False, error=MISSING_CREDENTIALS_ERROR)

        if not image_bytes:
            return AnalysisOutcome(success=False, error=EMPTY_IMAGE_ERROR)

        plan = AttemptPlan(hints=hints or ProfileHints())
        fingerprint = image_fingerprint(image_bytes)
        attempts = 0

        while True:
            attempts += 1
            tier = plan.tier or classify(factors_from_hints(platform, plan.hints))
            set_tier_context(tier)
            config = select(tier)
            cache_key = build_cache_key(platform, username, fingerprint, tier)

            if attempts == 1:
                logger.info(
                    "Analysis complexity determined: %s for @%s (%d followers)",
                    tier, username, plan.hints.follower_count,
                )
                cached = await self._cache.get(cache_key)
                if cached is not None:
                    return AnalysisOutcome(
                        success=True,
                        analysis=cached.analysis,
                        cost_usd=0.0,
                        model="cached",
                        cached=True,
                        tier=tier,
                    )

            try:
                return await self._invoke(
                    image_bytes, platform, username, tier, config, cache_key, plan, attempts
                )
            except Exception as e:
                error_type = classify_error(e)
                self._calls.record(
                    platform, username, tier, config.model_id,
                    status="rate_limited" if error_type == "rate_limit" else "failed",
                    attempt=attempts, degraded=plan.degraded, error=str(e),
                )
                if not self._retry_policy.should_retry(error_type, attempts):
                    logger.error("Analysis failed (%s): %s", error_type, e)
                    message = str(e) or type(e).__name__
                    if plan.degraded:
                        message = f"{HIGH_DEMAND_ERROR}: {message}"
                    return AnalysisOutcome(
                        success=False, error=message, cost_usd=0.0, tier=tier,
                        degraded=plan.degraded,
                    )

                plan = self._retry_policy.next_plan(plan)
                delay = self._retry_policy.delay_for(attempts - 1)
                logger.warning(
                    "%s on attempt %d, retrying with degraded request in %.1fs",
                    error_type, attempts, delay,
                )
                if delay > 0:
                    await asyncio.sleep(delay)

    async def get_cache_stats(self) -> CacheStats:
        """Size, capacity, hit rate and savings of the analysis cache."""
        return await self._cache.stats()

    async def cleanup_expired(self) -> int:
        """Purge expired cache entries now. Returns the number removed."""
        return await self._cache.purge_expired()

    async def metrics_report(self) -> MetricsReport:
        """Cache and spend report for an external metrics surface."""
        return build_metrics_report(await self._cache.stats(), self._calls)

    # --- Internal helpers ---

    async def _invoke(
        self,
        image_bytes: bytes,
        platform: str,
        username: str,
        tier: ComplexityTier,
        config: ModelConfiguration,
        cache_key: str,
        plan: AttemptPlan,
        attempt: int,
    ) -> AnalysisOutcome:
        """Call the model, parse, price and cache one attempt."""
        logger.info(
            "Using model: %s (estimated cost: $%s)", config.model_id, config.estimated_unit_cost_usd
        )
        if tier == "basic":
            logger.debug(
                "Screenshot of %.1fKB could be compressed for basic analysis",
                len(image_bytes) / 1024,
            )

        request = VisionRequest(
            model_id=config.model_id,
            prompt_text=build_prompt(tier, platform, username),
            image_base64=base64.b64encode(image_bytes).decode("ascii"),
            image_detail=config.image_detail,
            media_type=self._settings.image_media_type,
            max_tokens=config.max_output_tokens,
            temperature=config.temperature,
        )
        response = await self._client.complete_with_vision(request)

        analysis = parse_analysis(response.content, tier)
        cost = estimate_cost(response.total_tokens, config)

        self._calls.record(
            platform, username, tier, config.model_id,
            status="success", attempt=attempt, degraded=plan.degraded,
            total_tokens=response.total_tokens, latency_ms=response.latency_ms,
            cost_usd=cost,
        )

        try:
            await self._cache.set(
                cache_key,
                CacheEntry(analysis=analysis, cached_at_ms=self._clock(), cost_usd=cost),
            )
        except Exception:
            logger.exception("Failed to cache analysis for %s", cache_key[:50])

        logger.info("Analysis completed successfully (cost: $%.4f)", cost)
        return AnalysisOutcome(
            success=True,
            analysis=analysis,
            cost_usd=cost,
            model=config.model_id,
            cached=False,
            tier=tier,
            degraded=plan.degraded,
        )


def create_analyzer(
    settings: Settings | None = None,
    cache_store: BaseCacheStore | None = None,
) -> CreatorAnalyzer:
    """Build an analyzer wired from settings.

    The vision client is only created when credentials are configured;
    otherwise every ``analyze`` call fails fast with a configuration error.
    """
    settings = settings or Settings()
    client = (
        create_vision_client(settings.llm_provider, settings)
        if settings.has_credentials
        else None
    )
    return CreatorAnalyzer(client=client, cache_store=cache_store, settings=settings)
