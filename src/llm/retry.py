# src/llm/retry.py - v3
"""Retry policy for vision calls.

A policy is a value: how many attempts, which error types warrant another
attempt, how long to wait, and how to degrade the request before retrying.
The default policy retries once on rate limiting, forcing the cheapest tier
and dropping the signals that push a profile up the tiers.
"""

from __future__ import annotations

import functools
import random
import re
from dataclasses import dataclass, field
from typing import Callable

from creatorlens.core.models import ComplexityTier, ProfileHints
from creatorlens.llm.errors import ProviderError, ProviderRateLimitError

DEFAULT_FOLLOWER_CAP = 1000

_STATUS_429_RE = re.compile(r"\b429\b")
_SERVER_STATUS_RE = re.compile(r"\b50[0234]\b")


@dataclass(frozen=True)
class AttemptPlan:
    """Inputs for a single analysis attempt."""

    hints: ProfileHints
    tier: ComplexityTier | None = None  # None = let the classifier decide
    degraded: bool = False


DegradeTransform = Callable[[AttemptPlan], AttemptPlan]


def degrade_to_basic(plan: AttemptPlan, follower_cap: int = DEFAULT_FOLLOWER_CAP) -> AttemptPlan:
    """Force the basic tier and strip verification, website and large audiences."""
    return AttemptPlan(
        hints=ProfileHints(
            follower_count=min(plan.hints.follower_count, follower_cap),
            is_verified=False,
            website=None,
        ),
        tier="basic",
        degraded=True,
    )


@dataclass(frozen=True)
class RetryPolicy:
    """How the orchestrator reacts to a failed model invocation."""

    max_attempts: int = 2
    retry_on: frozenset[str] = field(default_factory=lambda: frozenset({"rate_limit"}))
    degrade: DegradeTransform | None = degrade_to_basic
    base_delay_s: float = 0.0
    backoff_factor: float = 2.0
    jitter: bool = False

    def should_retry(self, error_type: str, attempts_made: int) -> bool:
        """Whether another attempt is allowed after ``attempts_made`` failures."""
        return attempts_made < self.max_attempts and error_type in self.retry_on

    def next_plan(self, plan: AttemptPlan) -> AttemptPlan:
        """Plan for the following attempt."""
        return self.degrade(plan) if self.degrade is not None else plan

    def delay_for(self, attempt: int) -> float:
        """Delay before retry ``attempt`` (0-based)."""
        delay = self.base_delay_s * (self.backoff_factor ** attempt)
        if self.jitter:
            delay *= 0.5 + random.random()  # noqa: S311
        return delay


NO_RETRY = RetryPolicy(max_attempts=1, degrade=None)


def default_retry_policy(follower_cap: int = DEFAULT_FOLLOWER_CAP) -> RetryPolicy:
    """One degrade-and-retry on rate limiting, with the given follower cap."""
    return RetryPolicy(
        max_attempts=2,
        retry_on=frozenset({"rate_limit"}),
        degrade=functools.partial(degrade_to_basic, follower_cap=follower_cap),
    )


def classify_error(error: BaseException) -> str:
    """Classify an exception into a retry error type.

    Typed provider errors keep the type the adapter gave them: only
    ``ProviderRateLimitError`` is a rate limit, whatever the message says.
    """
    if isinstance(error, ProviderRateLimitError):
        return "rate_limit"

    msg = str(error).lower()
    name = type(error).__name__.lower()

    if not isinstance(error, ProviderError) and (
        "ratelimit" in name
        or _STATUS_429_RE.search(msg)
        or "rate limit" in msg
        or "rate_limit" in msg
    ):
        return "rate_limit"
    if "timeout" in name or "timed out" in msg or "timeout" in msg:
        return "timeout"
    if _SERVER_STATUS_RE.search(msg) or "server error" in msg:
        return "server_error"
    return "unknown"
