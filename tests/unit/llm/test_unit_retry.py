# tests/unit/llm/test_unit_retry.py - v1
"""Tests for llm/retry.py - error classification and retry policy."""

from __future__ import annotations

import pytest

from creatorlens.core.models import ProfileHints
from creatorlens.llm.errors import ProviderError, ProviderRateLimitError
from creatorlens.llm.retry import (
    NO_RETRY,
    AttemptPlan,
    RetryPolicy,
    classify_error,
    default_retry_policy,
    degrade_to_basic,
)


class RateLimitError(Exception):
    pass


class TestClassifyError:
    @pytest.mark.parametrize(
        "error,expected",
        [
            (ProviderRateLimitError("slow down"), "rate_limit"),
            (RateLimitError("x"), "rate_limit"),
            (RuntimeError("Error code: 429"), "rate_limit"),
            (RuntimeError("Rate limit reached for gpt-4o"), "rate_limit"),
            (RuntimeError("rate_limit_exceeded"), "rate_limit"),
            (TimeoutError("x"), "timeout"),
            (RuntimeError("request timed out"), "timeout"),
            (ProviderError("503 Service Unavailable"), "server_error"),
            (ProviderError("bad request"), "unknown"),
            (ValueError(""), "unknown"),
        ],
    )
    def test_classification(self, error, expected):
        assert classify_error(error) == expected

    @pytest.mark.parametrize(
        "message",
        [
            "OpenAI request failed: Error code: 400 - invalid image (request id req_7f4293ab)",
            "OpenAI request failed: Error code: 400 - image too large (limit 4290 KB)",
            "OpenAI request failed: 429 mentioned by a non-rate-limit error",
            "rate limit wording in a bad request",
        ],
    )
    def test_provider_errors_are_never_rate_limits(self, message):
        assert classify_error(ProviderError(message)) != "rate_limit"

    @pytest.mark.parametrize("message", ["request id req_74291", "payload of 14290 bytes"])
    def test_429_must_be_a_whole_number(self, message):
        assert classify_error(RuntimeError(message)) == "unknown"


class TestDegradeToBasic:
    def test_strips_tier_raising_signals(self):
        plan = AttemptPlan(
            hints=ProfileHints(follower_count=2_000_000, is_verified=True, website="https://x.io")
        )
        degraded = degrade_to_basic(plan)
        assert degraded.tier == "basic"
        assert degraded.degraded is True
        assert degraded.hints.follower_count == 1000
        assert degraded.hints.is_verified is False
        assert degraded.hints.website is None

    def test_small_audience_kept(self):
        plan = AttemptPlan(hints=ProfileHints(follower_count=300))
        assert degrade_to_basic(plan).hints.follower_count == 300

    def test_custom_cap(self):
        plan = AttemptPlan(hints=ProfileHints(follower_count=50_000))
        assert degrade_to_basic(plan, follower_cap=10).hints.follower_count == 10

    def test_input_plan_untouched(self):
        plan = AttemptPlan(hints=ProfileHints(follower_count=50_000, is_verified=True))
        degrade_to_basic(plan)
        assert plan.tier is None
        assert plan.hints.is_verified is True


class TestRetryPolicy:
    def test_default_retries_rate_limit_once(self):
        policy = RetryPolicy()
        assert policy.should_retry("rate_limit", 1) is True
        assert policy.should_retry("rate_limit", 2) is False
        assert policy.should_retry("timeout", 1) is False
        assert policy.should_retry("unknown", 1) is False

    def test_next_plan_degrades(self):
        plan = AttemptPlan(hints=ProfileHints(follower_count=5_000_000))
        assert RetryPolicy().next_plan(plan).tier == "basic"

    def test_next_plan_without_degrade(self):
        plan = AttemptPlan(hints=ProfileHints())
        assert RetryPolicy(degrade=None).next_plan(plan) is plan

    def test_no_retry(self):
        assert NO_RETRY.should_retry("rate_limit", 1) is False

    def test_default_factory_uses_cap(self):
        policy = default_retry_policy(follower_cap=42)
        plan = AttemptPlan(hints=ProfileHints(follower_count=1_000_000))
        assert policy.next_plan(plan).hints.follower_count == 42

    def test_delay_backoff(self):
        policy = RetryPolicy(base_delay_s=1.0, backoff_factor=2.0)
        assert [policy.delay_for(i) for i in range(3)] == [1.0, 2.0, 4.0]

    def test_delay_default_is_zero(self):
        assert RetryPolicy().delay_for(0) == 0.0

    def test_jitter_bounds(self):
        policy = RetryPolicy(base_delay_s=1.0, jitter=True)
        for _ in range(50):
            assert 0.5 <= policy.delay_for(0) <= 1.5
