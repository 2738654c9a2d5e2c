# tests/conftest.py - v2
"""Shared test fixtures for all unit and integration tests.

Provides settings, a controllable clock, cache stores, sample analyses and a
mock vision client. No external dependencies; all I/O is mocked.
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from creatorlens.analysis.orchestrator import CreatorAnalyzer
from creatorlens.cache.memory_store import InMemoryCacheStore
from creatorlens.config.settings import Settings
from creatorlens.core.models import StructuredAnalysis
from creatorlens.llm.models import LLMResponse


class FakeClock:
    """Epoch-millisecond clock that only moves when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self.now_ms = start_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, ms: int) -> None:
        self.now_ms += ms


# === FIXTURES: Config & clock ===


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None, openai_api_key="sk-test")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache_store(clock: FakeClock) -> InMemoryCacheStore:
    return InMemoryCacheStore(max_size=20, clock=clock)


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_analysis() -> StructuredAnalysis:
    return StructuredAnalysis(
        creator_score="9/10 - Strong, consistent fitness brand",
        category="fitness",
        brand_potential="High for sportswear and nutrition brands",
        key_strengths="Clear niche, professional visuals",
        engagement_quality="Strong for audience size",
        content_style="Bright, high-energy workout content",
        audience_demographics="18-34, fitness enthusiasts",
        collaboration_potential="Excellent for long-term ambassadorships",
        overall_assessment="Established fitness creator with broad brand appeal.",
    )


@pytest.fixture
def sample_json_reply(sample_analysis: StructuredAnalysis) -> str:
    return json.dumps(sample_analysis.model_dump())


@pytest.fixture
def png_bytes() -> bytes:
    return b"\x89PNG\r\n\x1a\n" + bytes(range(256)) * 8


# === FIXTURES: Mock vision client ===


@pytest.fixture
def mock_llm_response(sample_json_reply: str) -> LLMResponse:
    return LLMResponse(
        content=sample_json_reply,
        total_tokens=600,
        model="gpt-4o",
        provider="openai",
        latency_ms=800,
    )


@pytest.fixture
def mock_vision_client(mock_llm_response: LLMResponse) -> AsyncMock:
    """Mock BaseVisionClient with a well-formed JSON reply."""
    client = AsyncMock()
    client.complete_with_vision = AsyncMock(return_value=mock_llm_response)
    client.is_configured = True
    client.provider_name = "mock"
    return client


@pytest.fixture
def analyzer(
    mock_vision_client: AsyncMock,
    cache_store: InMemoryCacheStore,
    settings: Settings,
    clock: FakeClock,
) -> CreatorAnalyzer:
    return CreatorAnalyzer(
        client=mock_vision_client,
        cache_store=cache_store,
        settings=settings,
        clock=clock,
    )
