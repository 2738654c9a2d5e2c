# tests/unit/routing/test_unit_model_selector.py - v1
"""Tests for routing/model_selector.py - tier configuration table."""

from __future__ import annotations

import dataclasses

import pytest

from creatorlens.routing.model_selector import MODEL_TABLE, ModelConfiguration, select


class TestSelect:
    @pytest.mark.parametrize("tier", ["basic", "standard", "premium"])
    def test_deterministic(self, tier):
        assert select(tier) == select(tier)
        assert select(tier) is select(tier)

    def test_token_budget_ordering(self):
        assert (
            select("premium").max_output_tokens
            > select("standard").max_output_tokens
            > select("basic").max_output_tokens
        )

    def test_cost_ordering(self):
        assert (
            select("premium").estimated_unit_cost_usd
            > select("standard").estimated_unit_cost_usd
            > select("basic").estimated_unit_cost_usd
        )

    def test_premium_is_high_fidelity(self):
        assert select("premium").image_detail == "high"
        assert select("premium").max_output_tokens == max(
            c.max_output_tokens for c in MODEL_TABLE.values()
        )

    def test_basic_is_low_fidelity(self):
        assert select("basic").image_detail == "low"

    def test_standard_shares_premium_model(self):
        assert select("standard").model_id == select("premium").model_id
        assert select("standard").image_detail == "low"
        assert select("basic").model_id != select("premium").model_id

    def test_exactly_three_rows(self):
        assert set(MODEL_TABLE) == {"basic", "standard", "premium"}

    def test_unknown_tier(self):
        with pytest.raises(KeyError):
            select("ultra")  # type: ignore[arg-type]

    def test_configuration_is_frozen(self):
        config = select("basic")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.max_output_tokens = 10_000  # type: ignore[misc]
        assert isinstance(config, ModelConfiguration)
