# src/routing/model_selector.py - v1
"""Tier -> model/budget configuration lookup.

Premium and standard share one model id; standard trades image detail and
token budget for cost. Basic runs the small model at low detail.
"""

from __future__ import annotations

from dataclasses import dataclass

from creatorlens.core.models import ComplexityTier, ImageDetail


@dataclass(frozen=True)
class ModelConfiguration:
    """Model and budget used for one analysis call."""

    model_id: str
    max_output_tokens: int
    temperature: float
    image_detail: ImageDetail
    estimated_unit_cost_usd: float


MODEL_TABLE: dict[str, ModelConfiguration] = {
    "basic": ModelConfiguration(
        model_id="gpt-4o-mini",
        max_output_tokens=500,
        temperature=0.3,
        image_detail="low",
        estimated_unit_cost_usd=0.003,
    ),
    "standard": ModelConfiguration(
        model_id="gpt-4o",
        max_output_tokens=800,
        temperature=0.3,
        image_detail="low",
        estimated_unit_cost_usd=0.025,
    ),
    "premium": ModelConfiguration(
        model_id="gpt-4o",
        max_output_tokens=1000,
        temperature=0.3,
        image_detail="high",
        estimated_unit_cost_usd=0.05,
    ),
}


def select(tier: ComplexityTier) -> ModelConfiguration:
    """Return the configuration for a tier.

    Raises:
        KeyError: If ``tier`` is not one of basic, standard, premium.
    """
    return MODEL_TABLE[tier]
