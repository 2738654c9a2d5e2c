# src/tracking/cost_calculator.py - v2
"""Approximate USD cost of a vision call.

cost = tokens_used * token_rate(model) + image_surcharge(detail)

The rates are rough calibration data, not reconciled against provider
billing. The estimate feeds reporting only and never affects control flow.
"""

from __future__ import annotations

import logging

from creatorlens.routing.model_selector import ModelConfiguration

logger = logging.getLogger(__name__)

# Blended USD per token (input and output not distinguished)
DEFAULT_TOKEN_RATES: dict[str, float] = {
    "gpt-4o": 0.00005,
    "gpt-4o-mini": 0.000002,
}

# Flat USD per image by detail level
DEFAULT_IMAGE_SURCHARGES: dict[str, float] = {
    "high": 0.01,
    "low": 0.003,
}


def token_rate(model_id: str, rates: dict[str, float] | None = None) -> float:
    """Per-token rate for a model. Unknown models cost nothing per token."""
    rates = rates or DEFAULT_TOKEN_RATES
    rate = rates.get(model_id)
    if rate is None:
        logger.debug("No token rate for model %s, assuming 0", model_id)
        return 0.0
    return rate


def image_surcharge(detail: str, surcharges: dict[str, float] | None = None) -> float:
    """Flat per-image cost for a detail level."""
    surcharges = surcharges or DEFAULT_IMAGE_SURCHARGES
    return surcharges.get(detail, 0.0)


def estimate_cost(
    tokens_used: int | None,
    config: ModelConfiguration,
    rates: dict[str, float] | None = None,
    surcharges: dict[str, float] | None = None,
) -> float:
    """Estimate the cost of one call.

    Args:
        tokens_used: Total tokens reported by the provider. When the provider
            reports no usage, the configured output budget is assumed.
        config: Configuration the call was made with.
        rates: Per-model token rates override.
        surcharges: Per-detail image surcharge override.

    Returns:
        Estimated cost in USD.
    """
    tokens = config.max_output_tokens if tokens_used is None else max(0, tokens_used)
    return tokens * token_rate(config.model_id, rates) + image_surcharge(
        config.image_detail, surcharges
    )
