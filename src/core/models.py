# src/core/models.py - v1
"""Shared Pydantic domain models used across modules.

No module redefines these types; all imports come from core.models.
"""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, Field

# === TIERS & CATEGORIES ===

ComplexityTier = Literal["basic", "standard", "premium"]
ImageDetail = Literal["low", "high"]

CreatorCategory = Literal[
    "lifestyle",
    "fashion",
    "beauty",
    "fitness",
    "sports",
    "food",
    "travel",
    "tech",
    "gaming",
    "music",
    "comedy",
    "education",
    "business",
    "art",
    "pets",
    "family",
    "other",
]

TIERS: tuple[str, ...] = get_args(ComplexityTier)
CATEGORIES: tuple[str, ...] = get_args(CreatorCategory)


# === INPUTS ===


class ProfileHints(BaseModel):
    """Profile signals supplied by the caller alongside the captured image."""

    follower_count: int = Field(default=0, ge=0)
    is_verified: bool = False
    website: str | None = None


class ProfileFactors(BaseModel):
    """Normalized signals consumed by the complexity classifier. Never persisted."""

    follower_count: int = Field(ge=0)
    has_verification: bool = False
    has_website: bool = False
    platform_importance: int = Field(default=1, ge=1, le=3)


# === OUTPUTS ===

ANALYSIS_FIELDS: tuple[str, ...] = (
    "creator_score",
    "category",
    "brand_potential",
    "key_strengths",
    "engagement_quality",
    "content_style",
    "audience_demographics",
    "collaboration_potential",
    "overall_assessment",
)


class StructuredAnalysis(BaseModel):
    """Fixed-shape creator analysis. Every field is always populated."""

    creator_score: str
    category: CreatorCategory
    brand_potential: str
    key_strengths: str
    engagement_quality: str
    content_style: str
    audience_demographics: str
    collaboration_potential: str
    overall_assessment: str


class AnalysisOutcome(BaseModel):
    """Result returned to callers of the analyzer. Failures are values, not exceptions."""

    success: bool
    analysis: StructuredAnalysis | None = None
    cost_usd: float = 0.0
    model: str | None = None  # model id, or "cached"
    cached: bool = False
    tier: ComplexityTier | None = None
    degraded: bool = False
    error: str | None = None
