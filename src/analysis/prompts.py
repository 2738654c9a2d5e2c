# src/analysis/prompts.py - v1
"""Tier-specific prompts for creator profile analysis.

Every prompt asks for the same nine JSON keys; tiers differ in how much
depth they request.
"""

from __future__ import annotations

from creatorlens.core.models import CATEGORIES, ComplexityTier

_JSON_KEYS = (
    '{"creator_score": "X/10 - reason", "category": "one category", '
    '"brand_potential": "assessment", "key_strengths": "strengths", '
    '"engagement_quality": "assessment", "content_style": "style description", '
    '"audience_demographics": "demographic insights", '
    '"collaboration_potential": "assessment", "overall_assessment": "summary"}'
)

_CATEGORY_LINE = "Category must be exactly one of: " + ", ".join(CATEGORIES) + "."

_BASIC = """Provide a basic creator analysis based on the visual information available:
1. Creator Score (1-10): Overall rating based on profile presentation
2. Category: Primary content category based on bio/visuals
3. Brand Potential: Partnership potential assessment
4. Key Strengths: Observable strengths from the profile
5. Overall Assessment: Brief summary

Focus only on what's clearly visible in the screenshot. Make confident assessments based on \
profile aesthetics, follower counts, verification status, bio content, and overall presentation \
quality."""

_STANDARD = """Provide a comprehensive creator analysis based on the visible profile information:
1. Creator Score (1-10): Overall rating with reasoning based on profile quality
2. Category: Primary content category/theme from bio and visuals
3. Brand Potential: Partnership suitability based on follower count, verification, presentation
4. Key Strengths: What makes them stand out from the profile
5. Engagement Quality: Assessment based on follower count, verification, and professionalism
6. Content Style: Visual/aesthetic approach observed in the profile
7. Audience Demographics: Likely audience characteristics inferred from profile elements
8. Collaboration Potential: Assessment based on profile professionalism and metrics
9. Overall Assessment: Summary and recommendations

Analyze the profile presentation, follower counts, verification status, bio quality, profile \
aesthetics, and overall brand consistency."""

_PREMIUM = """Provide an in-depth, premium creator analysis based on comprehensive observation of the profile:
1. Creator Score (1-10): Detailed rating with comprehensive reasoning
2. Category: Primary content category, subcategories in the assessment
3. Brand Potential: Detailed partnership suitability with specific recommendations
4. Key Strengths: Comprehensive analysis of unique value propositions
5. Engagement Quality: Deep assessment based on follower metrics, verification, and profile quality
6. Content Style: Detailed visual/aesthetic approach analysis
7. Audience Demographics: Comprehensive audience profiling based on profile elements
8. Collaboration Potential: Detailed collaboration assessment with specific opportunities
9. Overall Assessment: In-depth summary with actionable recommendations

Conduct a thorough analysis of all visible elements: follower counts, verification badges, bio \
content, profile aesthetics, username professionalism, link presence, and overall brand \
presentation. Provide strategic insights and actionable recommendations for brand partnerships."""

_TIER_INSTRUCTIONS: dict[str, str] = {
    "basic": _BASIC,
    "standard": _STANDARD,
    "premium": _PREMIUM,
}


def build_prompt(tier: ComplexityTier, platform: str, username: str) -> str:
    """Prompt text for analyzing ``username``'s profile capture at ``tier``."""
    handle = username.strip().lstrip("@")
    header = (
        f"Analyze this {platform} profile screenshot for user @{handle}. Based on what you "
        "can observe in the screenshot, provide insights about this creator."
    )
    return (
        f"{header}\n\n{_TIER_INSTRUCTIONS[tier]}\n\n{_CATEGORY_LINE}\n\n"
        f"Respond in JSON format with these exact keys:\n{_JSON_KEYS}"
    )
