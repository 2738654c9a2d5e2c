# src/routing/complexity.py - v2
"""Complexity classifier: profile signals -> analysis tier.

Scores a profile from independent weighted rules, then thresholds the
total into ``basic``, ``standard`` or ``premium``. Pure and total.
"""

from __future__ import annotations

from creatorlens.core.models import ComplexityTier, ProfileFactors, ProfileHints

PREMIUM_THRESHOLD = 6
STANDARD_THRESHOLD = 4

# (exclusive lower bound, points), checked top-down.
_FOLLOWER_BANDS: tuple[tuple[int, int], ...] = (
    (1_000_000, 4),
    (100_000, 3),
    (40_000, 2),
    (10_000, 1),
)
_SMALL_ACCOUNT_LIMIT = 5_000
_SMALL_ACCOUNT_POINTS = 2

_PLATFORM_IMPORTANCE: dict[str, int] = {
    "instagram": 2,
    "tiktok": 2,
    "youtube": 3,
}


def platform_importance(platform: str) -> int:
    """Business weight of a platform (1-3). Unknown platforms weigh 1."""
    return _PLATFORM_IMPORTANCE.get(platform.strip().lower(), 1)


def follower_points(follower_count: int) -> int:
    """Points contributed by audience size.

    Accounts under 5,000 followers score like a 40K account on purpose:
    there is little to go on besides presentation, so they get a richer
    prompt, not a cheaper one. Accounts between 5,000 and 10,000 score 0.
    """
    for lower_bound, points in _FOLLOWER_BANDS:
        if follower_count > lower_bound:
            return points
    if follower_count < _SMALL_ACCOUNT_LIMIT:
        return _SMALL_ACCOUNT_POINTS
    return 0


def score(factors: ProfileFactors) -> int:
    """Raw complexity score for a profile."""
    total = follower_points(factors.follower_count)
    if factors.has_verification:
        total += 2
    if factors.has_website:
        total += 1
    total += factors.platform_importance
    return total


def classify(factors: ProfileFactors) -> ComplexityTier:
    """Map profile factors to a complexity tier."""
    value = score(factors)
    if value >= PREMIUM_THRESHOLD:
        return "premium"
    if value >= STANDARD_THRESHOLD:
        return "standard"
    return "basic"


def factors_from_hints(platform: str, hints: ProfileHints) -> ProfileFactors:
    """Build classifier input from caller-supplied profile hints."""
    return ProfileFactors(
        follower_count=hints.follower_count,
        has_verification=hints.is_verified,
        has_website=bool(hints.website),
        platform_importance=platform_importance(platform),
    )
