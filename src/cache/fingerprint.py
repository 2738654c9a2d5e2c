# src/cache/fingerprint.py - v3
"""Image fingerprinting and cache key composition.

The fingerprint samples the image instead of reading the whole payload:
first 16 bytes, last 16 bytes and the total length, digested into 16 hex
characters. It is cheap and not collision-proof; a collision only means a
false cache hit on an almost identical capture.
"""

from __future__ import annotations

import hashlib

from creatorlens.core.models import ComplexityTier

SAMPLE_SIZE = 16


def image_fingerprint(image_bytes: bytes) -> str:
    """Short content signature of an image.

    Args:
        image_bytes: Raw image payload.

    Returns:
        16 lowercase hex characters.
    """
    head = image_bytes[:SAMPLE_SIZE]
    tail = image_bytes[-SAMPLE_SIZE:] if image_bytes else b""
    length = len(image_bytes).to_bytes(8, "big")
    return hashlib.blake2b(head + tail + length, digest_size=8).hexdigest()


def build_cache_key(
    platform: str,
    username: str,
    fingerprint: str,
    tier: ComplexityTier,
) -> str:
    """Compose the cache key for one analysis.

    Platform and username are normalized (trimmed, lower-cased, leading ``@``
    removed) so cosmetic differences in caller input share an entry.
    """
    platform_part = platform.strip().lower()
    user_part = username.strip().lstrip("@").lower()
    return f"{platform_part}:{user_part}:{fingerprint}:{tier}"
