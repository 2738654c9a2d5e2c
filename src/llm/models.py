# src/llm/models.py - v2
"""LLM-specific types: VisionRequest, LLMResponse."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from creatorlens.core.models import ImageDetail


class VisionRequest(BaseModel):
    """One image + prompt completion request."""

    model_id: str
    prompt_text: str
    image_base64: str
    image_detail: ImageDetail = "low"
    media_type: str = "image/png"
    max_tokens: int = 500
    temperature: float = 0.3


class LLMResponse(BaseModel):
    """Normalized response from any vision provider."""

    content: str
    total_tokens: int | None = None
    input_tokens: int = 0
    output_tokens: int = 0
    model: str
    provider: str
    latency_ms: int = 0
    raw_response: Any = None
