# src/llm/adapters/openai_adapter.py - v2
"""OpenAI chat-completions adapter implementing BaseVisionClient.

Uses the official openai SDK. The image travels as a base64 data URL with
the requested ``detail`` level. SDK errors are translated into
``creatorlens.llm.errors`` types.
"""

from __future__ import annotations

import logging
import time
from typing import Any

from creatorlens.llm.base_client import BaseVisionClient
from creatorlens.llm.errors import (
    EmptyResponseError,
    MissingCredentialsError,
    ProviderError,
    ProviderRateLimitError,
)
from creatorlens.llm.models import LLMResponse, VisionRequest

logger = logging.getLogger(__name__)


class OpenAIAdapter(BaseVisionClient):
    """OpenAI vision adapter."""

    def __init__(self, api_key: str = "", base_url: str = "", **kwargs: Any) -> None:
        self._api_key = api_key
        self._base_url = base_url or None
        self.__client = None  # Lazy initialization

    @property
    def _client(self):
        """Lazy-init OpenAI client (only on first API call)."""
        if self.__client is None:
            import openai

            self.__client = openai.AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self.__client

    async def complete_with_vision(self, request: VisionRequest) -> LLMResponse:
        if not self.is_configured:
            raise MissingCredentialsError("OpenAI API key not configured")

        import openai

        messages: list[dict[str, Any]] = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": request.prompt_text},
                    {
                        "type": "image_url",
                        "image_url": {
                            "url": f"data:{request.media_type};base64,{request.image_base64}",
                            "detail": request.image_detail,
                        },
                    },
                ],
            }
        ]

        t0 = time.monotonic()
        try:
            resp = await self._client.chat.completions.create(
                model=request.model_id,
                messages=messages,
                max_tokens=request.max_tokens,
                temperature=request.temperature,
            )
        except openai.RateLimitError as e:
            raise ProviderRateLimitError(f"OpenAI rate limit: {e}") from e
        except openai.APIError as e:
            raise ProviderError(f"OpenAI request failed: {e}") from e
        latency = int((time.monotonic() - t0) * 1000)

        content = resp.choices[0].message.content if resp.choices else None
        if not content:
            raise EmptyResponseError("No response from OpenAI")

        usage = resp.usage
        logger.info("OpenAI request completed in %dms (model=%s)", latency, request.model_id)
        return LLMResponse(
            content=content,
            total_tokens=usage.total_tokens if usage else None,
            input_tokens=usage.prompt_tokens if usage else 0,
            output_tokens=usage.completion_tokens if usage else 0,
            model=request.model_id,
            provider="openai",
            latency_ms=latency,
            raw_response=resp,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self._api_key and self._api_key.strip())

    @property
    def provider_name(self) -> str:
        return "openai"
