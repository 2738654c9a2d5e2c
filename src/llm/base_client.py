# src/llm/base_client.py - v2
"""Abstract vision client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from creatorlens.llm.models import LLMResponse, VisionRequest


class BaseVisionClient(ABC):
    """Unified interface for vision-capable completion providers."""

    @abstractmethod
    async def complete_with_vision(self, request: VisionRequest) -> LLMResponse:
        """Send one image + prompt and return the completion.

        Raises:
            ProviderRateLimitError: If the provider signals overload.
            ProviderError: For any other provider failure.
        """

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present for this client."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (e.g. openai)."""
