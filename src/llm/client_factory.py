# src/llm/client_factory.py - v3
"""Factory: instantiate a vision client from provider name."""

from __future__ import annotations

import importlib
import logging

from creatorlens.config.settings import Settings
from creatorlens.llm.base_client import BaseVisionClient

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "creatorlens.llm.adapters.openai_adapter.OpenAIAdapter",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_vision_client(
    provider: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseVisionClient:
    """Instantiate the adapter registered for ``provider``.

    Args:
        provider: Provider identifier (e.g. openai).
        settings: Application settings (for API keys).
        **kwargs: Additional adapter arguments; override settings.

    Returns:
        Configured BaseVisionClient instance.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported vision provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    adapter_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    if settings is not None and provider == "openai":
        init_kwargs.setdefault("api_key", settings.openai_api_key)
        init_kwargs.setdefault("base_url", settings.openai_base_url)

    logger.debug("Creating vision client: provider=%s", provider)
    return adapter_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Args:
        name: Provider identifier.
        class_path: Fully qualified class path implementing BaseVisionClient.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered vision provider: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
