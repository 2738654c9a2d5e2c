# src/config/settings.py - v2
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for credentials, cache sizing, degrade policy and
logging. Every field maps to an upper-case environment variable of the same
name (e.g. ``OPENAI_API_KEY``, ``CACHE_MAX_SIZE``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Vision model provider ===
    llm_provider: Literal["openai"] = "openai"
    openai_api_key: str = ""
    openai_base_url: str = ""
    image_media_type: str = "image/png"

    # === Analysis cache ===
    cache_max_size: int = 1000
    cache_ttl_seconds: int = 7 * 24 * 60 * 60
    cache_sweep_interval_seconds: int = 60 * 60
    cache_sweep_batch_size: int = 500

    # === Degrade-and-retry ===
    degrade_follower_cap: int = 1000

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("cache_max_size")
    @classmethod
    def validate_cache_max_size(cls, v: int) -> int:  # noqa: N805
        """Batch eviction removes 10% of capacity, so it must be >= 1 entry."""
        if v < 10:
            raise ValueError("cache_max_size must be >= 10")
        return v

    @field_validator("degrade_follower_cap")
    @classmethod
    def validate_follower_cap(cls, v: int) -> int:  # noqa: N805
        if v < 0:
            raise ValueError("degrade_follower_cap must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_ttl_seconds <= 0:
            errors.append("CACHE_TTL_SECONDS must be positive")

        if self.cache_sweep_interval_seconds <= 0:
            errors.append("CACHE_SWEEP_INTERVAL_SECONDS must be positive")

        if self.cache_sweep_batch_size <= 0:
            errors.append("CACHE_SWEEP_BATCH_SIZE must be positive")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def has_credentials(self) -> bool:
        """Whether the configured provider has an API key."""
        if self.llm_provider == "openai":
            return bool(self.openai_api_key.strip())
        return False

    @property
    def cache_ttl_ms(self) -> int:
        return self.cache_ttl_seconds * 1000


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-call config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
