# src/logging/context.py - v2
"""Contextual logging support: attach request, platform, username and tier to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_platform: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "platform", default=None
)
_username: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "username", default=None
)
_tier: contextvars.ContextVar[str | None] = contextvars.ContextVar("tier", default=None)


@dataclass
class LogContext:
    """Snapshot of the current logging context."""

    request_id: str | None = None
    platform: str | None = None
    username: str | None = None
    tier: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        platform=_platform.get(),
        username=_username.get(),
        tier=_tier.get(),
    )


def set_request_context(request_id: str, platform: str, username: str) -> None:
    """Set per-analysis context (called once per analyze() call)."""
    _request_id.set(request_id)
    _platform.set(platform)
    _username.set(username)
    _tier.set(None)


def set_tier_context(tier: str | None) -> None:
    """Record the tier currently being analyzed."""
    _tier.set(tier)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _platform.set(None)
    _username.set(None)
    _tier.set(None)
