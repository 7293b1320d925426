"""Timeout configuration for HTTP calls.

Centralizes timeout values used by the HTTP client pool so that no ad-hoc
numeric literals appear at call sites.

Supported environment variables (all optional, seconds, must be positive):
    GENAI_TIMEOUT_CONNECT_SECONDS
    GENAI_TIMEOUT_READ_SECONDS    idle time allowed between stream chunks
    GENAI_TIMEOUT_HTTP_SECONDS    baseline for write and pool acquisition

The parsed configuration is cached per process and refreshed when the
environment changes, which keeps tests that monkeypatch the variables
deterministic.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds)."""

    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0

    def to_httpx(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.http_timeout_seconds,
            connect=self.connect_timeout_seconds,
            read=self.read_timeout_seconds,
        )


_ENV_NAMES = (
    "GENAI_TIMEOUT_CONNECT_SECONDS",
    "GENAI_TIMEOUT_READ_SECONDS",
    "GENAI_TIMEOUT_HTTP_SECONDS",
)
_CACHED: Optional[TimeoutConfig] = None
_ENV_GUARD: Optional[str] = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse a positive float from ``name``; fall back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(name, "") for name in _ENV_NAMES)
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(_ENV_NAMES[0], defaults.connect_timeout_seconds),
        read_timeout_seconds=_parse_env_float(_ENV_NAMES[1], defaults.read_timeout_seconds),
        http_timeout_seconds=_parse_env_float(_ENV_NAMES[2], defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
