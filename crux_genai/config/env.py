"""crux_genai.config.env
=====================

Environment variable lookup for the service API key.

Design Notes
------------
- ``GEMINI_API_KEY`` is canonical; ``GOOGLE_API_KEY`` is accepted as an
  alias. Candidates are checked in that order.
- Placeholder values (``changeme``, ``<your key>`` style strings copied from
  docs) are treated as unset so they never reach the service.

Failure Modes
-------------
Helpers never raise on unset variables; they return ``None`` and callers
decide how to proceed.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

API_KEY_ENV_CANDIDATES: Tuple[str, ...] = ("GEMINI_API_KEY", "GOOGLE_API_KEY")


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the provided string looks like a placeholder/test value.

    Heuristics: contains 'placeholder', 'changeme', 'example', 'your_', or is
    wrapped in angle brackets. The check is case-insensitive and resilient to
    surrounding spaces.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or "your_" in v
        or (v.startswith("<") and v.endswith(">"))
    )


def get_env_var_candidates() -> Iterable[str]:
    """Yield acceptable API key environment variable names, canonical first."""
    yield from API_KEY_ENV_CANDIDATES


def resolve_api_key() -> Tuple[Optional[str], Optional[str]]:
    """Resolve the API key from the process environment.

    Returns
    -------
    Tuple[Optional[str], Optional[str]]
        (value, env_var_used) for the first non-empty, non-placeholder
        candidate; (None, None) when nothing usable is set.
    """
    for name in get_env_var_candidates():
        val = os.environ.get(name)
        if val and not is_placeholder(val):
            return val.strip(), name
    return None, None


__all__ = [
    "API_KEY_ENV_CANDIDATES",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_api_key",
]
