"""Unified configuration layer for the client.

Merge order (later wins):
    1. Built-in defaults (``crux_genai.config.defaults``)
    2. Optional external config file (JSON or YAML) pointed to by
       ``GENAI_CONFIG_FILE``
    3. Environment variables: ``GENAI_MODEL``, ``GENAI_BASE_URL``,
       ``GENAI_API_VERSION``; the API key comes from ``GEMINI_API_KEY`` or
       ``GOOGLE_API_KEY``
    4. In-code overrides passed to :func:`get_client_config`

External config file example::

    model: gemini-2.0-flash
    api_version: v1beta
    generation_config:
      temperature: 0.2

Public API
----------
* get_client_config(overrides: dict | None = None) -> dict
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import GENAI_DEFAULT_API_VERSION, GENAI_DEFAULT_BASE_URL, GENAI_DEFAULT_MODEL
from .env import resolve_api_key

DEFAULTS: Dict[str, Any] = {
    "model": GENAI_DEFAULT_MODEL,
    "base_url": GENAI_DEFAULT_BASE_URL,
    "api_version": GENAI_DEFAULT_API_VERSION,
}

ENV_FIELD_MAP = {
    "model": "GENAI_MODEL",
    "base_url": "GENAI_BASE_URL",
    "api_version": "GENAI_API_VERSION",
}

CONFIG_FILE_ENV = "GENAI_CONFIG_FILE"


def _load_external_config() -> Dict[str, Any]:
    """Load the mapping at ``$GENAI_CONFIG_FILE``; JSON first, then YAML.

    A missing variable or file yields ``{}``. A file that parses to something
    other than a mapping is ignored.
    """
    path = os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    p = Path(path)
    if not p.exists():
        return {}
    text = p.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text) or {}
    return data if isinstance(data, dict) else {}


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for field, name in ENV_FIELD_MAP.items():
        val = os.getenv(name)
        if val:
            out[field] = val
    key, _source = resolve_api_key()
    if key:
        out["api_key"] = key
    return out


def get_client_config(overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged client configuration.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored so callers can pass optional
    keyword arguments straight through.
    """
    cfg: Dict[str, Any] = dict(DEFAULTS)
    cfg |= _load_external_config()
    cfg |= _env_overrides()
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


__all__ = ["get_client_config", "DEFAULTS", "ENV_FIELD_MAP", "CONFIG_FILE_ENV"]
