"""Shared HTTP client pool.

Purpose:
    Provide a centralized pool of reusable ``httpx.AsyncClient`` instances to
    avoid per-call allocations and reduce connection overhead. Timeouts derive
    exclusively from :func:`get_timeout_config`.

Lifecycle & cleanup:
    - Clients are cached by a composite key of ``base_url`` and ``purpose``
      string. Purposes allow distinct pools (e.g., "generate" vs "stream").
    - An ``AsyncClient`` is bound to the event loop it first runs on. Callers
      that run several event loops in one process (tests using
      ``asyncio.run``) should inject their own client or call
      :func:`aclose_all_clients` before the loop ends.
"""

from __future__ import annotations

import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.AsyncClient] = {}
_LOCK = threading.RLock()


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.AsyncClient:
    """Return a pooled ``httpx.AsyncClient`` for the given base URL and purpose.

    Parameters:
        base_url: Optional API base URL set on the client so callers can issue
            relative requests. ``None`` groups clients under a shared key.
        purpose: A short string discriminating separate pools. Keep stable to
            maximize reuse.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None and not client.is_closed:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None and not client.is_closed:
            return client
        timeout = get_timeout_config().to_httpx()
        client = httpx.AsyncClient(base_url=base_url, timeout=timeout) if base_url else httpx.AsyncClient(timeout=timeout)
        _CLIENTS[key] = client
        return client


async def aclose_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        clients = list(_CLIENTS.values())
        _CLIENTS.clear()
    for c in clients:
        await c.aclose()


__all__ = ["get_httpx_client", "aclose_all_clients"]
