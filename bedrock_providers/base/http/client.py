"""Shared HTTP client pool for providers.

Purpose:
    Provide a thread-safe pool of reusable ``httpx.Client`` instances so each
    call does not pay for a new connection pool. Every streaming call still
    checks out its own connection from the pool; no response state is
    shared between concurrent calls.

External dependencies:
    - ``httpx`` for the synchronous HTTP client and streaming responses.

Timeout strategy:
    - Connect/read/write/pool timeouts derive from :func:`get_timeout_config`
      at the time of first creation for a key and are cached thereafter.

Lifecycle & cleanup:
    - Clients are cached by ``(base_url, purpose)``. Purposes keep distinct
      pools (e.g. ``"bedrock.stream"`` vs ``"bedrock.invoke"``).
    - All clients are closed at interpreter exit via ``atexit``; tests may
      call :func:`close_all_clients` explicitly.
"""

from __future__ import annotations

import atexit
import threading
from typing import Dict, Optional, Tuple

import httpx

from ..timeouts import get_timeout_config

_CLIENTS: Dict[Tuple[Optional[str], str], httpx.Client] = {}
_LOCK = threading.RLock()


def build_timeout() -> httpx.Timeout:
    """Translate the cached :class:`TimeoutConfig` into an ``httpx.Timeout``."""
    cfg = get_timeout_config()
    return httpx.Timeout(
        connect=cfg.start_timeout_seconds,
        read=cfg.stream_timeout_seconds,
        write=cfg.http_timeout_seconds,
        pool=cfg.http_timeout_seconds,
    )


def get_httpx_client(base_url: Optional[str], purpose: str) -> httpx.Client:
    """Return a pooled ``httpx.Client`` for the given base URL and purpose.

    Parameters:
        base_url: Optional base URL set on the client. ``None`` groups
            clients under a shared key.
        purpose: Short string discriminating separate pools.

    Returns:
        A reusable ``httpx.Client`` instance.
    """
    key = (base_url, purpose)
    client = _CLIENTS.get(key)
    if client is not None:
        return client

    with _LOCK:
        client = _CLIENTS.get(key)
        if client is not None:
            return client
        timeout = build_timeout()
        client = httpx.Client(base_url=base_url, timeout=timeout) if base_url else httpx.Client(timeout=timeout)
        _CLIENTS[key] = client
        return client


def close_all_clients() -> None:
    """Close and clear all pooled HTTP clients."""
    with _LOCK:
        for c in _CLIENTS.values():
            try:
                c.close()
            except Exception:  # nosec B110 - shutdown path, nothing actionable
                pass
        _CLIENTS.clear()


atexit.register(close_all_clients)

__all__ = ["get_httpx_client", "close_all_clients", "build_timeout"]
