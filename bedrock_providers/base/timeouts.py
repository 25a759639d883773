"""Unified timeout configuration for providers.

Timeout values are resolved once from the environment and cached. They feed
the pooled ``httpx`` client (see ``base.http``); no per-frame timeout is
imposed on streams, so a stalled but open connection is bounded only by the
transport read timeout. Callers wanting a hard wall-clock cap must enforce
it themselves (for example by cancelling the stream).

Supported environment variables (all optional, positive floats):
    PT_TIMEOUT_START_SECONDS   connect timeout
    PT_TIMEOUT_STREAM_SECONDS  read timeout between received bytes
    PT_TIMEOUT_HTTP_SECONDS    write / pool acquisition timeout
"""
from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        start_timeout_seconds: Timeout for establishing the connection.
        stream_timeout_seconds: Idle timeout while waiting for more bytes.
        http_timeout_seconds: Baseline timeout for writes and pool waits.
    """

    start_timeout_seconds: float = 30.0
    stream_timeout_seconds: float = 60.0
    http_timeout_seconds: float = 30.0


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None
_ENV_NAMES = ("PT_TIMEOUT_START_SECONDS", "PT_TIMEOUT_STREAM_SECONDS", "PT_TIMEOUT_HTTP_SECONDS")


def _parse_env_float(name: str, default: float) -> float:
    """Read ``name`` as a positive float, falling back to ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached :class:`TimeoutConfig`.

    The cache is refreshed when any of the supported variables change so
    tests can adjust timeouts through ``monkeypatch.setenv``.
    """
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(os.getenv(n, "") for n in _ENV_NAMES)
    if _CACHED is not None and guard == _ENV_GUARD:
        return _CACHED
    defaults = TimeoutConfig()
    _CACHED = TimeoutConfig(
        start_timeout_seconds=_parse_env_float("PT_TIMEOUT_START_SECONDS", defaults.start_timeout_seconds),
        stream_timeout_seconds=_parse_env_float("PT_TIMEOUT_STREAM_SECONDS", defaults.stream_timeout_seconds),
        http_timeout_seconds=_parse_env_float("PT_TIMEOUT_HTTP_SECONDS", defaults.http_timeout_seconds),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = [
    "TimeoutConfig",
    "get_timeout_config",
]
