"""Streaming adapter helper functions."""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

from ..errors import ErrorCode, ProviderError, RETRYABLE_CODES, classify_exception
from ..logging import normalized_log_event
from .streaming import ChatStreamEvent
from .streaming_finalize import finalize_stream


def to_provider_error(adapter, exc: Exception) -> ProviderError:
    """Return ``exc`` as a :class:`ProviderError`, classifying foreign errors."""
    if isinstance(exc, ProviderError):
        return exc
    code = classify_exception(exc)
    return ProviderError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=adapter.provider_name,
        model=adapter.model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


def log_stream_open(adapter) -> None:
    """Emit ``stream.start`` once the response headers have arrived."""
    normalized_log_event(
        adapter._logger,
        "stream.start",
        adapter.ctx,
        phase="start",
        attempt=1,
        emitted=False,
        tokens=None,
    )


def process_chunk(adapter, chunk: Any, t0: float) -> Optional[ChatStreamEvent]:
    """Translate a native chunk; return a delta event or ``None``.

    Translator errors propagate so that remote failures reported inside the
    stream end it with an error terminal event.
    """
    delta = adapter._translator(chunk)
    if not delta:
        adapter.metrics.frames_ignored += 1
        return None
    if adapter.metrics.emitted == 0:
        adapter.metrics.time_to_first_token_ms = (time.perf_counter() - t0) * 1000.0
    adapter.metrics.emitted += 1
    _log_delta_debug(adapter, delta)
    return ChatStreamEvent(
        provider=adapter.provider_name,
        model=adapter.model,
        delta=delta,
        finish=False,
    )


def terminal_error(adapter, failure: ProviderError) -> ChatStreamEvent:
    """Create a terminal error event with current metrics."""
    adapter.failure = failure
    return finalize_stream(
        logger=adapter._logger,
        ctx=adapter.ctx,
        provider=adapter.provider_name,
        model=adapter.model,
        metrics=adapter.metrics,
        failure=failure,
    )


def handle_midstream_error(adapter, exc: Exception, t0: float) -> ChatStreamEvent:
    """Map an exception raised while opening or reading the stream."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    return terminal_error(adapter, to_provider_error(adapter, exc))


def handle_cancellation(adapter, exc, t0: float) -> ChatStreamEvent:
    """Map cooperative cancellation to a terminal ``cancelled`` event."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    reason = exc.args[0] if exc.args else "operation cancelled"
    failure = ProviderError(
        code=ErrorCode.CANCELLED,
        message=str(reason),
        provider=adapter.provider_name,
        model=adapter.model,
        raw=exc,
    )
    return terminal_error(adapter, failure)


def finalize_success(adapter, t0: float) -> ChatStreamEvent:
    """Emit a successful terminal event and finalize metrics."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    return finalize_stream(
        logger=adapter._logger,
        ctx=adapter.ctx,
        provider=adapter.provider_name,
        model=adapter.model,
        metrics=adapter.metrics,
    )


def log_abandoned(adapter, t0: float) -> None:
    """Record a stream the consumer stopped pulling before its terminal event."""
    adapter.metrics.total_duration_ms = (time.perf_counter() - t0) * 1000.0
    normalized_log_event(
        adapter._logger,
        "stream.abandoned",
        adapter.ctx,
        phase="mid_stream" if adapter.opened else "start",
        attempt=None,
        emitted=adapter.metrics.emitted > 0,
        tokens=None,
        error_code=ErrorCode.CANCELLED.value,
        emitted_count=adapter.metrics.emitted,
        total_duration_ms=adapter.metrics.total_duration_ms,
    )


def _log_delta_debug(adapter, delta: str) -> None:
    if not adapter._logger.isEnabledFor(logging.DEBUG):
        return
    normalized_log_event(
        adapter._logger,
        "stream.delta",
        adapter.ctx,
        phase="mid_stream",
        attempt=None,
        emitted=True,
        tokens=None,
        level=logging.DEBUG,
        delta_len=len(delta),
    )


__all__ = [
    "to_provider_error",
    "log_stream_open",
    "process_chunk",
    "terminal_error",
    "handle_midstream_error",
    "handle_cancellation",
    "finalize_success",
    "log_abandoned",
]
