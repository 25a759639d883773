"""Terminal event creation with consolidated lifecycle logging."""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from ..errors import ProviderError
from ..logging import LogContext, normalized_log_event
from .streaming import ChatStreamEvent
from .streaming_metrics import StreamMetrics, build_token_usage


def _tokens_payload(metrics: StreamMetrics) -> Dict[str, Any]:
    if metrics.tokens is not None:
        return metrics.tokens
    return build_token_usage(metrics.prompt_tokens, metrics.completion_tokens, metrics.total_tokens)


def finalize_stream(
    *,
    logger,
    ctx: LogContext,
    provider: str,
    model: str,
    metrics: StreamMetrics,
    failure: Optional[ProviderError] = None,
) -> ChatStreamEvent:
    """Create the terminal :class:`ChatStreamEvent` and log the stream summary."""
    error: Optional[str] = None
    if failure is not None:
        error = f"{failure.code.value}:{failure.message[:260]}"
    normalized_log_event(
        logger,
        "stream.adapter.end" if failure is None else "stream.adapter.error",
        ctx,
        phase="finalize",
        attempt=None,
        emitted=metrics.emitted > 0,
        tokens=_tokens_payload(metrics),
        error_code=failure.code.value if failure is not None else None,
        level=logging.INFO if failure is None else logging.WARNING,
        emitted_count=metrics.emitted,
        frames_ignored=metrics.frames_ignored,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        error=error,
    )
    return ChatStreamEvent(
        provider=provider,
        model=model,
        delta=None,
        finish=True,
        error=error,
        failure=failure,
    )


__all__ = ["finalize_stream"]
