"""Streaming metrics data structures."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class StreamMetrics:
    """Collected metrics for a single streaming invocation.

    ``emitted`` counts text deltas handed to the consumer and
    ``frames_ignored`` counts frames that produced no text. Token fields are
    filled from the provider's end-of-message usage report, when it sends one.
    """

    emitted: int = 0
    frames_ignored: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None
    tokens: Optional[Dict[str, Any]] = None


def build_token_usage(prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> Dict[str, Optional[int]]:
    """Return a canonical token usage mapping."""
    derived_total = total
    if derived_total is None and (prompt is not None and completion is not None):
        derived_total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": derived_total}


def apply_token_usage(metrics: StreamMetrics, *, prompt: Optional[int], completion: Optional[int], total: Optional[int] = None) -> None:
    """Populate token usage fields on a :class:`StreamMetrics` instance."""
    usage = build_token_usage(prompt, completion, total)
    metrics.prompt_tokens = usage["prompt"]
    metrics.completion_tokens = usage["completion"]
    metrics.total_tokens = usage["total"]
    metrics.tokens = usage


__all__ = [
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
]
