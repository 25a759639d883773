"""Streaming package for the provider layer.

Exposes streaming primitives, the adapter loop, metrics, and the consumer
facing :class:`TextStream` under a single namespace.
"""

from .outcome import Completed, Failed, StreamOutcome
from .streaming import ChatStreamEvent, terminal_outcome, unterminated_outcome
from .streaming_metrics import StreamMetrics, apply_token_usage, build_token_usage
from .streaming_finalize import finalize_stream
from .streaming_adapter import BaseStreamingAdapter
from .streaming_support import streaming_supported
from .text_stream import TextStream

__all__ = [
    "Completed",
    "Failed",
    "StreamOutcome",
    "ChatStreamEvent",
    "terminal_outcome",
    "unterminated_outcome",
    "StreamMetrics",
    "apply_token_usage",
    "build_token_usage",
    "finalize_stream",
    "BaseStreamingAdapter",
    "streaming_supported",
    "TextStream",
]
