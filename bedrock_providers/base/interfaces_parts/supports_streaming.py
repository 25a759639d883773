"""SupportsStreaming Protocol (single-class module).

Capability marker for providers that can stream incremental deltas.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Protocol, runtime_checkable

from ..cancellation import CancellationToken
from ..models import MessageLike
from ..streaming import ChatStreamEvent


@runtime_checkable
class SupportsStreaming(Protocol):
    """Capability marker for providers that can stream incremental deltas.

    Implementations yield zero or more delta events (``finish=False``) then
    exactly one terminal event (``finish=True``). On error, the terminal event
    carries ``error`` and ``failure``.
    """

    def supports_streaming(self) -> bool:  # pragma: no cover - trivial
        """Return True if the provider can stream under current settings."""
        return True

    def stream_chat(
        self,
        messages: Iterable[MessageLike],
        *,
        cancellation_token: CancellationToken | None = None,
    ) -> Iterator[ChatStreamEvent]:  # pragma: no cover - interface
        """Stream chat responses as incremental delta events."""
        ...
