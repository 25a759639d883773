"""Lazy, single-pass text stream returned by ``provider.stream()``.

Iterating yields text deltas in arrival order. Once iteration stops,
``outcome`` says whether the stream completed or failed. ``close()`` (or
leaving a ``with`` block) stops the stream early and releases the
connection; the outcome is then a ``cancelled`` failure.
"""
from __future__ import annotations

from typing import Iterator, List, Optional

from ..cancellation import CancellationToken
from ..errors import ErrorCode, ProviderError
from .outcome import Failed, StreamOutcome
from .streaming import ChatStreamEvent, terminal_outcome, unterminated_outcome


class TextStream:
    def __init__(
        self,
        events: Iterator[ChatStreamEvent],
        *,
        token: Optional[CancellationToken] = None,
        provider: str = "unknown",
        model: str = "unknown",
    ) -> None:
        self._events = events
        self._token = token
        self._provider = provider
        self._model = model
        self._parts: List[str] = []
        self._outcome: Optional[StreamOutcome] = None

    def __iter__(self) -> "TextStream":
        return self

    def __next__(self) -> str:
        if self._outcome is not None:
            raise StopIteration
        for evt in self._events:
            if evt.finish:
                self._outcome = terminal_outcome(evt, self.text)
                raise StopIteration
            if evt.delta:
                self._parts.append(evt.delta)
                return evt.delta
        if self._outcome is None:
            self._outcome = unterminated_outcome(self._provider, self._model, self.text)
        raise StopIteration

    @property
    def text(self) -> str:
        """Text received so far."""
        return "".join(self._parts)

    @property
    def outcome(self) -> Optional[StreamOutcome]:
        """``None`` while the stream is still open."""
        return self._outcome

    def cancel(self, reason: str | None = None) -> None:
        """Ask the stream to stop at its next frame boundary."""
        if self._token is not None:
            self._token.cancel(reason)

    def close(self) -> None:
        """Stop the stream now and release its connection."""
        close = getattr(self._events, "close", None)
        if callable(close):
            close()
        if self._outcome is None:
            self._outcome = Failed(
                error=ProviderError(
                    code=ErrorCode.CANCELLED,
                    message="stream closed by consumer",
                    provider=self._provider,
                    model=self._model,
                ),
                partial_text=self.text,
            )

    def __enter__(self) -> "TextStream":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


__all__ = ["TextStream"]
