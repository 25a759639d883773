"""Streaming primitives for the provider layer.

``ChatStreamEvent`` is the unit a provider's ``stream_chat`` yields: zero or
more text deltas followed by exactly one terminal event (``finish=True``).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..errors import ErrorCode, ProviderError
from .outcome import Completed, Failed, StreamOutcome


@dataclass
class ChatStreamEvent:
    """Represents an incremental delta from a streaming provider.

    Fields:
      provider: canonical provider name
      model: model id/name
      delta: textual delta (``None`` for the terminal event)
      finish: True on the final event
      error: ``"<code>:<message>"`` when the stream failed
      failure: the structured error behind ``error``
      raw: provider frame (optional, for debugging)
    """

    provider: str
    model: str
    delta: str | None
    finish: bool = False
    error: str | None = None
    failure: ProviderError | None = None
    raw: Any | None = None

    def is_error(self) -> bool:
        return self.error is not None


def terminal_outcome(evt: ChatStreamEvent, text: str) -> StreamOutcome:
    """Fold a terminal event and the text received before it into an outcome."""
    if evt.error is None:
        return Completed(full_text=text)
    failure = evt.failure or ProviderError(
        code=ErrorCode.UNKNOWN,
        message=evt.error,
        provider=evt.provider,
        model=evt.model,
    )
    return Failed(error=failure, partial_text=text)


def unterminated_outcome(provider: str, model: str, text: str) -> Failed:
    return Failed(
        error=ProviderError(
            code=ErrorCode.INTERNAL,
            message="stream ended without a terminal event",
            provider=provider,
            model=model,
        ),
        partial_text=text,
    )


__all__ = [
    "ChatStreamEvent",
    "terminal_outcome",
    "unterminated_outcome",
]
