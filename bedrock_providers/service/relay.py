"""Relay a provider stream into an output sink.

Purpose
-------
Bridge a provider's lazy text stream to whatever the hosting layer writes to
(an HTTP response body, a terminal). Each delta is written and flushed
before the next one is pulled, so no buffering sits between the decoder and
the sink.

Fallback semantics
------------------
- If the stream fails, deltas already written stand and
  ``ERROR_FALLBACK_TEXT`` is written after them; the failure is logged, not
  raised.
- Errors raised by ``write``/``flush`` themselves (for example a client that
  disconnected) propagate after the upstream connection is closed.
- ``title_or_fallback`` never raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional

from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import MessageLike, coerce_messages
from ..base.streaming import Failed, StreamOutcome
from ..base.titles import fallback_title
from ..config.defaults import ERROR_FALLBACK_TEXT

_logger = get_logger("providers.relay")


@dataclass(frozen=True)
class RelayResult:
    """What was written to the sink and how the stream ended."""

    text: str
    outcome: Optional[StreamOutcome] = None

    @property
    def ok(self) -> bool:
        return not isinstance(self.outcome, Failed)


def relay_stream(
    provider: Any,
    messages: Iterable[MessageLike],
    write: Callable[[str], Any],
    flush: Optional[Callable[[], Any]] = None,
) -> RelayResult:
    """Stream ``messages`` through ``provider`` into ``write``.

    The result holds the full text written (including the fallback text on
    failure) and the stream outcome.
    An empty history writes nothing and never contacts the provider.
    """
    history = coerce_messages(messages)
    if not history:
        return RelayResult(text="")
    written = []
    with provider.stream(history) as stream:
        for delta in stream:
            write(delta)
            if flush is not None:
                flush()
            written.append(delta)
        outcome = stream.outcome
    if isinstance(outcome, Failed):
        normalized_log_event(
            _logger,
            "relay.error",
            LogContext(provider=provider.provider_name, model=provider.get_model()),
            phase="mid_stream",
            attempt=None,
            error_code=outcome.error.code.value,
            emitted=bool(written),
            tokens=None,
            level=logging.ERROR,
            error=outcome.error.message[:260],
        )
        write(ERROR_FALLBACK_TEXT)
        if flush is not None:
            flush()
        written.append(ERROR_FALLBACK_TEXT)
    return RelayResult(text="".join(written), outcome=outcome)


def title_or_fallback(provider: Any, text: str) -> str:
    """Return ``provider.generate_title(text)``, or the deterministic fallback."""
    try:
        return provider.generate_title(text)
    except Exception as exc:  # providers should not raise here; fall back regardless
        normalized_log_event(
            _logger,
            "title.error",
            LogContext(provider=getattr(provider, "provider_name", None)),
            phase="finalize",
            attempt=None,
            error_code=exc.__class__.__name__,
            emitted=False,
            tokens=None,
            level=logging.WARNING,
            fallback_used=True,
        )
        return fallback_title(text)


__all__ = ["RelayResult", "relay_stream", "title_or_fallback"]
