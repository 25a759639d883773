"""Base streaming adapter: the pull-driven loop shared by providers."""
from __future__ import annotations

import time
from typing import Any, Callable, ContextManager, Iterable, Iterator, Optional

from ..cancellation import CancellationToken, CancelledError
from ..errors import ProviderError
from ..logging import LogContext
from .streaming import ChatStreamEvent
from .streaming_metrics import StreamMetrics
from .streaming_adapter_helpers import (
    finalize_success,
    handle_cancellation,
    handle_midstream_error,
    log_abandoned,
    log_stream_open,
    process_chunk,
)


class BaseStreamingAdapter:
    """Encapsulates provider streaming loop boilerplate.

    ``starter`` returns a context manager that opens the native stream and
    yields an iterable of chunks; leaving the context releases the
    connection. ``translator`` maps one chunk to a text delta (or ``None``)
    and may raise :class:`ProviderError` to end the stream.

    ``run`` reads nothing until the caller pulls the first event and never
    reads further ahead than the chunk it is translating. Every exit path
    (completion, failure, cancellation, and the caller dropping the
    generator) leaves the starter's context and so closes the connection.
    """

    def __init__(
        self,
        *,
        ctx: LogContext,
        provider_name: str,
        model: str,
        starter: Callable[[], ContextManager[Iterable[Any]]],
        translator: Callable[[Any], Optional[str]],
        logger,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> None:
        self.ctx = ctx
        self.provider_name = provider_name
        self.model = model
        self._starter = starter
        self._translator = translator
        self._logger = logger
        self._cancellation_token = cancellation_token
        self.metrics = StreamMetrics()
        self.opened = False
        self.failure: Optional[ProviderError] = None

    def _raise_if_cancelled(self) -> None:
        if self._cancellation_token is not None:
            self._cancellation_token.raise_if_cancelled()

    def run(self) -> Iterator[ChatStreamEvent]:
        """Execute the streaming lifecycle; yields exactly one terminal event."""
        t0 = time.perf_counter()
        outcome: Optional[str] = None
        try:
            self._raise_if_cancelled()
            with self._starter() as stream:
                self.opened = True
                log_stream_open(self)
                for chunk in stream:
                    self._raise_if_cancelled()
                    evt = process_chunk(self, chunk, t0)
                    if evt is not None:
                        yield evt
                        self._raise_if_cancelled()
        except CancelledError as ce:
            outcome = "cancelled"
            yield handle_cancellation(self, ce, t0)
        except Exception as e:
            outcome = "error"
            yield handle_midstream_error(self, e, t0)
        else:
            outcome = "completed"
            yield finalize_success(self, t0)
        finally:
            if outcome is None:
                log_abandoned(self, t0)


__all__ = ["BaseStreamingAdapter"]
