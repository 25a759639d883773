"""Frame translator plugged into ``BaseStreamingAdapter``.

Maps each decoded frame to a text delta, records usage reported by the
model, logs frames that carry no text, and turns remote exception frames
into :class:`RemoteStreamError`.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..base.errors import ErrorCode
from ..base.logging import LogContext, normalized_log_event
from ..base.streaming import StreamMetrics, apply_token_usage
from .event_stream import Frame
from .events import Ignorable, MessageStart, MessageStop, TerminalMarker, TextDelta, interpret


class FrameTranslator:
    def __init__(self, *, logger: logging.Logger, ctx: LogContext, model: str) -> None:
        self._logger = logger
        self._ctx = ctx
        self._model = model
        self._metrics: Optional[StreamMetrics] = None
        self._prompt_tokens: Optional[int] = None

    def bind(self, metrics: StreamMetrics) -> "FrameTranslator":
        self._metrics = metrics
        return self

    def __call__(self, frame: Frame) -> Optional[str]:
        result = interpret(frame)
        if isinstance(result, TextDelta):
            return result.text
        if isinstance(result, TerminalMarker):
            normalized_log_event(
                self._logger,
                "stream.remote_error",
                self._ctx,
                phase="mid_stream",
                attempt=None,
                error_code=ErrorCode.REMOTE.value,
                emitted=bool(self._metrics and self._metrics.emitted),
                tokens=None,
                level=logging.WARNING,
                error_type=result.error_type,
            )
            raise result.to_error(model=self._model)
        self._on_ignorable(result)
        return None

    def _on_ignorable(self, result: Ignorable) -> None:
        event = result.event
        if isinstance(event, MessageStart) and event.input_tokens is not None:
            self._prompt_tokens = event.input_tokens
        elif isinstance(event, MessageStop) and self._metrics is not None:
            prompt = event.input_tokens if event.input_tokens is not None else self._prompt_tokens
            if prompt is not None or event.output_tokens is not None:
                apply_token_usage(self._metrics, prompt=prompt, completion=event.output_tokens)
        normalized_log_event(
            self._logger,
            "stream.frame_ignored",
            self._ctx,
            phase="mid_stream",
            attempt=None,
            emitted=None,
            tokens=None,
            level=logging.DEBUG if result.routine else logging.INFO,
            reason=result.reason,
            event_type=result.event_type,
        )


__all__ = ["FrameTranslator"]
