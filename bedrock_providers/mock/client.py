"""Deterministic mock provider for offline use.

Purpose
-------
Implement the ``LLMProvider`` contract without network traffic. Responses are
encoded into genuine event-stream frames and pushed through the same
``ByteCursor`` -> ``FrameDecoder`` -> ``interpret`` pipeline the Bedrock
provider uses, so higher layers (relay, CLI, logging) see identical streaming
behaviour.

External dependencies
---------------------
None beyond the package itself.

Failure simulation
------------------
``fail_with=(error_type, message)`` appends a remote exception frame after
the scripted deltas, ending the stream with a ``remote`` error.
``chunk_size`` splits the encoded byte stream into network-sized pieces to
exercise frames that straddle chunk boundaries.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..base.cancellation import CancellationToken
from ..base.interfaces import HasDefaultModel, LLMProvider, SupportsStreaming
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import MessageLike
from ..base.streaming import BaseStreamingAdapter, ChatStreamEvent, TextStream
from ..bedrock.event_stream import FrameDecoder
from ..bedrock.events import encode_chunk, exception_frame, text_delta_chunk
from ..bedrock.translator import FrameTranslator
from ..bedrock.transport import ByteCursor
from ..config import get_provider_config

DEFAULT_RESPONSE: Tuple[str, ...] = ("This ", "is ", "a ", "test ", "response.")
TITLE_PREFIX = "Chat about: "


class MockProvider(LLMProvider, SupportsStreaming, HasDefaultModel):
    """Provider that streams scripted deltas instead of calling a live API."""

    def __init__(
        self,
        *,
        model: str = "mock-model",
        deltas: Optional[Sequence[str]] = None,
        fail_with: Optional[Tuple[str, str]] = None,
        chunk_size: Optional[int] = None,
    ) -> None:
        self._model = model
        self._deltas: List[str] = list(DEFAULT_RESPONSE if deltas is None else deltas)
        self._fail_with = fail_with
        self._chunk_size = chunk_size
        self._logger = get_logger("providers.mock")

    @classmethod
    def from_config(
        cls,
        *,
        model: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        **overrides: Any,
    ) -> "MockProvider":
        """Build from configuration; sampling settings are accepted and unused."""
        cfg = get_provider_config("mock", {"model": model})
        return cls(model=str(cfg.get("model") or "mock-model"), **overrides)

    @property
    def provider_name(self) -> str:
        return "mock"

    def get_name(self) -> str:
        return self.provider_name

    def get_model(self) -> str:
        return self._model

    def default_model(self) -> Optional[str]:  # type: ignore[override]
        return self._model

    def supports_streaming(self) -> bool:  # type: ignore[override]
        return True

    def _encoded_chunks(self) -> Iterator[bytes]:
        """Yield the scripted response as wire bytes, optionally re-chunked."""
        frames = [encode_chunk({"type": "message_start", "message": {"id": "msg_mock", "model": self._model}})]
        frames += [text_delta_chunk(d) for d in self._deltas]
        if self._fail_with is not None:
            frames.append(exception_frame(*self._fail_with))
        else:
            frames.append(encode_chunk({"type": "message_stop"}))
        if not self._chunk_size:
            yield from frames
            return
        data = b"".join(frames)
        for i in range(0, len(data), self._chunk_size):
            yield data[i : i + self._chunk_size]

    def stream_chat(
        self,
        messages: Iterable[MessageLike],
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:
        """Yield scripted deltas through the shared streaming adapter."""
        ctx = LogContext(provider=self.provider_name, model=self._model)
        translator = FrameTranslator(logger=self._logger, ctx=ctx, model=self._model)

        @contextmanager
        def _starter() -> Iterator[FrameDecoder]:
            cursor = ByteCursor(self._encoded_chunks(), provider=self.provider_name, model=self._model)
            try:
                yield FrameDecoder(cursor, validate_checksums=True)
            finally:
                cursor.close()

        adapter = BaseStreamingAdapter(
            ctx=ctx,
            provider_name=self.provider_name,
            model=self._model,
            starter=_starter,
            translator=translator,
            logger=self._logger,
            cancellation_token=cancellation_token,
        )
        translator.bind(adapter.metrics)
        return adapter.run()

    def stream(
        self,
        messages: Iterable[MessageLike],
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> TextStream:
        token = cancellation_token or CancellationToken()
        return TextStream(
            self.stream_chat(messages, cancellation_token=token),
            token=token,
            provider=self.provider_name,
            model=self._model,
        )

    def generate_title(self, first_message: str) -> str:
        title = TITLE_PREFIX + (first_message or "")[:30]
        normalized_log_event(
            self._logger,
            "title.end",
            LogContext(provider=self.provider_name, model=self._model),
            phase="finalize",
            attempt=1,
            emitted=True,
            tokens=None,
            title_len=len(title),
        )
        return title


__all__ = ["MockProvider"]
