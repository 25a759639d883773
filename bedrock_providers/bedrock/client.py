"""AWS Bedrock provider.

Purpose:
    Stream chat completions from Anthropic models on Bedrock by decoding the
    ``invoke-with-response-stream`` event stream frame by frame, and generate
    conversation titles with a single ``invoke`` call.

External dependencies:
    - ``httpx`` for transport (pooled client from ``base.http``).
    - ``botocore`` for SigV4 signing (see ``request_builder``).

Streaming semantics:
    - Nothing is signed or sent until the first event is pulled.
    - Deltas are yielded as soon as their frame is decoded; at most one frame
      is buffered ahead of the consumer.
    - Failures after the request is sent end the stream with a terminal error
      event; deltas already yielded stand. Streams are never retried.
    - Dropping the iterator (``close()``, ``break`` inside ``with``, garbage
      collection) closes the HTTP response.

Title semantics:
    ``generate_title`` never raises for provider failures; it logs the error
    and returns a deterministic title derived from the input.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional

import httpx
from pydantic import ValidationError

from ..base.cancellation import CancellationToken
from ..base.errors import ConfigurationError, classify_exception
from ..base.http import get_httpx_client
from ..base.interfaces import HasDefaultModel, LLMProvider, SupportsStreaming
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import Message, MessageLike, SamplingConfig
from ..base.streaming import BaseStreamingAdapter, ChatStreamEvent, TextStream, streaming_supported
from ..base.titles import clamp_title, extract_title_text, fallback_title
from ..config.defaults import (
    BEDROCK_INVOKE_ACTION,
    BEDROCK_STREAM_ACTION,
    DEFAULT_TEMPERATURE,
    TITLE_MAX_TOKENS,
    TITLE_SYSTEM_PROMPT,
)
from ..config.settings import BedrockSettings
from .event_stream import FrameDecoder
from .request_builder import InvocationPayload, build_payload, build_signed_request
from .translator import FrameTranslator
from .transport import open_cursor, post_json

_SETTINGS_FIELDS = frozenset(BedrockSettings.model_fields)


class BedrockProvider(LLMProvider, SupportsStreaming, HasDefaultModel):
    """Streaming chat and title generation against AWS Bedrock."""

    def __init__(
        self,
        settings: Optional[BedrockSettings] = None,
        *,
        model: Optional[str] = None,
        title_model: Optional[str] = None,
        sampling: Optional[SamplingConfig] = None,
        http_client: Optional[httpx.Client] = None,
        validate_checksums: bool = False,
    ) -> None:
        self._settings = settings or BedrockSettings()
        self._model = (model or self._settings.model).strip()
        self._title_model = (title_model or self._settings.title_model).strip()
        self._sampling = sampling or SamplingConfig()
        self._http_client = http_client
        self._validate_checksums = validate_checksums
        self._logger = get_logger("providers.bedrock")

    @classmethod
    def from_config(
        cls,
        *,
        sampling: Optional[SamplingConfig] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
        validate_checksums: bool = False,
        **overrides: Any,
    ) -> "BedrockProvider":
        """Build a provider from merged configuration plus ``overrides``.

        ``overrides`` may name any :class:`BedrockSettings` field.
        """
        unknown = sorted(set(overrides) - _SETTINGS_FIELDS)
        if unknown:
            raise TypeError(f"unexpected settings: {', '.join(unknown)}")
        try:
            settings = BedrockSettings.from_config(overrides)
        except ValidationError as exc:
            raise ConfigurationError(
                message=f"invalid bedrock settings: {exc.errors()[0].get('msg', exc)}",
                provider="bedrock",
            ) from exc
        if sampling is None and (max_tokens is not None or temperature is not None):
            defaults = SamplingConfig()
            try:
                sampling = SamplingConfig(
                    max_tokens=max_tokens if max_tokens is not None else defaults.max_tokens,
                    temperature=temperature if temperature is not None else defaults.temperature,
                )
            except ValueError as exc:
                raise ConfigurationError(message=str(exc), provider="bedrock") from exc
        return cls(
            settings,
            sampling=sampling,
            http_client=http_client,
            validate_checksums=validate_checksums,
        )

    @property
    def provider_name(self) -> str:
        return "bedrock"

    @property
    def settings(self) -> BedrockSettings:
        return self._settings

    def get_name(self) -> str:
        return self.provider_name

    def get_model(self) -> str:
        return self._model

    def default_model(self) -> Optional[str]:  # type: ignore[override]
        return self._settings.model

    def supports_streaming(self) -> bool:  # type: ignore[override]
        return streaming_supported(
            require_credentials=True,
            credential_getters=(
                lambda: self._settings.access_key_id,
                lambda: self._settings.secret_access_key,
            ),
        )

    def _client(self) -> httpx.Client:
        return self._http_client or get_httpx_client(None, purpose="bedrock")

    # ------------------------------------------------------------------
    # Streaming

    def stream_chat(
        self,
        messages: Iterable[MessageLike],
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[ChatStreamEvent]:
        """Stream ``messages`` as delta events followed by one terminal event."""
        payload = build_payload(messages, self._sampling)
        ctx = LogContext(provider=self.provider_name, model=self._model)
        translator = FrameTranslator(logger=self._logger, ctx=ctx, model=self._model)

        @contextmanager
        def _starter() -> Iterator[FrameDecoder]:
            request = build_signed_request(
                payload,
                settings=self._settings,
                model=self._model,
                action=BEDROCK_STREAM_ACTION,
            )
            with open_cursor(self._client(), request, provider=self.provider_name, model=self._model) as cursor:
                ctx.request_id = cursor.request_id
                yield FrameDecoder(cursor, validate_checksums=self._validate_checksums)

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
        """Return a lazy :class:`TextStream` of text deltas."""
        token = cancellation_token or CancellationToken()
        return TextStream(
            self.stream_chat(messages, cancellation_token=token),
            token=token,
            provider=self.provider_name,
            model=self._model,
        )

    # ------------------------------------------------------------------
    # Titles

    def _request_title(self, first_message: str) -> str:
        payload = InvocationPayload(
            system_prompt=TITLE_SYSTEM_PROMPT,
            messages=(Message(role="user", content=first_message),),
            max_tokens=TITLE_MAX_TOKENS,
            temperature=DEFAULT_TEMPERATURE,
        )
        request = build_signed_request(
            payload,
            settings=self._settings,
            model=self._title_model,
            action=BEDROCK_INVOKE_ACTION,
        )
        body = post_json(self._client(), request, provider=self.provider_name, model=self._title_model)
        return clamp_title(extract_title_text(body))

    def generate_title(self, first_message: str) -> str:
        """Return a short title for a conversation opening with ``first_message``."""
        ctx = LogContext(provider=self.provider_name, model=self._title_model)
        normalized_log_event(self._logger, "title.start", ctx, phase="start", attempt=1, emitted=False, tokens=None)
        try:
            title = self._request_title(first_message)
        except Exception as exc:  # any failure maps to the deterministic fallback
            normalized_log_event(
                self._logger,
                "title.error",
                ctx,
                phase="finalize",
                attempt=1,
                error_code=classify_exception(exc).value,
                emitted=False,
                tokens=None,
                level=logging.WARNING,
                error=str(exc)[:260],
                fallback_used=True,
            )
            return fallback_title(first_message)
        normalized_log_event(
            self._logger,
            "title.end",
            ctx,
            phase="finalize",
            attempt=1,
            emitted=True,
            tokens=None,
            title_len=len(title),
        )
        return title


__all__ = ["BedrockProvider"]
