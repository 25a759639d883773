"""Interpretation of decoded Bedrock frames.

Purpose:
    Classify each :class:`Frame` as a text delta, an ignorable control or
    unknown event, or a terminal remote error.

Chunk frames (``:event-type: chunk``) carry a JSON document whose ``bytes``
field is base64 of the model's own JSON event. Only
``content_block_delta`` events with a non-empty ``delta.text`` produce text.

Exception frames (``:message-type: exception`` or ``error``, or an event type
ending in ``Exception`` such as ``modelStreamErrorException``) become a
:class:`TerminalMarker`. Malformed chunk payloads are ignorable, not fatal.

``interpret`` is a pure function of one frame and never raises.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union

from ..base.errors import RemoteStreamError
from .event_stream import Frame, encode_frame

CHUNK_EVENT_TYPE = "chunk"
EXCEPTION_MESSAGE_TYPES = frozenset({"exception", "error"})


# Inner (model) events


@dataclass(frozen=True)
class ContentBlockDelta:
    index: int
    text: Optional[str]
    delta_type: Optional[str] = None


@dataclass(frozen=True)
class MessageStart:
    message_id: Optional[str] = None
    model: Optional[str] = None
    input_tokens: Optional[int] = None


@dataclass(frozen=True)
class MessageStop:
    """End of the model message, with Bedrock invocation metrics when present."""

    input_tokens: Optional[int] = None
    output_tokens: Optional[int] = None


@dataclass(frozen=True)
class UnknownEvent:
    type: Optional[str]


InnerEvent = Union[ContentBlockDelta, MessageStart, MessageStop, UnknownEvent]


# Interpretation results


@dataclass(frozen=True)
class TextDelta:
    text: str


@dataclass(frozen=True)
class Ignorable:
    """A frame that yields no text.

    ``reason`` names why (``"message_start"``, ``"malformed_chunk"``,
    ``"unknown_event_type"``, ...); ``event`` keeps the parsed inner event when
    there is one so callers can pick up usage figures.
    """

    reason: str
    event_type: Optional[str] = None
    event: Optional[InnerEvent] = None

    @property
    def routine(self) -> bool:
        return isinstance(self.event, (MessageStart, MessageStop)) or self.reason in _ROUTINE_REASONS


@dataclass(frozen=True)
class TerminalMarker:
    error_type: str
    message: str

    def to_error(self, *, model: Optional[str] = None) -> RemoteStreamError:
        return RemoteStreamError(
            message=f"{self.error_type}: {self.message}" if self.message else self.error_type,
            model=model,
            error_type=self.error_type,
        )


Interpretation = Union[TextDelta, Ignorable, TerminalMarker]

_ROUTINE_REASONS = frozenset(
    {"content_block_start", "content_block_stop", "message_delta", "ping", "empty_delta"}
)


def _as_int(value: Any) -> Optional[int]:
    return value if isinstance(value, int) and not isinstance(value, bool) else None


def parse_inner_event(data: Mapping[str, Any]) -> InnerEvent:
    """Map a decoded model event to its typed form."""
    kind = data.get("type")
    if kind == "content_block_delta":
        delta = data.get("delta")
        delta = delta if isinstance(delta, Mapping) else {}
        text = delta.get("text")
        return ContentBlockDelta(
            index=_as_int(data.get("index")) or 0,
            text=text if isinstance(text, str) else None,
            delta_type=delta.get("type"),
        )
    if kind == "message_start":
        message = data.get("message")
        message = message if isinstance(message, Mapping) else {}
        usage = message.get("usage")
        usage = usage if isinstance(usage, Mapping) else {}
        return MessageStart(
            message_id=message.get("id"),
            model=message.get("model"),
            input_tokens=_as_int(usage.get("input_tokens")),
        )
    if kind == "message_stop":
        metrics = data.get("amazon-bedrock-invocationMetrics")
        metrics = metrics if isinstance(metrics, Mapping) else {}
        return MessageStop(
            input_tokens=_as_int(metrics.get("inputTokenCount")),
            output_tokens=_as_int(metrics.get("outputTokenCount")),
        )
    return UnknownEvent(type=kind if isinstance(kind, str) else None)


def decode_chunk_payload(payload: bytes) -> Tuple[Optional[Mapping[str, Any]], Optional[str]]:
    """Unwrap ``{"bytes": base64(json)}``.

    Returns ``(inner, None)`` on success or ``(None, reason)`` on failure.
    """
    try:
        outer = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, "malformed_chunk"
    if not isinstance(outer, Mapping):
        return None, "malformed_chunk"
    encoded = outer.get("bytes")
    if not isinstance(encoded, str):
        return None, "missing_bytes"
    try:
        inner = json.loads(base64.b64decode(encoded, validate=True).decode("utf-8"))
    except ValueError:  # includes binascii.Error and JSONDecodeError
        return None, "malformed_chunk"
    if not isinstance(inner, Mapping):
        return None, "malformed_chunk"
    return inner, None


def _payload_message(payload: bytes) -> str:
    try:
        data = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return payload.decode("utf-8", errors="replace").strip()
    if isinstance(data, Mapping):
        for key in ("message", "Message"):
            if isinstance(data.get(key), str):
                return data[key]
    return ""


def _terminal_from_frame(frame: Frame) -> Optional[TerminalMarker]:
    headers = frame.headers
    message_type = headers.message_type
    event_type = headers.event_type
    if message_type == "error":
        return TerminalMarker(
            error_type=headers.get_str(":error-code") or "error",
            message=headers.get_str(":error-message") or _payload_message(frame.payload),
        )
    if message_type == "exception":
        return TerminalMarker(
            error_type=headers.exception_type or event_type or "exception",
            message=_payload_message(frame.payload),
        )
    if event_type and event_type.lower().endswith("exception"):
        return TerminalMarker(error_type=event_type, message=_payload_message(frame.payload))
    return None


def interpret(frame: Frame) -> Interpretation:
    """Classify ``frame``; pure and total."""
    terminal = _terminal_from_frame(frame)
    if terminal is not None:
        return terminal
    event_type = frame.headers.event_type
    if event_type != CHUNK_EVENT_TYPE:
        return Ignorable(reason="unknown_event_type", event_type=event_type)
    inner, failure = decode_chunk_payload(frame.payload)
    if inner is None:
        return Ignorable(reason=failure or "malformed_chunk", event_type=event_type)
    if inner.get("type") == "error":
        error = inner.get("error")
        error = error if isinstance(error, Mapping) else {}
        return TerminalMarker(
            error_type=str(error.get("type") or "error"),
            message=str(error.get("message") or ""),
        )
    event = parse_inner_event(inner)
    if isinstance(event, ContentBlockDelta):
        if event.text:
            return TextDelta(event.text)
        return Ignorable(reason="empty_delta", event_type=event_type, event=event)
    if isinstance(event, UnknownEvent):
        return Ignorable(reason=event.type or "untyped_event", event_type=event_type, event=event)
    return Ignorable(reason=str(inner.get("type")), event_type=event_type, event=event)


# Encoding helpers for offline streams


def encode_chunk(inner: Mapping[str, Any]) -> bytes:
    """Wrap a model event into a complete ``chunk`` frame."""
    encoded = base64.b64encode(json.dumps(inner).encode("utf-8")).decode("ascii")
    return encode_frame(
        {
            ":event-type": CHUNK_EVENT_TYPE,
            ":content-type": "application/json",
            ":message-type": "event",
        },
        json.dumps({"bytes": encoded}).encode("utf-8"),
    )


def text_delta_chunk(text: str, index: int = 0) -> bytes:
    return encode_chunk(
        {"type": "content_block_delta", "index": index, "delta": {"type": "text_delta", "text": text}}
    )


def exception_frame(error_type: str, message: str) -> bytes:
    """Encode an exception frame as the service sends it mid-stream."""
    return encode_frame(
        {
            ":message-type": "exception",
            ":exception-type": error_type,
            ":content-type": "application/json",
        },
        json.dumps({"message": message}).encode("utf-8"),
    )


__all__ = [
    "ContentBlockDelta",
    "MessageStart",
    "MessageStop",
    "UnknownEvent",
    "InnerEvent",
    "TextDelta",
    "Ignorable",
    "TerminalMarker",
    "Interpretation",
    "parse_inner_event",
    "decode_chunk_payload",
    "interpret",
    "encode_chunk",
    "text_delta_chunk",
    "exception_frame",
]
