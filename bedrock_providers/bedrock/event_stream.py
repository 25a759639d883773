"""AWS event-stream frame decoding.

Purpose:
    Parse the binary ``application/vnd.amazon.eventstream`` framing used by
    ``invoke-with-response-stream`` responses, one frame at a time, from a
    :class:`~bedrock_providers.bedrock.transport.ByteCursor`.

Frame layout (all integers big-endian)::

    [u32 total_length][u32 headers_length][u32 prelude_crc]
    [headers: headers_length bytes]
    [payload: total_length - headers_length - 16 bytes]
    [u32 message_crc]

Header record layout::

    [u8 name_len][name][u8 value_type][u16 value_len][value]

Every header value is treated as a length-prefixed byte string; the type byte
is preserved but not interpreted.

Checksums are skipped by default. ``validate_checksums=True`` verifies both
CRC-32 values and raises :class:`FrameDecodeError` on mismatch.
"""

from __future__ import annotations

import struct
import zlib
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, Mapping, Optional, Tuple, Union

from ..base.errors import FrameDecodeError

PRELUDE_LENGTH = 8
CHECKSUM_LENGTH = 4
MIN_FRAME_LENGTH = PRELUDE_LENGTH + 2 * CHECKSUM_LENGTH
MAX_HEADERS_LENGTH = 128 * 1024
MAX_PAYLOAD_LENGTH = 24 * 1024 * 1024
STRING_HEADER_TYPE = 7

_PRELUDE = struct.Struct(">II")
_U32 = struct.Struct(">I")
_U16 = struct.Struct(">H")


class FrameHeaders(Mapping[str, bytes]):
    """Immutable header-name to raw-value mapping for one frame.

    Each frame owns a fresh instance; nothing is shared between frames.
    """

    __slots__ = ("_items", "_types")

    def __init__(
        self,
        items: Union[Mapping[str, bytes], Iterable[Tuple[str, bytes]]] = (),
        types: Optional[Mapping[str, int]] = None,
    ) -> None:
        self._items: Dict[str, bytes] = dict(items)
        self._types: Dict[str, int] = dict(types or {})

    def __getitem__(self, name: str) -> bytes:
        return self._items[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"FrameHeaders({self._items!r})"

    def value_type(self, name: str) -> Optional[int]:
        return self._types.get(name)

    def get_str(self, name: str, default: Optional[str] = None) -> Optional[str]:
        raw = self._items.get(name)
        if raw is None:
            return default
        return raw.decode("utf-8", errors="replace")

    @property
    def event_type(self) -> Optional[str]:
        return self.get_str(":event-type")

    @property
    def message_type(self) -> Optional[str]:
        return self.get_str(":message-type")

    @property
    def exception_type(self) -> Optional[str]:
        return self.get_str(":exception-type")

    @property
    def content_type(self) -> Optional[str]:
        return self.get_str(":content-type")


@dataclass(frozen=True)
class Frame:
    """One decoded event-stream message."""

    total_length: int
    headers: FrameHeaders = field(default_factory=FrameHeaders)
    payload: bytes = b""


def payload_length_for(total_length: int, headers_length: int) -> int:
    """Return the payload size implied by a prelude, validating bounds."""
    payload_length = total_length - MIN_FRAME_LENGTH - headers_length
    if payload_length < 0:
        raise FrameDecodeError(
            message=(
                f"negative payload length {payload_length} "
                f"(total_length={total_length}, headers_length={headers_length})"
            )
        )
    if headers_length > MAX_HEADERS_LENGTH:
        raise FrameDecodeError(message=f"headers length {headers_length} exceeds {MAX_HEADERS_LENGTH}")
    if payload_length > MAX_PAYLOAD_LENGTH:
        raise FrameDecodeError(message=f"payload length {payload_length} exceeds {MAX_PAYLOAD_LENGTH}")
    return payload_length


def parse_headers(buf: bytes) -> FrameHeaders:
    """Parse a complete header block.

    Raises:
        FrameDecodeError: a record runs past the end of ``buf`` or a name
            is not UTF-8.
    """
    items: Dict[str, bytes] = {}
    types: Dict[str, int] = {}
    pos = 0
    end = len(buf)
    while pos < end:
        name_len = buf[pos]
        pos += 1
        # name + type byte + u16 value length
        if pos + name_len + 1 + _U16.size > end:
            raise FrameDecodeError(message=f"truncated header record at offset {pos - 1}")
        try:
            name = bytes(buf[pos : pos + name_len]).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FrameDecodeError(message=f"header name at offset {pos - 1} is not UTF-8") from exc
        pos += name_len
        value_type = buf[pos]
        pos += 1
        (value_len,) = _U16.unpack_from(buf, pos)
        pos += _U16.size
        if pos + value_len > end:
            raise FrameDecodeError(message=f"header {name!r} value runs past header block")
        items[name] = bytes(buf[pos : pos + value_len])
        types[name] = value_type
        pos += value_len
    return FrameHeaders(items, types)


class FrameDecoder:
    """Pull frames from a byte cursor on demand.

    ``next_frame`` reads exactly one frame's bytes; fewer than eight bytes
    left at a frame boundary is a clean end of stream. Any shortfall inside a
    frame raises :class:`FrameDecodeError`.
    """

    def __init__(self, cursor, *, validate_checksums: bool = False) -> None:
        self._cursor = cursor
        self._validate = validate_checksums
        self.frames_decoded = 0

    @property
    def cursor(self):
        return self._cursor

    def next_frame(self) -> Optional[Frame]:
        prelude = self._cursor.read(PRELUDE_LENGTH)
        if len(prelude) < PRELUDE_LENGTH:
            return None
        total_length, headers_length = _PRELUDE.unpack(prelude)
        prelude_crc = self._cursor.read_exact(CHECKSUM_LENGTH, what="prelude checksum")
        payload_length = payload_length_for(total_length, headers_length)
        header_bytes = self._cursor.read_exact(headers_length, what="headers") if headers_length else b""
        payload = self._cursor.read_exact(payload_length, what="payload") if payload_length else b""
        message_crc = self._cursor.read_exact(CHECKSUM_LENGTH, what="message checksum")
        if self._validate:
            self._check_crc(prelude, prelude_crc, header_bytes, payload, message_crc)
        self.frames_decoded += 1
        return Frame(
            total_length=total_length,
            headers=parse_headers(header_bytes),
            payload=payload,
        )

    @staticmethod
    def _check_crc(prelude: bytes, prelude_crc: bytes, headers: bytes, payload: bytes, message_crc: bytes) -> None:
        (expected,) = _U32.unpack(prelude_crc)
        actual = zlib.crc32(prelude) & 0xFFFFFFFF
        if actual != expected:
            raise FrameDecodeError(message=f"prelude checksum mismatch: {actual:#010x} != {expected:#010x}")
        running = zlib.crc32(prelude + prelude_crc)
        running = zlib.crc32(headers, running)
        running = zlib.crc32(payload, running) & 0xFFFFFFFF
        (expected,) = _U32.unpack(message_crc)
        if running != expected:
            raise FrameDecodeError(message=f"message checksum mismatch: {running:#010x} != {expected:#010x}")

    def __iter__(self) -> Iterator[Frame]:
        while (frame := self.next_frame()) is not None:
            yield frame


def encode_headers(headers: Mapping[str, Union[str, bytes]]) -> bytes:
    """Encode headers as string-typed records."""
    out = bytearray()
    for name, value in headers.items():
        raw_name = name.encode("utf-8")
        raw_value = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        out.append(len(raw_name))
        out += raw_name
        out.append(STRING_HEADER_TYPE)
        out += _U16.pack(len(raw_value))
        out += raw_value
    return bytes(out)


def encode_frame(headers: Mapping[str, Union[str, bytes]], payload: bytes = b"") -> bytes:
    """Encode one frame with valid CRC-32 checksums.

    Used by the offline mock provider and by tests to build byte streams.
    """
    header_bytes = encode_headers(headers)
    total_length = MIN_FRAME_LENGTH + len(header_bytes) + len(payload)
    prelude = _PRELUDE.pack(total_length, len(header_bytes))
    prelude_crc = _U32.pack(zlib.crc32(prelude) & 0xFFFFFFFF)
    body = prelude + prelude_crc + header_bytes + payload
    return body + _U32.pack(zlib.crc32(body) & 0xFFFFFFFF)


__all__ = [
    "Frame",
    "FrameHeaders",
    "FrameDecoder",
    "parse_headers",
    "payload_length_for",
    "encode_headers",
    "encode_frame",
    "MIN_FRAME_LENGTH",
]
