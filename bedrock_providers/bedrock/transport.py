"""Chunked transport reader over an ``httpx`` streaming response.

Purpose:
    Issue a signed request with the body left unread, and expose the body as
    a forward-only :class:`ByteCursor` that pulls network chunks only when a
    caller asks for more bytes than it already holds.

External dependencies:
    - ``httpx`` (``Client.stream`` / ``Response.iter_bytes``).

Failure modes:
    - Connect/read errors and timeouts become :class:`TransportError`.
    - A non-2xx status becomes :class:`TransportError` before any body byte
      is handed out; the (small, non-streamed) error body supplies the
      message.

Resource handling:
    :func:`open_cursor` is a context manager. The response is closed on every
    exit path: exhaustion, error, and abandonment of an enclosing generator.
"""

from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, Optional

import httpx

from ..base.errors import (
    ErrorCode,
    FrameDecodeError,
    ProviderError,
    RETRYABLE_CODES,
    TransportError,
    classify_exception,
    status_to_code,
)
from .request_builder import SignedRequest

REQUEST_ID_HEADER = "x-amzn-requestid"
ERROR_TYPE_HEADER = "x-amzn-errortype"


class ByteCursor:
    """Forward-only reader over an iterator of byte chunks.

    The cursor holds at most the unread tail of the last pulled chunk; it
    never reads ahead of what a caller requested beyond that one chunk.
    """

    def __init__(
        self,
        chunks: Iterable[bytes],
        *,
        close: Optional[Callable[[], None]] = None,
        provider: str = "bedrock",
        model: Optional[str] = None,
        request_id: Optional[str] = None,
    ) -> None:
        self._chunks = iter(chunks)
        self._close_cb = close
        self._buffer = bytearray()
        self._eof = False
        self._closed = False
        self._provider = provider
        self._model = model
        self.request_id = request_id
        self.bytes_read = 0
        self.chunks_pulled = 0

    @property
    def buffered(self) -> int:
        """Bytes pulled from the network but not yet consumed."""
        return len(self._buffer)

    @property
    def at_eof(self) -> bool:
        return (self._eof or self._closed) and not self._buffer

    @property
    def closed(self) -> bool:
        return self._closed

    def _pull(self) -> bool:
        """Append the next upstream chunk; return False at end of stream."""
        if self._eof or self._closed:
            return False
        try:
            chunk = next(self._chunks)
        except StopIteration:
            self._eof = True
            return False
        except httpx.HTTPError as exc:
            self._eof = True
            code = classify_exception(exc)
            raise TransportError(
                code=code,
                message=f"stream read failed: {exc}",
                provider=self._provider,
                model=self._model,
                retryable=code in RETRYABLE_CODES,
                raw=exc,
            ) from exc
        self.chunks_pulled += 1
        self._buffer += chunk
        return True

    def read(self, n: int) -> bytes:
        """Return ``n`` bytes, or fewer only when the stream has ended."""
        if n <= 0:
            return b""
        while len(self._buffer) < n and self._pull():
            pass
        out = bytes(self._buffer[:n])
        del self._buffer[:n]
        self.bytes_read += len(out)
        return out

    def read_exact(self, n: int, *, what: str = "bytes") -> bytes:
        """Return exactly ``n`` bytes or raise :class:`FrameDecodeError`."""
        data = self.read(n)
        if len(data) != n:
            raise FrameDecodeError(
                message=f"stream ended inside frame: expected {n} bytes of {what}, got {len(data)}",
                provider=self._provider,
                model=self._model,
            )
        return data

    def close(self) -> None:
        """Release the underlying connection; safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._buffer.clear()
        if self._close_cb is not None:
            self._close_cb()


def _error_message(response: httpx.Response) -> str:
    """Best-effort message from a small JSON error body."""
    try:
        response.read()
        data: Any = response.json()
    except (httpx.HTTPError, ValueError):
        return f"HTTP {response.status_code}"
    if isinstance(data, dict):
        for key in ("message", "Message"):
            if isinstance(data.get(key), str):
                return data[key]
    return f"HTTP {response.status_code}"


def _status_error(response: httpx.Response, *, provider: str, model: Optional[str]) -> TransportError:
    code = status_to_code(response.status_code)
    error_type = response.headers.get(ERROR_TYPE_HEADER, "").split(":", 1)[0]
    message = _error_message(response)
    if error_type:
        message = f"{error_type}: {message}"
    return TransportError(
        code=code,
        message=message,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        status_code=response.status_code,
    )


def _wrap_http_error(exc: httpx.HTTPError, *, provider: str, model: Optional[str]) -> TransportError:
    code = classify_exception(exc)
    return TransportError(
        code=code,
        message=str(exc) or exc.__class__.__name__,
        provider=provider,
        model=model,
        retryable=code in RETRYABLE_CODES,
        raw=exc,
    )


@contextmanager
def open_cursor(
    client: httpx.Client,
    request: SignedRequest,
    *,
    provider: str = "bedrock",
    model: Optional[str] = None,
) -> Iterator[ByteCursor]:
    """Send ``request`` in streaming mode and yield a :class:`ByteCursor`.

    Raises:
        TransportError: the connection failed or the status is not 2xx.
    """
    try:
        stream_cm = client.stream(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.body,
        )
        response = stream_cm.__enter__()
    except httpx.HTTPError as exc:
        raise _wrap_http_error(exc, provider=provider, model=model) from exc
    cursor: Optional[ByteCursor] = None
    try:
        if not response.is_success:
            raise _status_error(response, provider=provider, model=model)
        cursor = ByteCursor(
            response.iter_bytes(),
            close=response.close,
            provider=provider,
            model=model,
            request_id=response.headers.get(REQUEST_ID_HEADER),
        )
        yield cursor
    finally:
        if cursor is not None:
            cursor.close()
        stream_cm.__exit__(None, None, None)


def post_json(
    client: httpx.Client,
    request: SignedRequest,
    *,
    provider: str = "bedrock",
    model: Optional[str] = None,
) -> Dict[str, Any]:
    """Send a non-streaming signed request and decode its JSON body.

    Raises:
        TransportError: connection failure or non-2xx status.
        ProviderError: the body is not a JSON object (``VALIDATION``).
    """
    try:
        response = client.request(
            request.method,
            request.url,
            headers=dict(request.headers),
            content=request.body,
        )
    except httpx.HTTPError as exc:
        raise _wrap_http_error(exc, provider=provider, model=model) from exc
    if not response.is_success:
        raise _status_error(response, provider=provider, model=model)
    try:
        data = response.json()
    except json.JSONDecodeError as exc:
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message="response body is not valid JSON",
            provider=provider,
            model=model,
            raw=exc,
        ) from exc
    if not isinstance(data, dict):
        raise ProviderError(
            code=ErrorCode.VALIDATION,
            message="response body is not a JSON object",
            provider=provider,
            model=model,
        )
    return data


__all__ = [
    "ByteCursor",
    "open_cursor",
    "post_json",
    "REQUEST_ID_HEADER",
]
