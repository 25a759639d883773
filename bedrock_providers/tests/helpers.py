"""Test doubles for the HTTP transport.

``RecordingStream`` is an ``httpx.SyncByteStream`` that counts how many
chunks were pulled and whether it was closed, so tests can observe read-ahead
and connection release through the real ``httpx`` client stack.
"""
from __future__ import annotations

import json
from typing import Dict, Iterator, List, Optional, Sequence

import httpx


class RecordingStream(httpx.SyncByteStream):
    def __init__(self, chunks: Sequence[bytes], *, fail_after: Optional[int] = None) -> None:
        self._chunks = list(chunks)
        self._fail_after = fail_after
        self.pulled = 0
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        for chunk in self._chunks:
            if self._fail_after is not None and self.pulled >= self._fail_after:
                raise httpx.ReadError("connection reset by peer")
            self.pulled += 1
            yield chunk

    def close(self) -> None:
        self.closed = True


class Recorder:
    """MockTransport handler that records requests and replays one response."""

    def __init__(
        self,
        *,
        status: int = 200,
        chunks: Sequence[bytes] = (),
        headers: Optional[Dict[str, str]] = None,
        body: Optional[bytes] = None,
        json_body: Optional[dict] = None,
        fail_after: Optional[int] = None,
        raise_exc: Optional[Exception] = None,
    ) -> None:
        self.status = status
        self.stream = RecordingStream(chunks, fail_after=fail_after)
        self.headers = {"x-amzn-requestid": "req-123", **(headers or {})}
        self.body = body
        self.json_body = json_body
        self.raise_exc = raise_exc
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        if self.raise_exc is not None:
            raise self.raise_exc
        if self.json_body is not None:
            return httpx.Response(self.status, headers=self.headers, content=json.dumps(self.json_body).encode())
        if self.body is not None:
            return httpx.Response(self.status, headers=self.headers, content=self.body)
        return httpx.Response(self.status, headers=self.headers, stream=self.stream)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def split_bytes(data: bytes, size: int) -> List[bytes]:
    return [data[i : i + size] for i in range(0, len(data), size)]


def events_named(records, name: str) -> List[dict]:
    out = []
    for r in records:
        try:
            payload = json.loads(r.getMessage())
        except ValueError:
            continue
        if payload.get("event") == name:
            out.append(payload)
    return out
