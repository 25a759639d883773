"""Scripted starters for driving ``BaseStreamingAdapter`` without a network."""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from bedrock_providers.base.cancellation import CancellationToken
from bedrock_providers.base.logging import LogContext, get_logger
from bedrock_providers.base.streaming import BaseStreamingAdapter


@dataclass
class Script:
    chunks: List[Optional[str]] = field(default_factory=list)
    fail_on_open: Optional[Exception] = None
    fail_at: Optional[int] = None
    fail_with: Optional[Exception] = None
    opened: bool = False
    closed: bool = False
    pulled: int = 0

    @contextmanager
    def starter(self) -> Iterator[Iterator[Optional[str]]]:
        if self.fail_on_open is not None:
            raise self.fail_on_open
        self.opened = True
        try:
            yield self._iter()
        finally:
            self.closed = True

    def _iter(self) -> Iterator[Optional[str]]:
        for i, chunk in enumerate(self.chunks):
            if self.fail_at is not None and i == self.fail_at:
                raise self.fail_with or RuntimeError("scripted failure")
            self.pulled += 1
            yield chunk


def make_adapter(script: Script, token: Optional[CancellationToken] = None) -> BaseStreamingAdapter:
    return BaseStreamingAdapter(
        ctx=LogContext(provider="scripted", model="scripted-model"),
        provider_name="scripted",
        model="scripted-model",
        starter=script.starter,
        translator=lambda chunk: chunk,
        logger=get_logger("providers.scripted"),
        cancellation_token=token,
    )
