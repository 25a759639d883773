"""LLMProvider Protocol (single-class module).

Defines the contract every chat provider exposes to the application.
"""

from __future__ import annotations

from typing import Iterable, Protocol, runtime_checkable

from ..models import MessageLike
from ..streaming import TextStream


@runtime_checkable
class LLMProvider(Protocol):
    """Minimal interface for chat providers.

    Implementations accept chat history as :class:`Message` objects or
    ``{"role"|"type": ..., "content": ...}`` mappings and never leak
    transport or SDK objects upstream.
    """

    @property
    def provider_name(self) -> str:
        """Canonical provider identifier, e.g. ``"bedrock"``."""
        ...

    def stream(self, messages: Iterable[MessageLike]) -> TextStream:
        """Return a lazy text stream; no I/O happens until it is iterated."""
        ...

    def generate_title(self, first_message: str) -> str:
        """Return a short conversation title.

        Never raises for provider failures; a deterministic title derived
        from ``first_message`` is returned instead.
        """
        ...

    def get_name(self) -> str:
        """Provider identifier, as accepted by the factory."""
        ...

    def get_model(self) -> str:
        """Model id used for streaming chat."""
        ...
