"""Terminal outcome of a text stream."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ..errors import ProviderError


@dataclass(frozen=True)
class Completed:
    """The stream reached a clean end; ``full_text`` is every delta joined."""

    full_text: str


@dataclass(frozen=True)
class Failed:
    """The stream ended early; ``partial_text`` is what arrived before it."""

    error: ProviderError
    partial_text: str = ""


StreamOutcome = Union[Completed, Failed]

__all__ = ["Completed", "Failed", "StreamOutcome"]
