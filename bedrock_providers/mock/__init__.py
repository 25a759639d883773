"""Offline mock provider producing real event-stream frames."""

from .client import MockProvider

__all__ = ["MockProvider"]
