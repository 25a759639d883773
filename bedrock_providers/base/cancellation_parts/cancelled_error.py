"""Cancellation error type."""

from __future__ import annotations


class CancelledError(RuntimeError):
    """Raised when a stream observes a cancellation request.

    Kept distinct from :class:`~bedrock_providers.base.errors.ProviderError`
    so the streaming loop can map it to a ``cancelled`` terminal event rather
    than a provider failure.
    """


__all__ = ["CancelledError"]
