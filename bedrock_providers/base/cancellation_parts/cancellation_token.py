"""Cooperative cancellation token.

A token is shared between the code that owns a stream and the loop that
drives it. The loop polls :meth:`CancellationToken.raise_if_cancelled` between
frames; cancelling from another thread takes effect at the next poll.
"""

from __future__ import annotations

from threading import Event
from typing import Optional

from .cancelled_error import CancelledError


class CancellationToken:
    """Thread-safe, one-way cancellation flag with an optional reason."""

    def __init__(self) -> None:
        self._event = Event()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:  # noqa: D401 - short form
        """Whether cancellation has been requested."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:  # noqa: D401 - short form
        """Reason supplied by the first ``cancel`` call, if any."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Request cancellation; later calls keep the first reason."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancelledError` once cancellation was requested."""
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return the flag."""
        return self._event.wait(timeout)

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken"]
