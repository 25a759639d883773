"""Cooperative cancellation primitives.

``CancellationToken`` signals a running stream to stop at its next frame
boundary; ``CancelledError`` is what the stream raises when it notices.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
