"""
Structured provider error exception types.

``ProviderError`` wraps provider-specific exceptions with a normalized
`ErrorCode`. The subclasses below split the streaming failure taxonomy so
callers can tell a bad configuration from a dropped connection, a malformed
frame, or an exception reported by the remote service without inspecting
message strings.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .error_code import ErrorCode


@dataclass
class ProviderError(Exception):
    """Represents a structured provider error with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        provider: Provider key where the error originated (e.g., ``"bedrock"``).
        model: Optional model name associated with the failure.
        retryable: Hint for caller-side retry logic (not authoritative).
        raw: Optional original exception for diagnostics.
    """

    code: ErrorCode
    message: str
    provider: str
    model: Optional[str] = None
    retryable: bool = False
    raw: Optional[Exception] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        """Return a compact string combining provider, model, code, and message."""
        return f"{self.provider}:{self.model or '-'} {self.code.value}: {self.message}"


@dataclass
class ConfigurationError(ProviderError):
    """Unknown provider/model or missing settings; raised before any network I/O."""

    code: ErrorCode = ErrorCode.CONFIGURATION
    message: str = "invalid configuration"
    provider: str = "unknown"


@dataclass
class TransportError(ProviderError):
    """Connection failure, timeout, or non-success HTTP status."""

    status_code: Optional[int] = None


@dataclass
class FrameDecodeError(ProviderError):
    """Malformed or truncated event-stream frame."""

    code: ErrorCode = ErrorCode.DECODE
    message: str = "malformed frame"
    provider: str = "bedrock"


@dataclass
class RemoteStreamError(ProviderError):
    """Exception event reported by the remote service inside the stream."""

    code: ErrorCode = ErrorCode.REMOTE
    message: str = "remote error"
    provider: str = "bedrock"
    error_type: Optional[str] = None


__all__ = [
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "FrameDecodeError",
    "RemoteStreamError",
]
