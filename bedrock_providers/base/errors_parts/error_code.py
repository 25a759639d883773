"""
Normalized provider error codes.

Values are lowercase snake_case and form the ``<code>:`` prefix of the
terminal stream event's ``error`` string and the ``error_code`` log field, so
they are a stable public contract.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Failure category of a provider call."""

    # raised before any network I/O
    CONFIGURATION = "configuration"
    # HTTP status / connection level
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    TRANSIENT = "transient"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"
    UNAVAILABLE = "unavailable"
    # inside the event stream
    DECODE = "decode"
    REMOTE = "remote"
    # consumer side
    CANCELLED = "cancelled"
    INTERNAL = "internal"
    UNKNOWN = "unknown"


__all__ = ["ErrorCode"]
