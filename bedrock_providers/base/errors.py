"""Unified provider error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``bedrock_providers.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode
from .errors_parts.provider_error import (
    ConfigurationError,
    FrameDecodeError,
    ProviderError,
    RemoteStreamError,
    TransportError,
)
from .errors_parts.classification import RETRYABLE_CODES, classify_exception, status_to_code

__all__ = [
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "FrameDecodeError",
    "RemoteStreamError",
    "classify_exception",
    "status_to_code",
    "RETRYABLE_CODES",
]
