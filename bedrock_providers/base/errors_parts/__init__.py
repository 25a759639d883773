"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `bedrock_providers.base.errors` for the stable surface.
"""

from .error_code import ErrorCode
from .provider_error import (
    ConfigurationError,
    FrameDecodeError,
    ProviderError,
    RemoteStreamError,
    TransportError,
)
from .classification import RETRYABLE_CODES, classify_exception, status_to_code

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
