"""
Providers Base Package

Provider-agnostic building blocks shared by the concrete providers:

- Errors: ``ProviderError`` taxonomy and exception classification
- Models: chat messages and sampling settings
- Interfaces: the ``LLMProvider`` contract and capability Protocols
- Streaming: the pull-driven adapter loop, ``TextStream`` and outcomes
- Cancellation and timeouts

The factory is imported from ``bedrock_providers.base.factory`` directly; it
is not re-exported here so that configuration modules can depend on
``base.errors`` without an import cycle.
"""

from .errors import (
    ConfigurationError,
    ErrorCode,
    FrameDecodeError,
    ProviderError,
    RemoteStreamError,
    TransportError,
)
from .models import Message, Role, SamplingConfig

__all__ = [
    # Errors
    "ErrorCode",
    "ProviderError",
    "ConfigurationError",
    "TransportError",
    "FrameDecodeError",
    "RemoteStreamError",
    # Models
    "Role",
    "Message",
    "SamplingConfig",
]
