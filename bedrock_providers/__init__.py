"""bedrock_providers package

Streaming chat against Anthropic models hosted on AWS Bedrock, decoded
straight from the ``application/vnd.amazon.eventstream`` wire format.

Purpose:
    Provide a minimal, stable API for external consumption. Callers obtain a
    provider instance and use it directly (for example,
    ``create("bedrock").stream(messages)``).

Public API (re-exported):
    - Version: ``__version__``
    - Exceptions: :class:`ProviderError` and its subclasses, :class:`ErrorCode`
    - Factory: :func:`create`, :func:`available_providers`, ``ProviderFactory``
    - Interfaces: ``LLMProvider``, ``SupportsStreaming``, ``HasDefaultModel``
"""

from typing import Any, Dict, Optional

from .base.errors import (
    ConfigurationError,
    ErrorCode,
    FrameDecodeError,
    ProviderError,
    RemoteStreamError,
    TransportError,
)
from .base.factory import ProviderFactory, UnknownProviderError
from .base.interfaces import HasDefaultModel, LLMProvider, SupportsStreaming
from .config import default_provider_name
from .config.defaults import PROVIDER_DISPLAY_NAMES

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Exceptions
    "ProviderError",
    "ErrorCode",
    "ConfigurationError",
    "TransportError",
    "FrameDecodeError",
    "RemoteStreamError",
    "UnknownProviderError",
    # Core helpers
    "create",
    "available_providers",
    # Base abstractions
    "ProviderFactory",
    "LLMProvider",
    "SupportsStreaming",
    "HasDefaultModel",
]


def create(provider_name: Optional[str] = None, **kwargs: Any):
    """Instantiate a provider via :class:`ProviderFactory`.

    Parameters
    ----------
    provider_name:
        Canonical provider name (``"bedrock"`` or ``"mock"``). When omitted,
        ``LLM_DEFAULT_PROVIDER`` or the configured default is used.
    **kwargs:
        Settings overrides forwarded to the provider (for example ``model``,
        ``region`` or ``http_client``).

    Raises
    ------
    ConfigurationError
        The provider name is unknown or its settings are invalid. Raised
        before any network I/O.
    """
    name = provider_name or default_provider_name()
    return ProviderFactory.create(name, **kwargs)


def available_providers() -> Dict[str, str]:
    """Return ``{name: display name}`` for every registered provider."""
    return {
        name: PROVIDER_DISPLAY_NAMES.get(name, name)
        for name in ProviderFactory.supported()
    }
