"""Provider Factory utilities.

Purpose
-------
Create provider instances implementing ``LLMProvider`` from a canonical name.
Provider modules are imported lazily with ``importlib`` so importing the
factory has no side effects.

Each provider class exposes ``from_config(**overrides)``, which resolves its
settings through ``bedrock_providers.config`` before construction.

Failure modes
-------------
- Unknown names raise :class:`UnknownProviderError` (a
  :class:`~bedrock_providers.base.errors.ConfigurationError`) before any I/O.
- Import failures and invalid constructor arguments raise the same error with
  an actionable message.
- Provider errors raised during construction propagate unchanged.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple, Type

from .errors import ConfigurationError, ProviderError


class UnknownProviderError(ConfigurationError):
    """Raised when a provider cannot be resolved or initialized."""


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Delegate to :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


class ProviderFactory:
    """Create providers based on a canonical name (e.g., ``"bedrock"``)."""

    # Map canonical provider names to import paths and class names
    _PROVIDERS: Dict[str, Dict[str, str]] = {
        "bedrock": {"module": "bedrock_providers.bedrock.client", "class": "BedrockProvider"},
        "mock": {"module": "bedrock_providers.mock.client", "class": "MockProvider"},
    }

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Create a provider instance.

        Parameters
        ----------
        provider:
            Canonical provider name, case-insensitive.
        **kwargs:
            Overrides forwarded to the provider's ``from_config``.

        Raises
        ------
        UnknownProviderError
            If provider is unknown, its module fails to import, the class is
            missing, or the overrides are invalid.
        """
        name = (provider or "").lower().strip()
        spec = cls._PROVIDERS.get(name)
        if not spec:
            raise UnknownProviderError(
                message=f"Unknown provider '{provider}' (supported: {', '.join(cls.supported())})",
                provider=name or "unknown",
            )

        module_path, class_name = spec["module"], spec["class"]
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                message=f"Failed to import module '{module_path}' for provider '{name}': {exc}",
                provider=name,
            ) from exc

        try:
            klass: Type = getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                message=f"Provider class '{class_name}' not found in '{module_path}'",
                provider=name,
            ) from exc

        try:
            return klass.from_config(**kwargs)
        except ProviderError:
            raise
        except (TypeError, ValueError) as exc:
            raise UnknownProviderError(
                message=f"Invalid arguments for provider '{name}': {exc}",
                provider=name,
            ) from exc

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        """Return the supported canonical provider names in deterministic order."""
        return tuple(cls._PROVIDERS.keys())


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
