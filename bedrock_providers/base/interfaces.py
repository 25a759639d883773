"""
Provider-agnostic interfaces (Protocols) for the providers layer.

The Protocols live in single-class modules under
``bedrock_providers.base.interfaces_parts``; this module is the stable import
path.
"""

from __future__ import annotations

from .interfaces_parts import HasDefaultModel, LLMProvider, SupportsStreaming

__all__ = [
    "LLMProvider",
    "SupportsStreaming",
    "HasDefaultModel",
]
