"""Single-class Protocol modules re-exported by ``base.interfaces``."""

from .has_default_model import HasDefaultModel
from .llm_provider import LLMProvider
from .supports_streaming import SupportsStreaming

__all__ = ["HasDefaultModel", "LLMProvider", "SupportsStreaming"]
