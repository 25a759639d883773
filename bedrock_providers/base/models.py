"""
Provider-agnostic domain models public surface.

Re-exports the one-class-per-file implementations under
``bedrock_providers.base.models_parts``.
"""

from .models_parts.message import Message, MessageLike, Role, coerce_messages, normalize_role
from .models_parts.sampling import SamplingConfig

__all__ = [
    "Message",
    "MessageLike",
    "Role",
    "coerce_messages",
    "normalize_role",
    "SamplingConfig",
]
