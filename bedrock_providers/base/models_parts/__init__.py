"""Models parts package.

`bedrock_providers.base.models` remains the primary stable import path.
"""

from .message import Message, MessageLike, Role, coerce_messages, normalize_role
from .sampling import SamplingConfig

__all__ = [
    "Message",
    "MessageLike",
    "Role",
    "coerce_messages",
    "normalize_role",
    "SamplingConfig",
]
