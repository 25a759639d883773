"""
Message DTO used across providers.

Defines the immutable `Message` dataclass, the `Role` literal, and helpers to
normalize the looser role vocabulary used by chat history stores
(``prompt``/``response``) into provider roles.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Literal, Mapping, Optional, Union

Role = Literal["system", "user", "assistant"]

_ROLE_ALIASES = {
    "system": "system",
    "user": "user",
    "prompt": "user",
    "assistant": "assistant",
    "response": "assistant",
}


def normalize_role(raw: Optional[str]) -> Optional[Role]:
    """Map an external role name to a provider role, or ``None`` if unknown."""
    if not raw:
        return None
    return _ROLE_ALIASES.get(str(raw).strip().lower())  # type: ignore[return-value]


@dataclass(frozen=True)
class Message:
    """A single chat message.

    Attributes:
        role: Author role (``"system"``, ``"user"``, or ``"assistant"``).
        content: Plain text content.
    """

    role: Role
    content: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> Optional["Message"]:
        """Build a message from a history row.

        The role is read from ``role`` and falls back to ``type``. Rows with a
        missing or unrecognised role yield ``None``.
        """
        role = normalize_role(data.get("role") or data.get("type"))
        if role is None:
            return None
        content = data.get("content")
        return cls(role=role, content="" if content is None else str(content))

    def to_dict(self) -> dict:
        return {"role": self.role, "content": self.content}


MessageLike = Union[Message, Mapping[str, Any]]


def coerce_messages(items: Iterable[MessageLike]) -> List[Message]:
    """Normalize a mixed sequence of messages/mappings, preserving order.

    Items whose role cannot be resolved are dropped.
    """
    out: List[Message] = []
    for item in items:
        if isinstance(item, Message):
            out.append(item)
            continue
        if isinstance(item, Mapping):
            msg = Message.from_mapping(item)
            if msg is not None:
                out.append(msg)
    return out


__all__ = [
    "Message",
    "MessageLike",
    "Role",
    "normalize_role",
    "coerce_messages",
]
