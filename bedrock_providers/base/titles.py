"""Conversation title helpers shared by providers and the relay."""
from __future__ import annotations

from typing import Any, Mapping

from ..config.defaults import TITLE_MAX_CHARS, TITLE_TRUNCATE_AT, UNTITLED

ELLIPSIS = "..."


def fallback_title(text: str) -> str:
    """Deterministic title used when the model call fails.

    Always the first 47 characters of ``text`` followed by ``"..."``.
    """
    return (text or "")[:TITLE_TRUNCATE_AT] + ELLIPSIS


def clamp_title(title: str) -> str:
    """Trim whitespace and cut titles longer than 50 characters."""
    title = (title or "").strip()
    if len(title) > TITLE_MAX_CHARS:
        return title[:TITLE_TRUNCATE_AT] + ELLIPSIS
    return title


def extract_title_text(body: Mapping[str, Any]) -> str:
    """Return the first text block of a messages response, or ``"Untitled"``."""
    content = body.get("content")
    if isinstance(content, list) and content:
        first = content[0]
        if isinstance(first, Mapping) and isinstance(first.get("text"), str):
            text = first["text"].strip()
            if text:
                return text
    return UNTITLED


__all__ = ["fallback_title", "clamp_title", "extract_title_text", "ELLIPSIS"]
