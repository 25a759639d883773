"""bedrock_providers.config.env
============================

Environment variable names recognised by the configuration layer and a small
placeholder detector. Helpers never raise on unset variables; callers decide
how to proceed.
"""

from __future__ import annotations

import os
from typing import Dict, Iterable, Optional, Tuple

# Config field -> ordered env var candidates (canonical first)
BEDROCK_ENV: Dict[str, Tuple[str, ...]] = {
    "access_key_id": ("AWS_ACCESS_KEY_ID",),
    "secret_access_key": ("AWS_SECRET_ACCESS_KEY",),
    "session_token": ("AWS_SESSION_TOKEN",),
    "region": ("AWS_BEDROCK_REGION", "AWS_DEFAULT_REGION", "AWS_REGION"),
    "model": ("AWS_BEDROCK_DEFAULT_MODEL", "BEDROCK_MODEL"),
    "title_model": ("AWS_BEDROCK_TITLE_MODEL",),
    "endpoint_url": ("AWS_BEDROCK_ENDPOINT_URL",),
}

DEFAULT_PROVIDER_ENV = "LLM_DEFAULT_PROVIDER"


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if the value looks like a placeholder/test token.

    Heuristics: contains 'placeholder', 'changeme', 'example', or starts
    with 'test_' (case-insensitive, surrounding spaces ignored).
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return (
        "placeholder" in v
        or "changeme" in v
        or "example" in v
        or v.startswith("test_")
    )


def get_env_var_candidates(provider: str, field: str) -> Iterable[str]:
    """Yield env var names for ``provider``/``field`` in priority order."""
    if (provider or "").lower() != "bedrock":
        return
    yield from BEDROCK_ENV.get(field, ())


def resolve_env(provider: str, field: str) -> Tuple[Optional[str], Optional[str]]:
    """Return ``(value, env_var_used)`` for the first non-empty candidate."""
    for name in get_env_var_candidates(provider, field):
        if val := os.environ.get(name):
            return val, name
    return None, None


__all__ = [
    "BEDROCK_ENV",
    "DEFAULT_PROVIDER_ENV",
    "is_placeholder",
    "get_env_var_candidates",
    "resolve_env",
]
