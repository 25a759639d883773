"""Helper for deciding whether a provider can stream right now."""
from __future__ import annotations

from typing import Callable, Iterable, Optional

__all__ = ["streaming_supported"]


def streaming_supported(
    *,
    require_credentials: bool,
    credential_getters: Iterable[Callable[[], Optional[str]]] = (),
) -> bool:
    """Return True unless required credentials are missing or blank."""
    if not require_credentials:
        return True
    return all((getter() or "").strip() for getter in credential_getters)
