"""HasDefaultModel Protocol.

Implemented by providers whose model id comes from configuration rather than
from each call.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class HasDefaultModel(Protocol):
    def default_model(self) -> Optional[str]:  # pragma: no cover - protocol
        """Return the configured model id used when none is given explicitly."""
        ...
