"""Sampling parameters applied to a model invocation."""
from __future__ import annotations

from dataclasses import dataclass

from ...config.defaults import DEFAULT_MAX_TOKENS, DEFAULT_TEMPERATURE


@dataclass(frozen=True)
class SamplingConfig:
    """Generation controls copied into every invocation payload."""

    max_tokens: int = DEFAULT_MAX_TOKENS
    temperature: float = DEFAULT_TEMPERATURE

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ValueError(f"temperature must be within [0, 1], got {self.temperature}")


__all__ = ["SamplingConfig"]
