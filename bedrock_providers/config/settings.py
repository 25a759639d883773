"""Explicit Bedrock settings threaded into the request builder and provider.

External dependencies
---------------------
- Pydantic v2 ``BaseModel`` for validation and ``model_copy`` updates.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..base.errors import ConfigurationError
from .defaults import (
    BEDROCK_DEFAULT_MODEL,
    BEDROCK_DEFAULT_REGION,
    BEDROCK_DEFAULT_TITLE_MODEL,
    BEDROCK_ENDPOINT_TEMPLATE,
)


class BedrockSettings(BaseModel):
    """Credentials, region, model ids and endpoint for AWS Bedrock.

    Attributes
    ----------
    region:
        AWS region; also part of the SigV4 credential scope.
    access_key_id / secret_access_key / session_token:
        Long-term (or temporary, with session token) AWS credentials.
    model:
        Model id used for streaming chat.
    title_model:
        Cheaper model id used for title generation.
    endpoint_url:
        Optional runtime endpoint override (VPC endpoints, local proxies).
    """

    model_config = ConfigDict(frozen=True)

    region: str = BEDROCK_DEFAULT_REGION
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    session_token: Optional[str] = None
    model: str = BEDROCK_DEFAULT_MODEL
    title_model: str = BEDROCK_DEFAULT_TITLE_MODEL
    endpoint_url: Optional[str] = None

    @field_validator("region", "model", "title_model")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @classmethod
    def from_config(cls, overrides: Optional[Dict[str, Any]] = None) -> "BedrockSettings":
        """Build settings from the merged provider configuration."""
        from . import get_provider_config

        cfg = get_provider_config("bedrock", overrides)
        known = {k: v for k, v in cfg.items() if k in cls.model_fields}
        return cls(**known)

    def base_url(self) -> str:
        """Return the runtime endpoint without a trailing slash."""
        if self.endpoint_url:
            return self.endpoint_url.rstrip("/")
        return BEDROCK_ENDPOINT_TEMPLATE.format(region=self.region)

    def require_credentials(self) -> None:
        """Raise :class:`ConfigurationError` when access keys are missing."""
        missing = [
            name
            for name in ("access_key_id", "secret_access_key")
            if not (getattr(self, name) or "").strip()
        ]
        if missing:
            raise ConfigurationError(
                message=f"missing AWS credentials: {', '.join(missing)}",
                provider="bedrock",
                model=self.model,
            )


__all__ = ["BedrockSettings"]
