"""Bedrock request building and SigV4 signing.

Purpose:
    Turn chat history plus sampling settings into an Anthropic-on-Bedrock
    invocation payload, then into a ready-to-send, signed HTTP request.

External dependencies:
    - ``botocore`` for AWS Signature Version 4 (``SigV4Auth``). Only the
      signer is used; transport goes through ``httpx``.

Side effects:
    None apart from reading the wall clock inside the signature. A signed
    request is only valid for a short window and must not be reused across
    calls. Expired signatures are rejected by the endpoint, not checked here.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote

from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials

from ..base.errors import ConfigurationError
from ..base.models import Message, MessageLike, SamplingConfig, coerce_messages
from ..config.defaults import (
    ANTHROPIC_BEDROCK_VERSION,
    BEDROCK_SIGNING_SERVICE,
    BEDROCK_STREAM_ACTION,
)
from ..config.settings import BedrockSettings


@dataclass(frozen=True)
class InvocationPayload:
    """Model invocation body; built once per call and never mutated."""

    system_prompt: Optional[str]
    messages: Tuple[Message, ...]
    max_tokens: int
    temperature: float

    def to_body(self) -> Dict[str, Any]:
        """Return the Anthropic messages-on-Bedrock request document."""
        body: Dict[str, Any] = {
            "anthropic_version": ANTHROPIC_BEDROCK_VERSION,
            "max_tokens": self.max_tokens,
            "messages": [m.to_dict() for m in self.messages],
            "temperature": self.temperature,
        }
        if self.system_prompt:
            body["system"] = self.system_prompt
        return body

    def to_json(self) -> bytes:
        return json.dumps(self.to_body(), ensure_ascii=False).encode("utf-8")


@dataclass(frozen=True)
class SignedRequest:
    """A signed HTTP request handed to the transport exactly once."""

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


def extract_system_prompt(messages: Iterable[Message]) -> Optional[str]:
    """Return the content of the first system message, if any."""
    for m in messages:
        if m.role == "system":
            return m.content
    return None


def conversation_messages(messages: Iterable[Message]) -> List[Message]:
    """Return the non-system messages in their original order."""
    return [m for m in messages if m.role != "system"]


def build_payload(
    messages: Iterable[MessageLike],
    sampling: Optional[SamplingConfig] = None,
) -> InvocationPayload:
    """Build an :class:`InvocationPayload` from chat history.

    At most one system message is lifted into ``system_prompt``; any further
    system messages are dropped. Roles are normalized (``prompt`` -> ``user``,
    ``response`` -> ``assistant``) and order is preserved.
    """
    sampling = sampling or SamplingConfig()
    normalized = coerce_messages(messages)
    return InvocationPayload(
        system_prompt=extract_system_prompt(normalized),
        messages=tuple(conversation_messages(normalized)),
        max_tokens=sampling.max_tokens,
        temperature=sampling.temperature,
    )


def build_url(settings: BedrockSettings, model: str, action: str = BEDROCK_STREAM_ACTION) -> str:
    """Return the runtime URL for ``model``/``action``.

    Model ids contain ``:`` and may be ARNs containing ``/``; the whole id is
    percent-encoded into a single path segment.
    """
    if not model or not model.strip():
        raise ConfigurationError(message="model id must not be empty", provider="bedrock")
    return f"{settings.base_url()}/model/{quote(model.strip(), safe='')}/{action}"


def sign_request(
    method: str,
    url: str,
    body: bytes,
    settings: BedrockSettings,
    *,
    headers: Optional[Mapping[str, str]] = None,
) -> SignedRequest:
    """Sign ``method``/``url``/``headers``/``body`` with SigV4.

    The credential scope is ``<date>/<region>/bedrock/aws4_request``.

    Raises:
        ConfigurationError: access key id or secret are missing.
    """
    settings.require_credentials()
    credentials = Credentials(
        settings.access_key_id,
        settings.secret_access_key,
        settings.session_token or None,
    )
    aws_request = AWSRequest(method=method, url=url, data=body, headers=dict(headers or {}))
    SigV4Auth(credentials, BEDROCK_SIGNING_SERVICE, settings.region).add_auth(aws_request)
    return SignedRequest(
        method=method,
        url=url,
        headers={k: v for k, v in aws_request.headers.items()},
        body=body,
    )


def build_signed_request(
    payload: InvocationPayload,
    *,
    settings: BedrockSettings,
    model: str,
    action: str = BEDROCK_STREAM_ACTION,
) -> SignedRequest:
    """Serialize ``payload`` and return a signed POST for ``model``/``action``."""
    return sign_request(
        "POST",
        build_url(settings, model, action),
        payload.to_json(),
        settings,
        headers={
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
    )


__all__ = [
    "InvocationPayload",
    "SignedRequest",
    "extract_system_prompt",
    "conversation_messages",
    "build_payload",
    "build_url",
    "sign_request",
    "build_signed_request",
]
