"""CLI action handlers.

Each handler takes parsed ``argparse`` arguments plus output streams and
returns a process exit code. Configuration errors are reported as one JSON
line on stderr with exit code 2; a failed stream exits with 1 after the
fallback text has been written.
"""

from __future__ import annotations

import argparse
import json
from typing import Any, Dict, List, TextIO

from ... import available_providers, create
from ...base.errors import ConfigurationError
from ..relay import relay_stream, title_or_fallback


def _report_config_error(exc: ConfigurationError, err: TextIO) -> int:
    err.write(json.dumps({"error": exc.code.value, "provider": exc.provider, "message": exc.message}) + "\n")
    return 2


def build_messages(prompt: str, system: str | None = None) -> List[Dict[str, str]]:
    messages: List[Dict[str, str]] = []
    if system:
        messages.append({"role": "system", "content": system})
    messages.append({"role": "user", "content": prompt})
    return messages


def _provider_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    overrides: Dict[str, Any] = {}
    for name in ("model", "max_tokens", "temperature"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    return overrides


def handle_stream(args: argparse.Namespace, out: TextIO, err: TextIO) -> int:
    """Stream a reply to stdout, flushing after every delta."""
    try:
        provider = create(args.provider, **_provider_overrides(args))
    except ConfigurationError as exc:
        return _report_config_error(exc, err)
    result = relay_stream(provider, build_messages(args.prompt, args.system), out.write, out.flush)
    out.write("\n")
    out.flush()
    return 0 if result.ok else 1


def handle_title(args: argparse.Namespace, out: TextIO, err: TextIO) -> int:
    try:
        provider = create(args.provider)
    except ConfigurationError as exc:
        return _report_config_error(exc, err)
    out.write(title_or_fallback(provider, args.prompt) + "\n")
    return 0


def handle_providers(args: argparse.Namespace, out: TextIO, err: TextIO) -> int:
    for name, display in available_providers().items():
        out.write(f"{name}\t{display}\n")
    return 0


__all__ = ["build_messages", "handle_stream", "handle_title", "handle_providers"]
