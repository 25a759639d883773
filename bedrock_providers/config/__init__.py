"""Unified configuration layer for providers.

Sources are merged in a predictable order (later wins):

1. Built-in defaults (``config.defaults``)
2. Optional external config file (JSON or YAML) named by ``PROVIDERS_CONFIG_FILE``
3. Environment variables (see ``config.env.BEDROCK_ENV``)
4. In-code overrides passed to :func:`get_provider_config`

A ``.env`` file (``DOTENV_FILE``, default ``./.env``) is loaded once before
the environment is read. External config file example::

    bedrock:
      region: eu-west-1
      model: eu.anthropic.claude-sonnet-4-20250514-v1:0
    default_provider: bedrock

Configuration is read at the boundary only (factory / CLI). Provider
constructors receive an explicit :class:`BedrockSettings` instead of reading
ambient state.
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    BEDROCK_DEFAULT_MODEL,
    BEDROCK_DEFAULT_REGION,
    BEDROCK_DEFAULT_TITLE_MODEL,
    DEFAULT_PROVIDER,
)
from .env import BEDROCK_ENV, DEFAULT_PROVIDER_ENV, is_placeholder, resolve_env
from .settings import BedrockSettings

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "bedrock": {
        "region": BEDROCK_DEFAULT_REGION,
        "model": BEDROCK_DEFAULT_MODEL,
        "title_model": BEDROCK_DEFAULT_TITLE_MODEL,
    },
    "mock": {"model": "mock-model"},
}

_FILE_CACHE: Optional[Dict[str, Any]] = None
_DOTENV_LOADED = False


def _load_dotenv_once() -> None:
    """Parse ``KEY=VALUE`` lines from the dotenv file into ``os.environ``.

    Existing variables win unless they hold a placeholder value.
    """
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    path = os.getenv("DOTENV_FILE", ".env")
    if not os.path.isfile(path):
        _DOTENV_LOADED = True
        return
    try:
        with open(path, "r", encoding="utf-8") as fh:
            for line in fh:
                line = line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                k, v = line.split("=", 1)
                k = k.strip()
                v = v.strip().strip('"').strip("'")
                if k and (k not in os.environ or is_placeholder(os.environ.get(k))):
                    os.environ[k] = v
    finally:
        _DOTENV_LOADED = True


def _load_external_config() -> Dict[str, Any]:
    global _FILE_CACHE
    if _FILE_CACHE is not None:
        return _FILE_CACHE
    path = os.getenv("PROVIDERS_CONFIG_FILE")
    data: Any = {}
    if path and Path(path).exists():
        text = Path(path).read_text(encoding="utf-8")
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            try:
                data = yaml.safe_load(text) or {}
            except yaml.YAMLError:
                data = {}
    _FILE_CACHE = data if isinstance(data, dict) else {}
    return _FILE_CACHE


def reset_config_cache() -> None:
    """Forget the cached external file and dotenv state (tests, reloads)."""
    global _FILE_CACHE, _DOTENV_LOADED
    _FILE_CACHE = None
    _DOTENV_LOADED = False


def _env_overrides(provider: str) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    fields = BEDROCK_ENV if provider == "bedrock" else {}
    for field in fields:
        val, _ = resolve_env(provider, field)
        if val is not None:
            out[field] = val
    return out


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Return merged configuration for a provider.

    Merge order (later wins): defaults -> external config -> env vars -> overrides.
    ``None`` values in ``overrides`` are ignored.
    """
    _load_dotenv_once()
    name = (provider or "").lower().strip()
    cfg: Dict[str, Any] = {}
    cfg |= DEFAULTS.get(name, {})
    file_cfg = _load_external_config().get(name)
    if isinstance(file_cfg, dict):
        cfg |= file_cfg
    cfg |= _env_overrides(name)
    if overrides:
        cfg |= {k: v for k, v in overrides.items() if v is not None}
    return cfg


def default_provider_name() -> str:
    """Return the configured default provider (env > config file > built-in)."""
    _load_dotenv_once()
    if env_val := os.getenv(DEFAULT_PROVIDER_ENV):
        return env_val.strip().lower()
    file_val = _load_external_config().get("default_provider")
    if isinstance(file_val, str) and file_val.strip():
        return file_val.strip().lower()
    return DEFAULT_PROVIDER


def get_model(provider: str) -> Optional[str]:
    return get_provider_config(provider).get("model")


__all__ = [
    "get_provider_config",
    "default_provider_name",
    "get_model",
    "reset_config_cache",
    "BedrockSettings",
    "DEFAULTS",
]
