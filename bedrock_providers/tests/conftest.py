"""Pytest configuration for the bedrock_providers test suite.

Every test runs with AWS/Bedrock environment variables removed, no dotenv or
external config file, and fresh configuration/HTTP pool caches, so results do
not depend on the developer machine.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from bedrock_providers.base.http import close_all_clients
from bedrock_providers.config import reset_config_cache
from bedrock_providers.config.env import BEDROCK_ENV, DEFAULT_PROVIDER_ENV
from bedrock_providers.config.settings import BedrockSettings


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Strip provider env vars and reset module caches around each test."""
    for names in BEDROCK_ENV.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv(DEFAULT_PROVIDER_ENV, raising=False)
    monkeypatch.delenv("PROVIDERS_CONFIG_FILE", raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "missing.env"))
    reset_config_cache()
    yield
    reset_config_cache()
    close_all_clients()


@pytest.fixture()
def settings() -> BedrockSettings:
    return BedrockSettings(
        region="us-east-1",
        access_key_id="AKIDTESTKEY",
        secret_access_key="test-secret-key",
        model="us.anthropic.claude-sonnet-4-20250514-v1:0",
        title_model="us.anthropic.claude-3-5-haiku-20241022-v1:0",
    )


@pytest.fixture()
def log_records() -> Iterator[List[logging.LogRecord]]:
    """Capture records on the shared ``providers`` logger (it does not propagate)."""
    from bedrock_providers.base.logging import get_logger

    records: List[logging.LogRecord] = []
    handler = logging.Handler(level=logging.DEBUG)
    handler.emit = lambda record: records.append(record)  # type: ignore[method-assign]
    base = get_logger("providers")
    previous = base.level
    base.addHandler(handler)
    base.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        base.removeHandler(handler)
        base.setLevel(previous)
