from __future__ import annotations

import pytest

import bedrock_providers
from bedrock_providers.base.errors import ConfigurationError
from bedrock_providers.base.factory import ProviderFactory, UnknownProviderError, create_provider
from bedrock_providers.bedrock import BedrockProvider
from bedrock_providers.mock import MockProvider


def test_supported_names_are_stable():
    assert ProviderFactory.supported() == ("bedrock", "mock")  # nosec B101
    assert bedrock_providers.available_providers() == {  # nosec B101
        "bedrock": "Claude (AWS Bedrock)",
        "mock": "Mock (offline)",
    }


def test_create_is_case_insensitive():
    assert isinstance(create_provider("  MOCK "), MockProvider)  # nosec B101
    assert isinstance(ProviderFactory.create("Bedrock"), BedrockProvider)  # nosec B101


def test_unknown_provider_is_configuration_error():
    with pytest.raises(UnknownProviderError) as ei:
        ProviderFactory.create("openai")
    assert isinstance(ei.value, ConfigurationError)  # nosec B101
    assert "supported: bedrock, mock" in ei.value.message  # nosec B101


def test_bad_arguments_are_reported_as_unknown_provider():
    with pytest.raises(UnknownProviderError):
        ProviderFactory.create("bedrock", not_a_setting=1)
    with pytest.raises(UnknownProviderError):
        ProviderFactory.create("bedrock", temperature=3.0)


def test_configuration_errors_propagate_unchanged():
    with pytest.raises(ConfigurationError) as ei:
        ProviderFactory.create("bedrock", model=" ")
    assert not isinstance(ei.value, UnknownProviderError)  # nosec B101


def test_package_create_uses_default_provider(monkeypatch):
    monkeypatch.setenv("LLM_DEFAULT_PROVIDER", "mock")
    assert isinstance(bedrock_providers.create(), MockProvider)  # nosec B101
    monkeypatch.delenv("LLM_DEFAULT_PROVIDER")
    assert isinstance(bedrock_providers.create(), BedrockProvider)  # nosec B101
