from __future__ import annotations

import json

from bedrock_providers.config import default_provider_name, get_provider_config, reset_config_cache
from bedrock_providers.config.env import is_placeholder, resolve_env
from bedrock_providers.config.settings import BedrockSettings


def test_defaults_only():
    cfg = get_provider_config("bedrock")
    assert cfg["region"] == "us-east-1"  # nosec B101
    assert cfg["model"].startswith("us.anthropic.")  # nosec B101
    assert "access_key_id" not in cfg  # nosec B101
    assert default_provider_name() == "bedrock"  # nosec B101


def test_merge_order_file_env_overrides(monkeypatch, tmp_path):
    path = tmp_path / "providers.json"
    path.write_text(json.dumps({"bedrock": {"region": "ap-south-1", "model": "file-model"}, "default_provider": "mock"}))
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_provider_config("bedrock")["region"] == "ap-south-1"  # nosec B101
    assert default_provider_name() == "mock"  # nosec B101

    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-central-1")
    assert get_provider_config("bedrock")["region"] == "eu-central-1"  # nosec B101
    cfg = get_provider_config("bedrock", {"region": "us-west-2", "model": None})
    assert cfg["region"] == "us-west-2" and cfg["model"] == "file-model"  # nosec B101


def test_yaml_config_file(monkeypatch, tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text("bedrock:\n  title_model: yaml-title\n")
    monkeypatch.setenv("PROVIDERS_CONFIG_FILE", str(path))
    reset_config_cache()
    assert get_provider_config("bedrock")["title_model"] == "yaml-title"  # nosec B101


def test_region_env_priority(monkeypatch):
    monkeypatch.setenv("AWS_REGION", "r3")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "r2")
    assert resolve_env("bedrock", "region") == ("r2", "AWS_DEFAULT_REGION")  # nosec B101
    monkeypatch.setenv("AWS_BEDROCK_REGION", "r1")
    assert resolve_env("bedrock", "region") == ("r1", "AWS_BEDROCK_REGION")  # nosec B101
    assert resolve_env("mock", "region") == (None, None)  # nosec B101


def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    env = tmp_path / ".env"
    env.write_text("# creds\nAWS_ACCESS_KEY_ID=AKIDDOTENV\nAWS_SECRET_ACCESS_KEY='s3cret'\n")
    monkeypatch.setenv("DOTENV_FILE", str(env))
    # placeholder values in the real environment are replaced by the file
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "placeholder")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "placeholder")
    reset_config_cache()
    settings = BedrockSettings.from_config()
    assert settings.access_key_id == "AKIDDOTENV" and settings.secret_access_key == "s3cret"  # nosec B101


def test_placeholder_heuristics():
    assert is_placeholder("placeholder-value")  # nosec B101
    assert is_placeholder("ChangeMe123")  # nosec B101
    assert is_placeholder("test_token")  # nosec B101
    assert not is_placeholder("AKIDREAL")  # nosec B101
    assert not is_placeholder(None)  # nosec B101


def test_settings_base_url():
    assert BedrockSettings(region="eu-west-3").base_url() == "https://bedrock-runtime.eu-west-3.amazonaws.com"  # nosec B101
