from __future__ import annotations

from bedrock_providers.base.http import build_timeout, close_all_clients, get_httpx_client


def test_clients_are_pooled_per_purpose():
    a = get_httpx_client(None, purpose="bedrock")
    b = get_httpx_client(None, purpose="bedrock")
    c = get_httpx_client(None, purpose="other")
    assert a is b and a is not c  # nosec B101
    close_all_clients()
    assert a.is_closed  # nosec B101
    assert get_httpx_client(None, purpose="bedrock") is not a  # nosec B101


def test_timeouts_follow_environment(monkeypatch):
    monkeypatch.setenv("PT_TIMEOUT_STREAM_SECONDS", "5")
    monkeypatch.setenv("PT_TIMEOUT_START_SECONDS", "not-a-number")
    timeout = build_timeout()
    assert timeout.read == 5.0 and timeout.connect == 30.0  # nosec B101
