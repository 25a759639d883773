"""End-to-end provider tests against an ``httpx.MockTransport`` backend.

The mock response body is a real event stream; ``RecordingStream`` reports
how many network chunks the provider pulled and whether it released the
connection.
"""
from __future__ import annotations

import json

import httpx
import pytest

from bedrock_providers.base.cancellation import CancellationToken
from bedrock_providers.base.errors import ConfigurationError, ErrorCode, RemoteStreamError
from bedrock_providers.base.interfaces import HasDefaultModel, LLMProvider
from bedrock_providers.base.models import SamplingConfig
from bedrock_providers.base.streaming import Completed, Failed
from bedrock_providers.bedrock import BedrockProvider
from bedrock_providers.bedrock.event_stream import encode_frame
from bedrock_providers.bedrock.events import encode_chunk, exception_frame, text_delta_chunk
from bedrock_providers.config.settings import BedrockSettings
from bedrock_providers.tests.helpers import Recorder, events_named, split_bytes

MESSAGES = [{"role": "system", "content": "sys"}, {"role": "user", "content": "Hi"}]


def _stop(inp: int = 5, out: int = 3) -> bytes:
    return encode_chunk(
        {"type": "message_stop", "amazon-bedrock-invocationMetrics": {"inputTokenCount": inp, "outputTokenCount": out}}
    )


def _provider(settings, rec: Recorder, **kw) -> BedrockProvider:
    return BedrockProvider(settings, http_client=rec.client(), **kw)


def test_happy_path_streams_deltas_in_order(settings, log_records):
    rec = Recorder(chunks=[text_delta_chunk("Hello"), text_delta_chunk(", "), text_delta_chunk("world"), _stop()])
    provider = _provider(settings, rec)
    with provider.stream(MESSAGES) as stream:
        assert list(stream) == ["Hello", ", ", "world"]  # nosec B101
        assert stream.outcome == Completed(full_text="Hello, world")  # nosec B101

    sent = json.loads(rec.requests[0].content)
    assert sent["system"] == "sys" and sent["messages"] == [{"role": "user", "content": "Hi"}]  # nosec B101
    assert rec.requests[0].url.path.endswith("/invoke-with-response-stream")  # nosec B101
    assert rec.stream.closed  # nosec B101

    end = events_named(log_records, "stream.adapter.end")
    assert len(end) == 1 and end[0]["emitted_count"] == 3  # nosec B101
    assert end[0]["tokens"] == {"prompt": 5, "completion": 3, "total": 8}  # nosec B101
    assert end[0]["request_id"] == "req-123"  # nosec B101


def test_deltas_survive_arbitrary_chunking(settings):
    body = b"".join([text_delta_chunk("a"), text_delta_chunk("b"), text_delta_chunk("c"), _stop()])
    for size in (1, 5, 17):
        rec = Recorder(chunks=split_bytes(body, size))
        with _provider(settings, rec).stream(MESSAGES) as stream:
            assert "".join(stream) == "abc"  # nosec B101
            assert isinstance(stream.outcome, Completed)  # nosec B101


def test_mid_stream_exception_keeps_partial_text(settings, log_records):
    rec = Recorder(chunks=[text_delta_chunk("part"), exception_frame("modelStreamErrorException", "overloaded")])
    with _provider(settings, rec).stream(MESSAGES) as stream:
        assert list(stream) == ["part"]  # nosec B101
        outcome = stream.outcome
    assert isinstance(outcome, Failed) and outcome.partial_text == "part"  # nosec B101
    assert isinstance(outcome.error, RemoteStreamError)  # nosec B101
    assert outcome.error.error_type == "modelStreamErrorException"  # nosec B101
    assert rec.stream.closed  # nosec B101
    assert events_named(log_records, "stream.remote_error")  # nosec B101
    err = events_named(log_records, "stream.adapter.error")
    assert err and err[0]["error_code"] == "remote"  # nosec B101


def test_terminal_event_error_string(settings):
    rec = Recorder(chunks=[exception_frame("throttlingException", "slow")])
    events = list(_provider(settings, rec).stream_chat(MESSAGES))
    assert len(events) == 1 and events[0].finish  # nosec B101
    assert events[0].error == "remote:throttlingException: slow"  # nosec B101


def test_truncated_stream_fails_with_decode_error(settings):
    data = text_delta_chunk("ok") + text_delta_chunk("cut")[:-6]
    rec = Recorder(chunks=[data])
    with _provider(settings, rec).stream(MESSAGES) as stream:
        assert list(stream) == ["ok"]  # nosec B101
    assert stream.outcome.error.code is ErrorCode.DECODE  # nosec B101


def test_unknown_frames_do_not_end_stream(settings, log_records):
    rec = Recorder(
        chunks=[
            encode_chunk({"type": "message_start", "message": {"id": "x"}}),
            encode_chunk({"type": "brand_new_event"}),
            text_delta_chunk("x"),
            _stop(),
        ]
    )
    with _provider(settings, rec).stream(MESSAGES) as stream:
        assert list(stream) == ["x"]  # nosec B101
    ignored = events_named(log_records, "stream.frame_ignored")
    # routine frames log at DEBUG; unknown ones at INFO
    assert "brand_new_event" in [e["reason"] for e in ignored]  # nosec B101


def test_malformed_chunk_between_deltas_is_skipped(settings):
    bad = encode_frame({":event-type": "chunk", ":message-type": "event"}, "{\"bytes\": \"\u00e9\"}".encode())
    rec = Recorder(chunks=[text_delta_chunk("a"), bad, text_delta_chunk("b"), _stop()])
    with _provider(settings, rec).stream(MESSAGES) as stream:
        assert list(stream) == ["a", "b"]  # nosec B101
    assert stream.outcome == Completed(full_text="ab")  # nosec B101


def test_backpressure_reads_at_most_one_chunk_ahead(settings):
    chunks = [text_delta_chunk(str(i)) for i in range(10)] + [_stop()]
    rec = Recorder(chunks=chunks)
    stream = _provider(settings, rec).stream(MESSAGES)
    assert rec.requests == []  # nosec B101
    assert next(stream) == "0"  # nosec B101
    assert rec.stream.pulled <= 2  # nosec B101
    assert next(stream) == "1"  # nosec B101
    assert rec.stream.pulled <= 3  # nosec B101
    stream.close()


def test_abandoning_stream_closes_connection(settings, log_records):
    rec = Recorder(chunks=[text_delta_chunk(str(i)) for i in range(10)] + [_stop()])
    with _provider(settings, rec).stream(MESSAGES) as stream:
        for delta in stream:
            if delta == "2":
                break
    assert rec.stream.closed  # nosec B101
    assert rec.stream.pulled < 10  # nosec B101
    assert isinstance(stream.outcome, Failed)  # nosec B101
    assert stream.outcome.error.code is ErrorCode.CANCELLED  # nosec B101
    assert events_named(log_records, "stream.abandoned")  # nosec B101


def test_cancellation_token_stops_stream(settings):
    rec = Recorder(chunks=[text_delta_chunk(str(i)) for i in range(10)] + [_stop()])
    token = CancellationToken()
    stream = _provider(settings, rec).stream(MESSAGES, cancellation_token=token)
    received = []
    for delta in stream:
        received.append(delta)
        if len(received) == 2:
            token.cancel("user pressed stop")
    assert received == ["0", "1"]  # nosec B101
    assert stream.outcome.error.code is ErrorCode.CANCELLED  # nosec B101
    assert stream.outcome.error.message == "user pressed stop"  # nosec B101
    assert rec.stream.closed  # nosec B101


def test_http_error_status_is_terminal_failure(settings):
    rec = Recorder(status=403, json_body={"message": "The security token included in the request is invalid."})
    with _provider(settings, rec).stream(MESSAGES) as stream:
        assert list(stream) == []  # nosec B101
    assert stream.outcome.error.code is ErrorCode.AUTH  # nosec B101


def test_missing_credentials_never_send_request():
    rec = Recorder(chunks=[text_delta_chunk("x")])
    provider = BedrockProvider(BedrockSettings(), http_client=rec.client())
    with provider.stream(MESSAGES) as stream:
        assert list(stream) == []  # nosec B101
    assert isinstance(stream.outcome.error, ConfigurationError)  # nosec B101
    assert rec.requests == []  # nosec B101
    assert not provider.supports_streaming()  # nosec B101


def test_checksum_validation_opt_in(settings):
    bad = bytearray(text_delta_chunk("x"))
    bad[-1] ^= 0xFF
    rec = Recorder(chunks=[bytes(bad), _stop()])
    with _provider(settings, rec, validate_checksums=True).stream(MESSAGES) as stream:
        assert list(stream) == []  # nosec B101
    assert stream.outcome.error.code is ErrorCode.DECODE  # nosec B101


def test_name_and_model(settings):
    provider = BedrockProvider(settings)
    assert isinstance(provider, LLMProvider)  # nosec B101
    assert provider.get_name() == "bedrock"  # nosec B101
    assert provider.get_model() == settings.model  # nosec B101
    assert provider.provider_name == "bedrock" and provider.supports_streaming()  # nosec B101
    assert isinstance(provider, HasDefaultModel) and provider.default_model() == settings.model  # nosec B101


def test_title_uses_title_model_and_clamps(settings):
    rec = Recorder(json_body={"content": [{"type": "text", "text": "  " + "T" * 60 + "  "}]})
    title = _provider(settings, rec).generate_title("How do I decode event streams?")
    assert title == "T" * 47 + "..."  # nosec B101
    req = rec.requests[0]
    assert req.url.path.endswith("/invoke")  # nosec B101
    assert "claude-3-5-haiku" in req.url.path  # nosec B101
    sent = json.loads(req.content)
    assert sent["max_tokens"] == 50 and "title" in sent["system"]  # nosec B101


def test_title_short_response_is_kept(settings):
    rec = Recorder(json_body={"content": [{"type": "text", "text": "Event streams"}]})
    assert _provider(settings, rec).generate_title("q") == "Event streams"  # nosec B101


def test_title_empty_response_is_untitled(settings):
    rec = Recorder(json_body={"content": []})
    assert _provider(settings, rec).generate_title("q") == "Untitled"  # nosec B101


@pytest.mark.parametrize(
    "rec",
    [
        Recorder(status=500, json_body={"message": "boom"}),
        Recorder(raise_exc=httpx.ConnectTimeout("slow")),
        Recorder(body=b"not json"),
    ],
)
def test_title_failures_fall_back(settings, log_records, rec):
    first = "Tell me everything about the AWS event stream binary format please"
    assert _provider(settings, rec).generate_title(first) == first[:47] + "..."  # nosec B101
    errs = events_named(log_records, "title.error")
    assert errs and errs[0]["fallback_used"] is True  # nosec B101


def test_title_without_credentials_falls_back():
    assert BedrockProvider(BedrockSettings()).generate_title("short") == "short..."  # nosec B101


def test_from_config_reads_environment(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDENV")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "envsecret")
    monkeypatch.setenv("AWS_BEDROCK_REGION", "eu-west-1")
    provider = BedrockProvider.from_config(model="eu.anthropic.claude-x:0", max_tokens=128)
    assert provider.settings.region == "eu-west-1"  # nosec B101
    assert provider.settings.access_key_id == "AKIDENV"  # nosec B101
    assert provider.get_model() == "eu.anthropic.claude-x:0"  # nosec B101


def test_from_config_rejects_unknown_and_invalid_settings():
    with pytest.raises(TypeError):
        BedrockProvider.from_config(api_key="x")
    with pytest.raises(ConfigurationError):
        BedrockProvider.from_config(region="  ")
    with pytest.raises(ConfigurationError):
        BedrockProvider.from_config(max_tokens=0)
    with pytest.raises(ConfigurationError):
        BedrockProvider.from_config(temperature=1.5)


def test_title_temperature_ignores_chat_sampling(settings):
    rec = Recorder(json_body={"content": [{"type": "text", "text": "Event streams"}]})
    provider = _provider(settings, rec, sampling=SamplingConfig(max_tokens=64, temperature=0.1))
    provider.generate_title("q")
    assert json.loads(rec.requests[0].content)["temperature"] == 0.7  # nosec B101
