"""MockProvider streams through the same frame pipeline as Bedrock."""
from __future__ import annotations

from bedrock_providers.base.errors import ErrorCode, RemoteStreamError
from bedrock_providers.base.streaming import Completed, Failed
from bedrock_providers.mock import MockProvider


def test_default_response_streams_five_deltas():
    provider = MockProvider()
    with provider.stream([{"role": "user", "content": "hi"}]) as stream:
        deltas = list(stream)
    assert deltas == ["This ", "is ", "a ", "test ", "response."]  # nosec B101
    assert stream.outcome == Completed(full_text="This is a test response.")  # nosec B101


def test_small_chunks_straddle_frame_boundaries():
    provider = MockProvider(deltas=["alpha", "beta"], chunk_size=3)
    with provider.stream([{"role": "user", "content": "hi"}]) as stream:
        assert "".join(stream) == "alphabeta"  # nosec B101


def test_fail_with_ends_in_remote_error():
    provider = MockProvider(deltas=["one"], fail_with=("throttlingException", "slow down"))
    with provider.stream([{"role": "user", "content": "hi"}]) as stream:
        assert list(stream) == ["one"]  # nosec B101
    outcome = stream.outcome
    assert isinstance(outcome, Failed) and isinstance(outcome.error, RemoteStreamError)  # nosec B101
    assert outcome.error.code is ErrorCode.REMOTE and outcome.partial_text == "one"  # nosec B101


def test_title_and_identity():
    provider = MockProvider.from_config(model="m1", max_tokens=10, temperature=0.1)
    assert provider.get_model() == "m1" and provider.get_name() == "mock"  # nosec B101
    assert provider.generate_title("x" * 40) == "Chat about: " + "x" * 30  # nosec B101
    assert provider.supports_streaming()  # nosec B101
