from __future__ import annotations

from bedrock_providers.base.cancellation import CancellationToken
from bedrock_providers.base.errors import ErrorCode, RemoteStreamError
from bedrock_providers.base.streaming import Completed, Failed, TextStream
from bedrock_providers.tests.streaming.helpers import Script, make_adapter


def _stream(script: Script, token: CancellationToken | None = None) -> TextStream:
    token = token or CancellationToken()
    return TextStream(make_adapter(script, token).run(), token=token, provider="scripted", model="scripted-model")


def test_outcome_is_none_until_finished():
    stream = _stream(Script(chunks=["a", "b"]))
    assert stream.outcome is None  # nosec B101
    assert next(stream) == "a" and stream.outcome is None  # nosec B101
    assert list(stream) == ["b"]  # nosec B101
    assert stream.outcome == Completed(full_text="ab") and stream.text == "ab"  # nosec B101


def test_single_pass():
    stream = _stream(Script(chunks=["a"]))
    assert list(stream) == ["a"]  # nosec B101
    assert list(stream) == []  # nosec B101


def test_failure_outcome_carries_partial_text():
    script = Script(chunks=["a", "b"], fail_at=1, fail_with=RemoteStreamError(message="x"))
    stream = _stream(script)
    assert list(stream) == ["a"]  # nosec B101
    assert isinstance(stream.outcome, Failed) and stream.outcome.partial_text == "a"  # nosec B101


def test_close_releases_and_marks_cancelled():
    script = Script(chunks=["a", "b", "c"])
    with _stream(script) as stream:
        next(stream)
    assert script.closed  # nosec B101
    assert stream.outcome.error.code is ErrorCode.CANCELLED  # nosec B101
    assert stream.outcome.partial_text == "a"  # nosec B101


def test_cancel_goes_through_token():
    token = CancellationToken()
    stream = _stream(Script(chunks=["a", "b"]), token)
    next(stream)
    stream.cancel("enough")
    assert list(stream) == []  # nosec B101
    assert token.reason == "enough"  # nosec B101
    assert stream.outcome.error.message == "enough"  # nosec B101


def test_missing_terminal_is_internal_failure():
    gen = make_adapter(Script(chunks=["x", "y"])).run()
    partial = [next(gen)]
    gen.close()
    stream = TextStream(iter(partial), provider="scripted", model="scripted-model")
    assert list(stream) == ["x"]  # nosec B101
    assert isinstance(stream.outcome, Failed) and stream.outcome.error.code is ErrorCode.INTERNAL  # nosec B101
    assert stream.outcome.partial_text == "x"  # nosec B101
