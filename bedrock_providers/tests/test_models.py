from __future__ import annotations

import pytest

from bedrock_providers.base.models import Message, SamplingConfig, coerce_messages, normalize_role
from bedrock_providers.base.titles import clamp_title, extract_title_text, fallback_title


def test_role_aliases():
    assert normalize_role("Prompt") == "user"  # nosec B101
    assert normalize_role(" response ") == "assistant"  # nosec B101
    assert normalize_role("tool") is None and normalize_role(None) is None  # nosec B101


def test_coerce_messages_preserves_order_and_drops_unknown():
    msgs = coerce_messages(
        [
            {"type": "prompt", "content": "q"},
            {"role": "function", "content": "x"},
            Message(role="assistant", content="a"),
            {"role": "user", "content": None},
            "not a message",
        ]
    )
    assert [m.to_dict() for m in msgs] == [  # nosec B101
        {"role": "user", "content": "q"},
        {"role": "assistant", "content": "a"},
        {"role": "user", "content": ""},
    ]


def test_sampling_validation():
    assert SamplingConfig().max_tokens == 4096  # nosec B101
    with pytest.raises(ValueError):
        SamplingConfig(max_tokens=0)
    with pytest.raises(ValueError):
        SamplingConfig(temperature=1.5)


def test_fallback_title_always_appends_ellipsis():
    assert fallback_title("hi") == "hi..."  # nosec B101
    assert fallback_title("x" * 100) == "x" * 47 + "..."  # nosec B101
    assert fallback_title("") == "..."  # nosec B101


def test_clamp_title_boundaries():
    assert clamp_title("  " + "y" * 50 + "  ") == "y" * 50  # nosec B101
    assert clamp_title("y" * 51) == "y" * 47 + "..."  # nosec B101


def test_extract_title_text():
    assert extract_title_text({"content": [{"type": "text", "text": " T "}]}) == "T"  # nosec B101
    assert extract_title_text({"content": [{"type": "text", "text": "  "}]}) == "Untitled"  # nosec B101
    assert extract_title_text({}) == "Untitled"  # nosec B101
