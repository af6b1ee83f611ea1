from __future__ import annotations

import pytest

from text_engine.session import SessionConfig, TextSession
from text_engine.session.config import env_int


def test_defaults() -> None:
    config = SessionConfig()

    assert config.history_limit == 100
    assert config.default_highlight_color == "yellow"
    assert config.char_unit == "codepoint"


def test_from_env_reads_prefixed_values() -> None:
    config = SessionConfig.from_env(
        {
            "TEXT_ENGINE_HISTORY_LIMIT": "5",
            "TEXT_ENGINE_HIGHLIGHT_COLOR": "orange",
            "TEXT_ENGINE_CHAR_UNIT": "UTF16",
            "TEXT_ENGINE_DICTATION_SEPARATOR": "",
        }
    )

    assert config == SessionConfig(
        history_limit=5,
        default_highlight_color="orange",
        char_unit="utf16",
        dictation_separator="",
    )
    assert SessionConfig.from_env({}) == SessionConfig()


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        SessionConfig(history_limit=0)
    with pytest.raises(ValueError):
        SessionConfig(char_unit="bytes")  # type: ignore[arg-type]


def test_session_uses_configured_color_and_unit() -> None:
    session = TextSession(
        "a😀", config=SessionConfig(default_highlight_color="cyan", char_unit="utf16")
    )

    session.search("a")

    assert session.get_statistics().character_count == 3
    colors = {s.color for s in session.get_highlighted_segments().segments if s.highlighted}
    assert colors == {"cyan"}


def test_malformed_env_values_fall_back_to_defaults() -> None:
    config = SessionConfig.from_env(
        {
            "TEXT_ENGINE_HISTORY_LIMIT": "lots",
            "TEXT_ENGINE_CHAR_UNIT": "bytes",
        }
    )

    assert config.history_limit == 100
    assert config.char_unit == "codepoint"
    assert SessionConfig.from_env({"TEXT_ENGINE_HISTORY_LIMIT": "-3"}).history_limit == 100


def test_env_int() -> None:
    assert env_int({"N": " 7 "}, "N", 1) == 7
    assert env_int({"N": "7.5"}, "N", 1) == 1
    assert env_int({}, "N", 1) == 1
