"""Session configuration with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from text_engine.analysis.statistics import CharUnit
from text_engine.buffer.history import DEFAULT_HISTORY_LIMIT
from text_engine.matching.models import DEFAULT_HIGHLIGHT_COLOR

ENV_PREFIX = "TEXT_ENGINE_"
_CHAR_UNITS = ("codepoint", "utf16")


def env_int(environ: Mapping[str, str], key: str, fallback: int) -> int:
    value = environ.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class SessionConfig:
    history_limit: int = DEFAULT_HISTORY_LIMIT
    default_highlight_color: str = DEFAULT_HIGHLIGHT_COLOR
    char_unit: CharUnit = "codepoint"
    dictation_separator: str = " "

    def __post_init__(self) -> None:
        if self.history_limit <= 0:
            raise ValueError("history_limit must be positive")
        if self.char_unit not in _CHAR_UNITS:
            raise ValueError(f"char_unit must be one of {_CHAR_UNITS}")
        if not self.default_highlight_color:
            raise ValueError("default_highlight_color cannot be empty")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionConfig":
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            return env.get(f"{ENV_PREFIX}{name}")

        defaults = cls()
        limit = env_int(env, f"{ENV_PREFIX}HISTORY_LIMIT", defaults.history_limit)
        color = read("HIGHLIGHT_COLOR")
        unit = read("CHAR_UNIT")
        separator = read("DICTATION_SEPARATOR")
        return cls(
            history_limit=limit if limit > 0 else defaults.history_limit,
            default_highlight_color=color or defaults.default_highlight_color,
            char_unit=(
                unit.lower()  # type: ignore[arg-type]
                if unit and unit.lower() in _CHAR_UNITS
                else defaults.char_unit
            ),
            dictation_separator=(
                separator if separator is not None else defaults.dictation_separator
            ),
        )


__all__ = ["SessionConfig", "env_int"]
