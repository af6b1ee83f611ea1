"""Whole-text transformations offered by the editor's action menu."""

from __future__ import annotations

import re
from typing import Callable, Dict

Transform = Callable[[str], str]

_SENTENCE_START = re.compile(r"(^|[.!?।]\s+)([a-z])", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_LINE_BREAKS = re.compile(r"\n+")


def to_upper(text: str) -> str:
    return text.upper()


def to_lower(text: str) -> str:
    return text.lower()


def to_title_case(text: str) -> str:
    # Only single spaces delimit words here; tabs and newlines do not.
    words = text.lower().split(" ")
    return " ".join(word[:1].upper() + word[1:] for word in words)


def to_sentence_case(text: str) -> str:
    return _SENTENCE_START.sub(
        lambda match: match.group(1) + match.group(2).upper(), text
    )


def remove_extra_spaces(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


def remove_line_breaks(text: str) -> str:
    return _LINE_BREAKS.sub(" ", text)


def sort_words(text: str) -> str:
    words = _WHITESPACE.split(text)
    return " ".join(sorted(words, key=lambda word: (word.casefold(), word)))


TRANSFORMS: Dict[str, Transform] = {
    "upper": to_upper,
    "lower": to_lower,
    "title": to_title_case,
    "sentence": to_sentence_case,
    "spaces": remove_extra_spaces,
    "lines": remove_line_breaks,
    "sort": sort_words,
}


def get_transform(name: str) -> Transform | None:
    return TRANSFORMS.get(name)


__all__ = [
    "TRANSFORMS",
    "Transform",
    "get_transform",
    "remove_extra_spaces",
    "remove_line_breaks",
    "sort_words",
    "to_lower",
    "to_sentence_case",
    "to_title_case",
    "to_upper",
]
