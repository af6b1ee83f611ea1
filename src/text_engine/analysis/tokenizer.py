"""Word, sentence, and paragraph tokenization."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

# ``[^\W_]`` is a Unicode letter or number; apostrophe, backtick and hyphen
# stay inside a word.
WORD_PATTERN = re.compile(r"(?:[^\W_]|['`-])+")
SENTENCE_BREAK = re.compile(r"[.!?।|]+")
PARAGRAPH_BREAK = re.compile(r"(?:\r\n|\r|\n)+")


def iter_words(text: str) -> Iterator[str]:
    for match in WORD_PATTERN.finditer(text):
        yield match.group(0)


def iter_sentences(text: str) -> Iterator[str]:
    return _iter_trimmed(SENTENCE_BREAK.split(text))


def iter_paragraphs(text: str) -> Iterator[str]:
    return _iter_trimmed(PARAGRAPH_BREAK.split(text))


def _iter_trimmed(pieces: list[str]) -> Iterator[str]:
    for piece in pieces:
        cleaned = piece.strip()
        if cleaned:
            yield cleaned


@dataclass(frozen=True, slots=True)
class Tokenization:
    """Restartable token views over a fixed text.

    Every accessor returns a fresh iterator, so a view can be walked any
    number of times without caching the tokens.
    """

    text: str

    def words(self) -> Iterator[str]:
        return iter_words(self.text)

    def sentences(self) -> Iterator[str]:
        return iter_sentences(self.text)

    def paragraphs(self) -> Iterator[str]:
        return iter_paragraphs(self.text)


def tokenize(text: str) -> Tokenization:
    return Tokenization(text)


__all__ = [
    "Tokenization",
    "WORD_PATTERN",
    "iter_words",
    "iter_sentences",
    "iter_paragraphs",
    "tokenize",
]
