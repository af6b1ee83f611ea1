"""Text statistics and word-frequency tables."""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Literal, Mapping, Optional

from .tokenizer import Tokenization

CharUnit = Literal["codepoint", "utf16"]
WordFrequencyTable = Mapping[str, int]

ASCII_WORD = re.compile(r"[A-Za-z]+")


@dataclass(frozen=True, slots=True)
class Statistics:
    """Derived counts for one revision of the text."""

    character_count: int = 0
    word_count: int = 0
    sentence_count: int = 0
    paragraph_count: int = 0
    unique_word_count: int = 0
    average_word_length: int = 0
    average_sentence_length: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {
            "characters": self.character_count,
            "words": self.word_count,
            "unique_words": self.unique_word_count,
            "sentences": self.sentence_count,
            "paragraphs": self.paragraph_count,
            "avg_word_length": self.average_word_length,
            "avg_sentence_length": self.average_sentence_length,
        }


def normalize_word(word: str) -> str:
    """Fold case only for pure ASCII-alphabetic words."""

    if ASCII_WORD.fullmatch(word):
        return word.lower()
    return word


def word_frequencies(text: str) -> WordFrequencyTable:
    table: Dict[str, int] = {}
    for word in Tokenization(text).words():
        key = normalize_word(word)
        table[key] = table.get(key, 0) + 1
    return MappingProxyType(table)


def most_common(table: WordFrequencyTable, limit: Optional[int] = None) -> list[tuple[str, int]]:
    # sorted() is stable, so ties keep first-seen order
    ranked = sorted(table.items(), key=lambda item: item[1], reverse=True)
    if limit is None:
        return ranked
    return ranked[: max(limit, 0)]


def character_count(text: str, unit: CharUnit = "codepoint") -> int:
    if unit == "utf16":
        return len(text.encode("utf-16-le", "surrogatepass")) // 2
    if unit == "codepoint":
        return len(text)
    raise ValueError(f"Unknown character unit '{unit}'")


def round_half_up(numerator: int, denominator: int) -> int:
    """Round ``numerator / denominator`` with halves going up (2.5 -> 3)."""

    if denominator <= 0:
        raise ValueError("denominator must be positive")
    return (2 * numerator + denominator) // (2 * denominator)


def compute_statistics(
    text: str,
    *,
    unit: CharUnit = "codepoint",
    frequencies: Optional[WordFrequencyTable] = None,
) -> Statistics:
    tokens = Tokenization(text)
    words = list(tokens.words())
    word_count = len(words)
    sentence_count = sum(1 for _ in tokens.sentences())
    paragraph_count = sum(1 for _ in tokens.paragraphs())
    letters = sum(len(word) for word in words)
    table = frequencies if frequencies is not None else word_frequencies(text)

    return Statistics(
        character_count=character_count(text, unit),
        word_count=word_count,
        sentence_count=sentence_count,
        paragraph_count=paragraph_count,
        unique_word_count=len(table),
        average_word_length=round_half_up(letters, max(word_count, 1)),
        average_sentence_length=(
            round_half_up(word_count, sentence_count) if sentence_count else 0
        ),
    )


@dataclass(frozen=True, slots=True)
class AnalysisSnapshot:
    revision: int
    statistics: Statistics
    frequencies: WordFrequencyTable


class StatisticsEngine:
    """Memoizes statistics and frequencies on the session revision counter."""

    def __init__(self, *, unit: CharUnit = "codepoint") -> None:
        if unit not in ("codepoint", "utf16"):
            raise ValueError(f"Unknown character unit '{unit}'")
        self.unit: CharUnit = unit
        self._cached: Optional[AnalysisSnapshot] = None
        self.computations = 0

    def snapshot(self, text: str, revision: int) -> AnalysisSnapshot:
        cached = self._cached
        if cached is not None and cached.revision == revision:
            return cached
        table = word_frequencies(text)
        snapshot = AnalysisSnapshot(
            revision=revision,
            statistics=compute_statistics(text, unit=self.unit, frequencies=table),
            frequencies=table,
        )
        self._cached = snapshot
        self.computations += 1
        return snapshot

    def statistics(self, text: str, revision: int) -> Statistics:
        return self.snapshot(text, revision).statistics

    def frequencies(self, text: str, revision: int) -> WordFrequencyTable:
        return self.snapshot(text, revision).frequencies

    def invalidate(self) -> None:
        self._cached = None


__all__ = [
    "AnalysisSnapshot",
    "CharUnit",
    "Statistics",
    "StatisticsEngine",
    "WordFrequencyTable",
    "character_count",
    "compute_statistics",
    "most_common",
    "normalize_word",
    "round_half_up",
    "word_frequencies",
]
