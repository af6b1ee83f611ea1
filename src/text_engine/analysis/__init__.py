"""Tokenization and statistics computed from plain text."""

from .statistics import (
    AnalysisSnapshot,
    Statistics,
    StatisticsEngine,
    WordFrequencyTable,
    compute_statistics,
    most_common,
    normalize_word,
    word_frequencies,
)
from .tokenizer import Tokenization, iter_paragraphs, iter_sentences, iter_words, tokenize

__all__ = [
    "AnalysisSnapshot",
    "Statistics",
    "StatisticsEngine",
    "WordFrequencyTable",
    "compute_statistics",
    "most_common",
    "normalize_word",
    "word_frequencies",
    "Tokenization",
    "iter_words",
    "iter_sentences",
    "iter_paragraphs",
    "tokenize",
]
