"""Highlight and find/replace matching."""

from text_engine.errors import PatternError

from .engine import MatchEngine
from .models import (
    DEFAULT_HIGHLIGHT_COLOR,
    HighlightResult,
    HighlightSpec,
    HighlightTerm,
    MatchSpan,
    Segment,
)

__all__ = [
    "DEFAULT_HIGHLIGHT_COLOR",
    "HighlightResult",
    "HighlightSpec",
    "HighlightTerm",
    "MatchEngine",
    "MatchSpan",
    "PatternError",
    "Segment",
]
