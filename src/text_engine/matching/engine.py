"""Case-insensitive highlight segmentation and find/replace.

Search terms are compiled as Python regular expressions. Users can hand in
arbitrary patterns here, so compilation failures are converted into
``PatternError`` instead of leaking ``re.error`` to callers.
"""

from __future__ import annotations

import re
from typing import Dict, List, Pattern

from text_engine.errors import PatternError

from .models import HighlightResult, HighlightSpec, MatchSpan, Segment


class MatchEngine:
    """Compiles user patterns once and applies them to text."""

    def __init__(self, *, flags: int = re.IGNORECASE) -> None:
        self.flags = flags
        self._compiled: Dict[str, Pattern[str]] = {}

    def compile(self, pattern: str) -> Pattern[str]:
        cached = self._compiled.get(pattern)
        if cached is not None:
            return cached
        try:
            compiled = re.compile(pattern, self.flags)
        except re.error as exc:
            raise PatternError(pattern, str(exc)) from exc
        self._compiled[pattern] = compiled
        return compiled

    def validate(self, spec: HighlightSpec) -> None:
        for pattern in spec.patterns:
            self.compile(pattern)

    def highlight(self, text: str, spec: HighlightSpec) -> HighlightResult:
        """Split ``text`` into alternating plain/highlighted segments.

        Terms run in declaration order. Each term only scans the fragments
        that are still plain after the earlier terms, so a match that would
        straddle an existing highlight is lost and the earliest term wins.
        """

        patterns = [self.compile(pattern) for pattern in spec.patterns]
        if not text or not patterns:
            return HighlightResult.plain(text)

        segments: List[Segment] = [Segment(text=text, start=0, end=len(text))]
        for index, (pattern, term) in enumerate(zip(patterns, spec.terms)):
            layered: List[Segment] = []
            for segment in segments:
                if segment.highlighted:
                    layered.append(segment)
                    continue
                layered.extend(_split_segment(segment, pattern, index, term.color))
            segments = layered

        spans = tuple(
            MatchSpan(start=segment.start, end=segment.end, term_index=segment.term_index)
            for segment in segments
            if segment.term_index is not None
        )
        return HighlightResult(segments=tuple(segments), spans=spans)

    def find_replace(
        self, text: str, pattern: str, replacement: str = ""
    ) -> tuple[str, int]:
        """Replace every match of ``pattern``; ``replacement`` is literal."""

        compiled = self.compile(pattern)
        return compiled.subn(lambda _match: replacement, text)

    def count(self, text: str, pattern: str) -> int:
        compiled = self.compile(pattern)
        return sum(1 for match in compiled.finditer(text) if match.end() > match.start())


def _split_segment(
    segment: Segment, pattern: Pattern[str], term_index: int, color: str
) -> List[Segment]:
    pieces: List[Segment] = []
    cursor = 0
    source = segment.text
    for match in pattern.finditer(source):
        start, end = match.span()
        if start == end:
            continue
        if start > cursor:
            pieces.append(_piece(segment, cursor, start))
        pieces.append(_piece(segment, start, end, term_index=term_index, color=color))
        cursor = end
    if cursor < len(source):
        pieces.append(_piece(segment, cursor, len(source)))
    return pieces


def _piece(
    segment: Segment,
    start: int,
    end: int,
    *,
    term_index: int | None = None,
    color: str | None = None,
) -> Segment:
    return Segment(
        text=segment.text[start:end],
        start=segment.start + start,
        end=segment.start + end,
        term_index=term_index,
        color=color,
    )


__all__ = ["MatchEngine"]
