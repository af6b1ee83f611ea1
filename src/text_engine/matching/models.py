"""Dataclasses describing highlight requests and located matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

DEFAULT_HIGHLIGHT_COLOR = "yellow"


def _split_field(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


@dataclass(frozen=True, slots=True)
class HighlightTerm:
    pattern: str
    color: str = DEFAULT_HIGHLIGHT_COLOR

    def __post_init__(self) -> None:
        if not self.pattern:
            raise ValueError("highlight pattern cannot be empty")


@dataclass(frozen=True, slots=True)
class HighlightSpec:
    """Ordered highlight terms; earlier terms take priority on overlap."""

    terms: tuple[HighlightTerm, ...] = ()

    @classmethod
    def from_pairs(
        cls,
        patterns: Sequence[str],
        colors: Sequence[str] = (),
        *,
        default_color: str = DEFAULT_HIGHLIGHT_COLOR,
    ) -> "HighlightSpec":
        """Zip parallel pattern/color arrays; missing colors use the default."""

        terms = []
        for index, pattern in enumerate(patterns):
            if not pattern:
                continue
            color = colors[index] if index < len(colors) and colors[index] else default_color
            terms.append(HighlightTerm(pattern=pattern, color=color))
        return cls(terms=tuple(terms))

    @classmethod
    def parse(
        cls,
        words: str,
        colors: str = "",
        *,
        default_color: str = DEFAULT_HIGHLIGHT_COLOR,
    ) -> "HighlightSpec":
        """Build a spec from comma-separated term and color fields."""

        return cls.from_pairs(
            _split_field(words), _split_field(colors), default_color=default_color
        )

    @classmethod
    def single(
        cls, pattern: str, *, color: str = DEFAULT_HIGHLIGHT_COLOR
    ) -> "HighlightSpec":
        return cls(terms=(HighlightTerm(pattern=pattern, color=color),))

    @property
    def patterns(self) -> tuple[str, ...]:
        return tuple(term.pattern for term in self.terms)

    def __bool__(self) -> bool:
        return bool(self.terms)


@dataclass(frozen=True, slots=True)
class MatchSpan:
    start: int
    end: int
    term_index: int


@dataclass(frozen=True, slots=True)
class Segment:
    """One run of the rendered preview, plain or highlighted."""

    text: str
    start: int
    end: int
    term_index: Optional[int] = None
    color: Optional[str] = None

    @property
    def highlighted(self) -> bool:
        return self.term_index is not None


@dataclass(frozen=True, slots=True)
class HighlightResult:
    segments: tuple[Segment, ...]
    spans: tuple[MatchSpan, ...]

    @classmethod
    def plain(cls, text: str) -> "HighlightResult":
        if not text:
            return cls(segments=(), spans=())
        return cls(segments=(Segment(text=text, start=0, end=len(text)),), spans=())

    def highlighted_texts(self) -> list[str]:
        return [segment.text for segment in self.segments if segment.highlighted]

    def runs(self) -> Iterable[tuple[str, Optional[str]]]:
        for segment in self.segments:
            yield segment.text, segment.color


__all__ = [
    "DEFAULT_HIGHLIGHT_COLOR",
    "HighlightResult",
    "HighlightSpec",
    "HighlightTerm",
    "MatchSpan",
    "Segment",
]
