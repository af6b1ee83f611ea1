from __future__ import annotations

import pytest

from text_engine.matching import (
    HighlightSpec,
    HighlightTerm,
    MatchEngine,
    MatchSpan,
    PatternError,
)


def test_highlight_is_case_insensitive() -> None:
    result = MatchEngine().highlight("Cat cat dog", HighlightSpec.single("CAT"))

    assert result.spans == (
        MatchSpan(start=0, end=3, term_index=0),
        MatchSpan(start=4, end=7, term_index=0),
    )
    assert result.highlighted_texts() == ["Cat", "cat"]


def test_segments_cover_the_text_contiguously() -> None:
    text = "the cat sat on the mat"
    result = MatchEngine().highlight(text, HighlightSpec.parse("at, the", "red"))

    assert "".join(segment.text for segment in result.segments) == text
    offset = 0
    for segment in result.segments:
        assert segment.start == offset
        assert text[segment.start : segment.end] == segment.text
        offset = segment.end
    assert offset == len(text)


def test_term_order_changes_the_result() -> None:
    engine = MatchEngine()

    forward = engine.highlight("abc", HighlightSpec.from_pairs(["ab", "bc"]))
    backward = engine.highlight("abc", HighlightSpec.from_pairs(["bc", "ab"]))

    assert forward.highlighted_texts() == ["ab"]
    assert [segment.text for segment in forward.segments] == ["ab", "c"]
    assert backward.highlighted_texts() == ["bc"]
    assert [segment.text for segment in backward.segments] == ["a", "bc"]


def test_later_terms_only_scan_remaining_plain_fragments() -> None:
    result = MatchEngine().highlight(
        "foobar", HighlightSpec.from_pairs(["oba", "foobar"])
    )

    assert result.highlighted_texts() == ["oba"]
    assert {span.term_index for span in result.spans} == {0}


def test_later_terms_match_inside_plain_fragments() -> None:
    result = MatchEngine().highlight(
        "red green red", HighlightSpec.from_pairs(["green", "red"], ["lime", "pink"])
    )

    assert [(s.text, s.color) for s in result.segments if s.highlighted] == [
        ("red", "pink"),
        ("green", "lime"),
        ("red", "pink"),
    ]
    assert [span.term_index for span in result.spans] == [1, 0, 1]


def test_missing_colors_fall_back_to_default() -> None:
    spec = HighlightSpec.parse(" a , b ,, ", "red")

    assert spec.terms == (
        HighlightTerm(pattern="a", color="red"),
        HighlightTerm(pattern="b", color="yellow"),
    )
    assert not HighlightSpec.parse("")


def test_zero_width_matches_are_not_highlighted() -> None:
    result = MatchEngine().highlight("bbb", HighlightSpec.single("a*"))

    assert result.spans == ()
    assert [segment.text for segment in result.segments] == ["bbb"]


def test_empty_text_has_no_segments() -> None:
    result = MatchEngine().highlight("", HighlightSpec.single("a"))

    assert result.segments == ()


def test_invalid_pattern_raises_pattern_error() -> None:
    engine = MatchEngine()

    with pytest.raises(PatternError) as excinfo:
        engine.highlight("text", HighlightSpec.from_pairs(["ok", "("]))

    assert excinfo.value.pattern == "("
    with pytest.raises(PatternError):
        engine.find_replace("text", "[", "x")


def test_find_replace_replaces_every_occurrence() -> None:
    engine = MatchEngine()

    assert engine.find_replace("abcABC", "abc", "X") == ("XX", 2)
    assert engine.find_replace("a1b22", r"\d+", "#") == ("a#b#", 2)
    assert engine.find_replace("abc", "z", "X") == ("abc", 0)


def test_replacement_is_inserted_literally() -> None:
    text, count = MatchEngine().find_replace("a1", r"(\d)", r"\1\1")

    assert text == "a\\1\\1"
    assert count == 1


def test_count_ignores_zero_width_matches() -> None:
    engine = MatchEngine()

    assert engine.count("Abc abc", "abc") == 2
    assert engine.count("bbb", "a*") == 0
