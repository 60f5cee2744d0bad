# topmark:header:start
#
#   project      : ConsMark
#   file         : test_matcher.py
#   file_relpath : tests/markup/test_matcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for inline tag matching and rendering (`consmark.markup.matcher`)."""

from __future__ import annotations

import pytest

from consmark.core.errors import MarkupLogicError
from consmark.markup.matcher import TagMatch, find_tags, render_match, render_text
from consmark.rendering.registry import LOOPBACK_TAG_FORMATS, NULL_TAG_FORMATS
from tests.conftest import parametrize


def _summary(matches: tuple[TagMatch, ...]) -> list[tuple[str, str]]:
    return [(m.delimiter, m.text) for m in matches]


def test_finds_top_level_tags_with_offsets() -> None:
    matches = find_tags("**bold** and _em_")
    assert _summary(matches) == [("**", "bold"), ("_", "em")]
    assert (matches[0].start, matches[0].end) == (0, 8)
    assert (matches[1].start, matches[1].end) == (13, 17)


@parametrize(
    ("subject", "expected"),
    [
        ("*italic*", [("*", "italic")]),
        ("***heading***", [("***", "heading")]),
        ("_italic_", [("_", "italic")]),
        ("__bold__", [("__", "bold")]),
        ("___heading___", [("___", "heading")]),
        ("<underline>", [("<", "underline")]),
        ("~~low priority~~", [("~~", "low priority")]),
        ("a*b*c", [("*", "b")]),
    ],
)
def test_delimiter_families(subject: str, expected: list[tuple[str, str]]) -> None:
    assert _summary(find_tags(subject)) == expected


@parametrize(
    "subject",
    [
        "\\*not bold\\*",
        "snake_case_name",
        "* not italic*",
        "*not italic *",
        "< not underlined>",
        "~single~",
        "unclosed **bold",
        "",
    ],
)
def test_no_match(subject: str) -> None:
    assert find_tags(subject) == ()


def test_nested_tags_are_children() -> None:
    (outer,) = find_tags("**_Nested \\<tags>_ with <\\*nested escapes*>.**")
    assert outer.delimiter == "**"
    assert outer.has_children
    assert _summary(outer.children) == [("_", "Nested \\<tags>"), ("<", "\\*nested escapes*")]
    assert not outer.children[0].has_children


class TestHeading:
    """``## heading`` lines."""

    @parametrize(
        ("subject", "text"),
        [
            ("## Title", "Title"),
            ("## Title ##", "Title"),
            ("## Title   ", "Title"),
            ("##   Spaced   ", "Spaced"),
            ("## Title \\#", "Title \\#"),
            ("## C# and F#  ##", "C# and F#"),
            ("## a ## b", "a ## b"),
            ("## #tag", "#tag"),
        ],
    )
    def test_heading_text(self, subject: str, text: str) -> None:
        (match,) = find_tags(subject)
        assert match.delimiter == "##"
        assert match.text == text
        assert match.end == len(subject)

    def test_heading_stops_at_end_of_line(self) -> None:
        (match,) = find_tags("## One\nbody")
        assert match.text == "One"
        assert match.end == len("## One")

    @parametrize(
        "subject",
        [
            "##Title",
            "x ## Title",
            "###",
            "## ##",
            "## #",
            "##  #  ",
            "##   ",
            "## C#",
            "## Title \\##",
            "## Title ##   ",
        ],
    )
    def test_not_a_heading(self, subject: str) -> None:
        assert all(m.delimiter != "##" for m in find_tags(subject))


def test_render_match_loopback_reproduces_markup() -> None:
    (match,) = find_tags("**a _b_ <c>**")
    assert render_match(match, LOOPBACK_TAG_FORMATS) == "**a _b_ <c>**"


def test_render_match_null_formats_strip_tags_and_escapes() -> None:
    (match,) = find_tags("**_Nested \\<tags>_ with <\\*nested escapes*>.**")
    assert render_match(match, NULL_TAG_FORMATS) == "Nested <tags> with *nested escapes*."


def test_render_text_unescapes_literal_runs_only_when_removing_escapes() -> None:
    text = "a \\* b"
    assert render_text(text, find_tags(text), NULL_TAG_FORMATS, 0) == "a * b"
    assert render_text(text, find_tags(text), LOOPBACK_TAG_FORMATS, 0) == text


def test_unknown_delimiter_is_a_logic_error() -> None:
    with pytest.raises(MarkupLogicError) as excinfo:
        render_match(TagMatch(0, 3, "%", "x"), NULL_TAG_FORMATS)
    assert excinfo.value.delimiter == "%"
