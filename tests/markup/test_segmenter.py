# topmark:header:start
#
#   project      : ConsMark
#   file         : test_segmenter.py
#   file_relpath : tests/markup/test_segmenter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `consmark.markup.segmenter`."""

from __future__ import annotations

import pytest

from consmark.markup.segmenter import (
    Block,
    Breaks,
    Span,
    Stray,
    Text,
    normalize_span,
    segment,
)
from tests.conftest import parametrize

SUBJECTS: list[str] = [
    "",
    "plain",
    "Run `make`\n```sh\nmake\n```",
    "a\n\n\nb\n",
    "` <== an unmatched backtick",
    "    ```php\n    <?php\n    $a = b($c);\n    ```\n\nafter",
    "```\nunterminated",
    "escaped \\` backtick and \\\nline break",
    "   \n\t\n",
    "trailing indent\n    ",
]


@parametrize("subject", SUBJECTS)
def test_segments_cover_subject(subject: str) -> None:
    """Joining the raw slices reproduces the input exactly."""
    assert "".join(s.raw for s in segment(subject)) == subject


def test_empty_subject_has_no_segments() -> None:
    assert segment("") == []


def test_segment_kinds_in_order() -> None:
    segs = segment("Run `make`\n```sh\nmake\n```")
    assert [type(s) for s in segs] == [Text, Span, Breaks, Block]

    span = segs[1]
    assert isinstance(span, Span)
    assert span.ticks == "`"
    assert span.body == "make"
    assert span.indent is None

    block = segs[3]
    assert isinstance(block, Block)
    assert block.fence == "```"
    assert block.info == "sh"
    assert block.body == "make"
    assert block.indent == ""


def test_text_keeps_trailing_blank_lines() -> None:
    segs = segment("para one\n\npara two")
    assert [type(s) for s in segs] == [Text, Text]
    assert segs[0].raw == "para one\n\n"


def test_unmatched_backtick_is_stray() -> None:
    segs = segment("` <== an unmatched backtick")
    assert isinstance(segs[0], Stray)
    assert segs[0].ticks == "`"
    assert isinstance(segs[1], Text)
    assert segs[1].text == " <== an unmatched backtick"


def test_escaped_backtick_stays_in_text() -> None:
    segs = segment("a \\` b")
    assert len(segs) == 1
    assert isinstance(segs[0], Text)


def test_span_closer_must_have_same_length() -> None:
    segs = segment("`` `code` ``")
    assert len(segs) == 1
    span = segs[0]
    assert isinstance(span, Span)
    assert span.ticks == "``"
    assert span.body == "`code`"


def test_indented_block_keeps_indent() -> None:
    segs = segment("    ```php\n    x\n    ```")
    assert len(segs) == 1
    block = segs[0]
    assert isinstance(block, Block)
    assert block.indent == "    "
    assert block.info == "php"
    assert block.body == "    x"


def test_block_runs_to_end_of_input_without_closer() -> None:
    segs = segment("```\ncode")
    assert len(segs) == 1
    block = segs[0]
    assert isinstance(block, Block)
    assert block.body == "code"


def test_block_with_empty_body() -> None:
    block = segment("```\n```")[0]
    assert isinstance(block, Block)
    assert block.body == ""


def test_backtick_fence_mid_line_is_not_a_block() -> None:
    segs = segment("see ```x``` here")
    assert not any(isinstance(s, Block) for s in segs)


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ("a\nb", "a b"),
        (" a ", "a"),
        ("  a  ", " a "),
        ("  ", "  "),
        (" a", " a"),
        ("", ""),
    ],
)
def test_normalize_span(body: str, expected: str) -> None:
    assert normalize_span(body) == expected
