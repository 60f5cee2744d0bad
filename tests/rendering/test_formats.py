# topmark:header:start
#
#   project      : ConsMark
#   file         : test_formats.py
#   file_relpath : tests/rendering/test_formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the per-target format strategies."""

from __future__ import annotations

from consmark.core.levels import Level, MessageType
from consmark.markup.attributes import MessageAttributes, TagAttributes
from consmark.markup.tags import Tag
from consmark.rendering import ansi
from consmark.rendering.formats import (
    NULL_FORMAT,
    LoopbackFormat,
    ManPageFormat,
    MarkdownFormat,
    MessageFormat,
    TtyFormat,
    code_span,
    fenced_code_block,
    fitting_ticks,
    indent_code_block,
)
from tests.conftest import parametrize


def attrs(tag: Tag, delimiter: str = "", **kwargs: object) -> TagAttributes:
    return TagAttributes(tag, delimiter, **kwargs)  # type: ignore[arg-type]


# ---- helpers ----


@parametrize(
    ("ticks", "text", "expected"),
    [
        ("`", "code", "`code`"),
        ("``", "`x`", "`` `x` ``"),
        ("`", " a ", "`  a  `"),
        ("`", "   ", "`   `"),
        ("`", " a", "` a`"),
    ],
)
def test_code_span(ticks: str, text: str, expected: str) -> None:
    assert code_span(ticks, text) == expected


@parametrize(
    ("text", "expected"),
    [("plain", "`"), ("a `b` c", "``"), ("``` and `", "````")],
)
def test_fitting_ticks(text: str, expected: str) -> None:
    assert fitting_ticks(text) == expected


def test_indent_code_block_strips_fence_indent_from_first_line() -> None:
    attributes = attrs(Tag.CODE_BLOCK, "```", indent="  ")
    assert indent_code_block("  a\n  b", attributes) == "    a\n      b"


def test_fenced_code_block() -> None:
    attributes = attrs(Tag.CODE_BLOCK, "````", indent="  ", info_string="sh")
    assert fenced_code_block("  make", attributes) == "````sh\n  make\n  ````"


def test_fenced_code_block_empty_body() -> None:
    attributes = attrs(Tag.CODE_BLOCK, "```")
    assert fenced_code_block("", attributes) == "```\n```"


# ---- null and TTY ----


def test_null_format() -> None:
    assert NULL_FORMAT.apply("x", attrs(Tag.BOLD, "**")) == "x"
    assert NULL_FORMAT.apply("") == ""
    assert NULL_FORMAT.apply("a\nb", attrs(Tag.CODE_BLOCK, "```")) == "    a\n    b"


def test_tty_format_rewrites_nested_close_sequences() -> None:
    bold = TtyFormat.bold()
    inner = TtyFormat.faint().apply("b")
    out = bold.apply(f"a {inner} c")
    assert out == (
        f"{ansi.BOLD}a {ansi.FAINT}b{ansi.BOLD_NOT_FAINT} c{ansi.NOT_BOLD_NOT_FAINT}"
    )


def test_tty_format_empty_text_has_no_sequences() -> None:
    assert TtyFormat.bold().apply("") == ""


def test_tty_colour() -> None:
    fmt = TtyFormat.colour(ansi.GREEN_FG)
    assert fmt.apply("ok") == f"{ansi.GREEN_FG}ok{ansi.DEFAULT_FG}"


def test_tty_underline_without_colour_drops_inner_close() -> None:
    fmt = TtyFormat.underline()
    inner = TtyFormat.underline().apply("b")
    assert fmt.apply(f"a {inner}") == (
        f"{ansi.UNDERLINED}a {ansi.UNDERLINED}b{ansi.NOT_UNDERLINED}"
    )


# ---- literal-markup targets ----


@parametrize(
    ("attributes", "text", "expected"),
    [
        (attrs(Tag.HEADING, "##"), "H", "## H"),
        (attrs(Tag.HEADING, "___"), "H", "***H***"),
        (attrs(Tag.BOLD, "__"), "b", "**b**"),
        (attrs(Tag.ITALIC, "_"), "a `b`", "`` a `b` ``"),
        (attrs(Tag.ITALIC, "_", has_children=True), "**b**", "***b***"),
        (attrs(Tag.ITALIC, "*"), "\\*x", "`*x`"),
        (attrs(Tag.UNDERLINE, "<"), "u", "*<u>u</u>*"),
        (attrs(Tag.LOW_PRIORITY, "~~"), "s", "<small>s</small>"),
        (attrs(Tag.CODE_SPAN, "`"), "c", "**`c`**"),
        (attrs(Tag.DIFF_ADDITION, "+"), "+x", "+x"),
        (attrs(Tag.BOLD, "**"), "", ""),
    ],
)
def test_markdown_format(attributes: TagAttributes, text: str, expected: str) -> None:
    assert MarkdownFormat().apply(text, attributes) == expected


@parametrize(
    ("attributes", "text", "expected"),
    [
        (attrs(Tag.HEADING, "##"), "H", "# H"),
        (attrs(Tag.HEADING, "***"), "H", "***H***"),
        (attrs(Tag.BOLD, "**"), "b", "**b**"),
        (attrs(Tag.ITALIC, "*"), "i", "*i*"),
        (attrs(Tag.ITALIC, "_"), "i", "i"),
        (attrs(Tag.UNDERLINE, "<"), "u", "*u*"),
        (attrs(Tag.LOW_PRIORITY, "~~"), "s", "s"),
        (attrs(Tag.CODE_SPAN, "``"), "c", "**``c``**"),
    ],
)
def test_man_page_format(attributes: TagAttributes, text: str, expected: str) -> None:
    assert ManPageFormat().apply(text, attributes) == expected


@parametrize(
    ("attributes", "text", "expected"),
    [
        (attrs(Tag.HEADING, "##"), "H", "## H ##"),
        (attrs(Tag.HEADING, "___"), "H", "___H___"),
        (attrs(Tag.BOLD, "__"), "b", "__b__"),
        (attrs(Tag.ITALIC, "*"), "i", "*i*"),
        (attrs(Tag.UNDERLINE, "<"), "u", "<u>"),
        (attrs(Tag.LOW_PRIORITY, "~~"), "s", "~~s~~"),
        (attrs(Tag.CODE_SPAN, "``"), "`c`", "`` `c` ``"),
    ],
)
def test_loopback_format(attributes: TagAttributes, text: str, expected: str) -> None:
    assert LoopbackFormat().apply(text, attributes) == expected


def test_literal_formats_ignore_message_attributes() -> None:
    attributes = MessageAttributes(Level.INFO, MessageType.STANDARD)
    for fmt in (MarkdownFormat(), ManPageFormat(), LoopbackFormat()):
        assert fmt.apply("**x**", attributes) == "**x**"


# ---- messages ----


def test_message_format_skips_empty_parts() -> None:
    seen: list[MessageAttributes] = []

    class Recorder:
        def apply(self, text: str, attributes: object = None) -> str:
            assert isinstance(attributes, MessageAttributes)
            seen.append(attributes)
            return f"[{text}]"

    fmt = MessageFormat(Recorder(), Recorder(), Recorder())
    attributes = MessageAttributes(Level.NOTICE, MessageType.SUMMARY)

    assert fmt.apply("a", "", "> ", attributes) == "[> ][a]"
    assert [(a.is_prefix, a.is_msg1, a.is_msg2) for a in seen] == [
        (True, False, False),
        (False, True, False),
    ]
    assert fmt.apply("", None, "", attributes) == ""
