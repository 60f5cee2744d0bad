# topmark:header:start
#
#   project      : ConsMark
#   file         : formats.py
#   file_relpath : src/consmark/rendering/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format strategies.

A format turns the text of one tag (or one message part) into output for a
rendering target. All formats are immutable and share the `Format` protocol:

- `NullFormat`: identity (inline tags disappear); code blocks are re-indented.
- `TtyFormat`: encloses text in ANSI sequences and rewrites nested close
  sequences so inner styles never reset outer ones.
- `MarkdownFormat`, `ManPageFormat`, `LoopbackFormat`: emit literal markup for
  their target, dispatching on the tag.
- `MessageFormat`: three formats for a message's prefix, primary and
  secondary parts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Final, Protocol, Union

from consmark.markup.attributes import MessageAttributes, TagAttributes
from consmark.markup.escapes import unescape_tags
from consmark.markup.tags import Tag
from consmark.rendering import ansi

if TYPE_CHECKING:
    from collections.abc import Mapping

Attributes = Union[TagAttributes, MessageAttributes, None]

_BACKTICK_RUN_RE: Final[re.Pattern[str]] = re.compile(r"`+")


class Format(Protocol):
    """Capability shared by every format strategy."""

    def apply(self, text: str, attributes: Attributes = None) -> str:
        """Return ``text`` rendered for this format's target."""
        ...


def _is_code_block(attributes: Attributes) -> bool:
    return isinstance(attributes, TagAttributes) and attributes.tag is Tag.CODE_BLOCK


def indent_code_block(text: str, attributes: TagAttributes) -> str:
    """Re-indent a fenced code block body for inline-style targets.

    The block's own indentation is removed from the first line, then every
    line is indented by four spaces.
    """
    indent = attributes.indent or ""
    if indent and text.startswith(indent):
        text = text[len(indent) :]
    return "    " + text.replace("\n", "\n    ")


def fenced_code_block(text: str, attributes: TagAttributes) -> str:
    """Re-emit a fenced code block with its original fence and info string.

    The indentation of the opening fence is not included: it precedes the
    block in the surrounding output already.
    """
    fence = attributes.open_delimiter
    indent = attributes.indent or ""
    opening = fence + (attributes.info_string or "") + "\n"
    if text == "":
        return opening + indent + fence
    return opening + text + "\n" + indent + fence


def code_span(ticks: str, text: str) -> str:
    """Return ``text`` as a code span, padding it where CommonMark would strip."""
    if text.startswith("`") or text.endswith("`") or (
        len(text) >= 2 and text[0] == " " and text[-1] == " " and text.strip(" ")
    ):
        text = f" {text} "
    return ticks + text + ticks


def fitting_ticks(text: str) -> str:
    """Return the shortest backtick run that does not occur in ``text``."""
    longest = max((len(m.group(0)) for m in _BACKTICK_RUN_RE.finditer(text)), default=0)
    return "`" * (longest + 1)


@dataclass(frozen=True, slots=True)
class NullFormat:
    """Identity format; the fallback of every registry."""

    def apply(self, text: str, attributes: Attributes = None) -> str:
        if text == "":
            return ""
        if _is_code_block(attributes):
            assert isinstance(attributes, TagAttributes)
            return indent_code_block(text, attributes)
        return text


NULL_FORMAT: Final[NullFormat] = NullFormat()


@dataclass(frozen=True, slots=True)
class TtyFormat:
    """Enclose text in ANSI sequences.

    Attributes:
        before (str): Sequence emitted before the text.
        after (str): Sequence emitted after the text.
        replace (Mapping[str, str]): Substrings rewritten inside the text, in
            order, before it is enclosed. Used to turn the close sequence of a
            nested style back into this style's open sequence.
    """

    before: str = ""
    after: str = ""
    replace: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def apply(self, text: str, attributes: Attributes = None) -> str:
        if text == "":
            return ""
        if _is_code_block(attributes):
            assert isinstance(attributes, TagAttributes)
            text = indent_code_block(text, attributes)
        for search, repl in self.replace.items():
            text = text.replace(search, repl)
        text = self.before + text
        if not self.after:
            return text
        # Keep a trailing carriage return outside the styled run
        if text.endswith("\r"):
            return text[:-1] + self.after + "\r"
        return text + self.after

    @classmethod
    def colour(cls, fg: str) -> TtyFormat:
        return cls(fg, ansi.DEFAULT_FG, MappingProxyType({ansi.DEFAULT_FG: fg}))

    @classmethod
    def bold(cls, fg: str | None = None) -> TtyFormat:
        if fg is None:
            return cls(
                ansi.BOLD,
                ansi.NOT_BOLD_NOT_FAINT,
                MappingProxyType({ansi.NOT_BOLD_NOT_FAINT: ansi.BOLD_NOT_FAINT}),
            )
        return cls(
            ansi.BOLD + fg,
            ansi.DEFAULT_FG + ansi.NOT_BOLD_NOT_FAINT,
            MappingProxyType(
                {ansi.NOT_BOLD_NOT_FAINT: ansi.BOLD_NOT_FAINT, ansi.DEFAULT_FG: fg}
            ),
        )

    @classmethod
    def faint(cls, fg: str | None = None) -> TtyFormat:
        if fg is None:
            return cls(
                ansi.FAINT,
                ansi.NOT_BOLD_NOT_FAINT,
                MappingProxyType({ansi.NOT_BOLD_NOT_FAINT: ansi.FAINT_NOT_BOLD}),
            )
        return cls(
            ansi.FAINT + fg,
            ansi.DEFAULT_FG + ansi.NOT_BOLD_NOT_FAINT,
            MappingProxyType(
                {ansi.NOT_BOLD_NOT_FAINT: ansi.FAINT_NOT_BOLD, ansi.DEFAULT_FG: fg}
            ),
        )

    @classmethod
    def underline(cls, fg: str | None = None) -> TtyFormat:
        if fg is None:
            return cls(
                ansi.UNDERLINED,
                ansi.NOT_UNDERLINED,
                MappingProxyType({ansi.NOT_UNDERLINED: ""}),
            )
        return cls(
            fg + ansi.UNDERLINED,
            ansi.NOT_UNDERLINED + ansi.DEFAULT_FG,
            MappingProxyType({ansi.DEFAULT_FG: fg, ansi.NOT_UNDERLINED: ""}),
        )


@dataclass(frozen=True, slots=True)
class MarkdownFormat:
    """Render tags as Markdown."""

    def apply(self, text: str, attributes: Attributes = None) -> str:
        if not isinstance(attributes, TagAttributes):
            return text
        match attributes.tag:
            case Tag.CODE_BLOCK:
                return fenced_code_block(text, attributes)
            case Tag.CODE_SPAN:
                return f"**{code_span(attributes.open_delimiter, text)}**"
        if text == "":
            return ""
        match attributes.tag:
            case Tag.HEADING:
                return f"## {text}" if attributes.open_delimiter == "##" else f"***{text}***"
            case Tag.BOLD:
                return f"**{text}**"
            case Tag.ITALIC:
                if attributes.has_children:
                    return f"*{text}*"
                plain = unescape_tags(text)
                return code_span(fitting_ticks(plain), plain)
            case Tag.UNDERLINE:
                return f"*<u>{text}</u>*"
            case Tag.LOW_PRIORITY:
                return f"<small>{text}</small>"
            case _:
                return text


@dataclass(frozen=True, slots=True)
class ManPageFormat:
    """Render tags as Pandoc Markdown for man pages."""

    def apply(self, text: str, attributes: Attributes = None) -> str:
        if not isinstance(attributes, TagAttributes):
            return text
        match attributes.tag:
            case Tag.CODE_BLOCK:
                return fenced_code_block(text, attributes)
            case Tag.CODE_SPAN:
                return f"**{code_span(attributes.open_delimiter, text)}**"
        if text == "":
            return ""
        match attributes.tag:
            case Tag.HEADING:
                return f"# {text}" if attributes.open_delimiter == "##" else f"***{text}***"
            case Tag.BOLD:
                return f"**{text}**"
            case Tag.ITALIC:
                return f"*{text}*" if attributes.open_delimiter == "*" else text
            case Tag.UNDERLINE:
                return f"*{text}*"
            case _:
                return text


@dataclass(frozen=True, slots=True)
class LoopbackFormat:
    """Reproduce the original markup of every tag."""

    def apply(self, text: str, attributes: Attributes = None) -> str:
        if not isinstance(attributes, TagAttributes):
            return text
        delimiter = attributes.open_delimiter
        match attributes.tag:
            case Tag.CODE_BLOCK:
                return fenced_code_block(text, attributes)
            case Tag.CODE_SPAN:
                return code_span(delimiter, text)
            case Tag.HEADING if delimiter == "##":
                return f"## {text} ##"
            case Tag.UNDERLINE:
                return f"<{text}>"
            case Tag.HEADING | Tag.BOLD | Tag.ITALIC | Tag.LOW_PRIORITY:
                return delimiter + text + delimiter
            case _:
                return text


@dataclass(frozen=True, slots=True)
class MessageFormat:
    """Formats for the three parts of a message.

    Each part is formatted only if it is not empty; the result is
    ``prefix + msg1 + msg2``.
    """

    msg1_format: Format = NULL_FORMAT
    msg2_format: Format = NULL_FORMAT
    prefix_format: Format = NULL_FORMAT

    def apply(
        self,
        msg1: str,
        msg2: str | None,
        prefix: str,
        attributes: MessageAttributes,
    ) -> str:
        parts: list[str] = []
        if prefix:
            parts.append(self.prefix_format.apply(prefix, attributes.with_is_prefix()))
        if msg1:
            parts.append(self.msg1_format.apply(msg1, attributes.with_is_msg1()))
        if msg2:
            parts.append(self.msg2_format.apply(msg2, attributes.with_is_msg2()))
        return "".join(parts)


NULL_MESSAGE_FORMAT: Final[MessageFormat] = MessageFormat()
