# topmark:header:start
#
#   project      : ConsMark
#   file         : formatter.py
#   file_relpath : src/consmark/markup/formatter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The console markup formatter.

`Formatter.format` runs the whole pipeline:

1. The input is split into segments (`consmark.markup.segmenter`).
2. Tags in text segments, code spans and code blocks are rendered, and each
   is replaced in a *working string* by a placeholder of the same visible
   length. Every placeholder is recorded in the replacement ledger.
3. Backslash escapes in the working string are resolved. Ledger offsets are
   shifted by the length each resolution removes.
4. The working string is wrapped. Wrapping only turns spaces into newlines,
   so recorded offsets stay valid.
5. Ledger entries are applied rightmost first.

Placeholders use two reserved forms: ``x`` runs (spaces kept) for formatted
text and escaped spaces, and ``\\x`` for an escaped space that must survive
wrapping verbatim. Neither can be split by the wrapper.

Example:
    ```python
    from consmark.markup.formatter import Formatter

    Formatter.remove_tags("**bold** and _em_")  # 'bold and em'
    ```
"""

from __future__ import annotations

import copy
import re
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, ClassVar, Final

from consmark.config.logging import get_logger
from consmark.core.levels import Level, MessageType
from consmark.markup import escapes
from consmark.markup.attributes import MessageAttributes, TagAttributes
from consmark.markup.ledger import Replacement, apply_replacements, wrap_breaks
from consmark.markup.matcher import find_tags, render_match
from consmark.markup.segmenter import Block, Breaks, Span, Stray, Text, segment
from consmark.markup.spinner import SpinnerState
from consmark.markup.tags import Tag
from consmark.markup.wrap import WrapWidth, unwrap_segment, wrap
from consmark.rendering.registry import (
    LOOPBACK_TAG_FORMATS,
    NULL_MESSAGE_FORMATS,
    NULL_TAG_FORMATS,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from consmark.config.logging import ConsmarkLogger
    from consmark.rendering.registry import MessageFormats, TagFormats

    WidthCallback = Callable[[], "int | None"]

logger: ConsmarkLogger = get_logger(__name__)

DEFAULT_LEVEL_PREFIXES: Final[Mapping[Level, str]] = MappingProxyType(
    {
        Level.EMERGENCY: "! ",
        Level.ALERT: "! ",
        Level.CRITICAL: "! ",
        Level.ERROR: "! ",
        Level.WARNING: "^ ",
        Level.NOTICE: "➤ ",
        Level.INFO: "- ",
        Level.DEBUG: ": ",
    }
)

DEFAULT_TYPE_PREFIXES: Final[Mapping[MessageType, str]] = MappingProxyType(
    {
        MessageType.PROGRESS: "⠿ ",
        MessageType.GROUP_START: "» ",
        MessageType.GROUP_END: "« ",
        MessageType.SUMMARY: "» ",
        MessageType.SUCCESS: "✔ ",
        MessageType.FAILURE: "✘ ",
    }
)

_DIFF_LINE_RE: Final[re.Pattern[str]] = re.compile(r"^(-{3}|\+{3}|[-+@]).*", re.MULTILINE)

_DIFF_TAGS: Final[Mapping[str, Tag]] = MappingProxyType(
    {
        "---": Tag.DIFF_HEADER,
        "+++": Tag.DIFF_HEADER,
        "@": Tag.DIFF_RANGE,
        "+": Tag.DIFF_ADDITION,
        "-": Tag.DIFF_REMOVAL,
    }
)

_NOT_SPACE_RE: Final[re.Pattern[str]] = re.compile(r"[^ ]")


def _placeholder(text: str) -> str:
    return _NOT_SPACE_RE.sub("x", text)


class Formatter:
    """Format console markup for one rendering target.

    A formatter is immutable apart from its spinner state. The ``with_*``
    methods return modified copies.

    Args:
        tag_formats (TagFormats | None): Tag formats of the target; defaults to
            the null formats (tags removed).
        message_formats (MessageFormats | None): Message formats of the target.
        width_callback (Callable[[], int | None] | None): Returns the current
            output width, or ``None`` if it is unknown. Consulted when a wrap
            width is zero or negative.
        level_prefixes (Mapping[Level, str] | None): Message prefixes by level.
        type_prefixes (Mapping[MessageType, str] | None): Message prefixes by type.
        spinner_state (SpinnerState | None): Spinner used for progress prefixes.
    """

    _lock: ClassVar[RLock] = RLock()
    _default: ClassVar[Formatter | None] = None
    _loopback: ClassVar[Formatter | None] = None

    def __init__(
        self,
        tag_formats: TagFormats | None = None,
        message_formats: MessageFormats | None = None,
        width_callback: WidthCallback | None = None,
        level_prefixes: Mapping[Level, str] | None = None,
        type_prefixes: Mapping[MessageType, str] | None = None,
        spinner_state: SpinnerState | None = None,
    ) -> None:
        self.tag_formats: TagFormats = tag_formats if tag_formats is not None else NULL_TAG_FORMATS
        self.message_formats: MessageFormats = (
            message_formats if message_formats is not None else NULL_MESSAGE_FORMATS
        )
        self.width_callback: WidthCallback | None = width_callback
        self.level_prefixes: Mapping[Level, str] = (
            DEFAULT_LEVEL_PREFIXES
            if level_prefixes is None
            else MappingProxyType(dict(level_prefixes))
        )
        self.type_prefixes: Mapping[MessageType, str] = (
            DEFAULT_TYPE_PREFIXES
            if type_prefixes is None
            else MappingProxyType(dict(type_prefixes))
        )
        self.spinner_state: SpinnerState = spinner_state or SpinnerState()

    # ---- shared instances ----

    @classmethod
    def default(cls) -> Formatter:
        """Return the shared formatter with null formats (created on first use)."""
        with cls._lock:
            if cls._default is None:
                cls._default = cls()
            return cls._default

    @classmethod
    def loopback(cls) -> Formatter:
        """Return the shared formatter that re-emits markup (created on first use)."""
        with cls._lock:
            if cls._loopback is None:
                cls._loopback = cls(LOOPBACK_TAG_FORMATS)
            return cls._loopback

    # ---- copy-on-write ----

    @property
    def removes_escapes(self) -> bool:
        return self.tag_formats.remove_escapes

    @property
    def wraps_after_formatting(self) -> bool:
        return self.tag_formats.wrap_after

    def _with(self, **changes: object) -> Formatter:
        clone = copy.copy(self)
        for name, value in changes.items():
            setattr(clone, name, value)
        return clone

    def with_remove_escapes(self, remove: bool = True) -> Formatter:
        return self._with(tag_formats=self.tag_formats.with_remove_escapes(remove))

    def with_wrap_after_formatting(self, value: bool = True) -> Formatter:
        return self._with(tag_formats=self.tag_formats.with_wrap_after(value))

    def with_spinner_state(self, spinner_state: SpinnerState) -> Formatter:
        """Return a copy that shares ``spinner_state`` (e.g. with another formatter)."""
        return self._with(spinner_state=spinner_state)

    # ---- formatting ----

    def format(
        self,
        text: str,
        unwrap: bool = False,
        wrap_to: WrapWidth | None = None,
        unformat: bool = False,
        brk: str = "\n",
    ) -> str:
        """Format markup for this formatter's target.

        Args:
            text (str): Markup to format.
            unwrap (bool): Join hard-wrapped lines before formatting.
            wrap_to (int | tuple[int, int] | None): Wrap width, or a
                ``(first_line, other_lines)`` pair. A value of zero or less is
                added to the width reported by the width callback; if the
                callback reports no width, the text is not wrapped.
            unformat (bool): Re-emit the original markup instead of formatting it,
                while still unwrapping and wrapping as requested.
            brk (str): Sequence used for line breaks inserted by wrapping.

        Returns:
            str: The formatted text.

        Raises:
            MarkupParseError: If the input cannot be segmented.
            MarkupLogicError: If a matched delimiter has no tag.
        """
        if text in ("", "\r"):
            return text

        append = ""
        if text.endswith("\r"):
            append = "\r"
            text = text[:-1]
        text = text.replace("\r\n", "\n").replace("\r", "\n")

        remove_escapes = self.removes_escapes
        wrap_after = self.wraps_after_formatting
        wrap_formats = self.tag_formats if wrap_after else NULL_TAG_FORMATS
        formats = self.loopback().tag_formats if unformat else self.tag_formats

        out, ledger = self._apply_segments(text, unwrap, wrap_formats, formats)
        tagged = len(ledger)

        out, ledger = self._resolve_escapes(
            out,
            ledger,
            unformat=unformat,
            remove_escapes=remove_escapes,
            wrap_after=wrap_after,
        )

        width = self._resolve_width(wrap_to)
        if width is not None:
            wrapped = wrap(out, width)
            ledger = wrap_breaks(out, wrapped, ledger, brk)
            out = wrapped if brk == "\n" else out

        logger.trace(
            "applying %d replacement(s) (%d from tags)", len(ledger), tagged
        )
        return apply_replacements(out, ledger, resort=len(ledger) != tagged) + append

    def _apply_segments(
        self,
        text: str,
        unwrap: bool,
        wrap_formats: TagFormats,
        formats: TagFormats,
    ) -> tuple[str, list[Replacement]]:
        """Build the working string and the tag, span and block entries."""
        out = ""
        ledger: list[Replacement] = []

        for seg in segment(text):
            indent = seg.indent or ""
            match seg:
                case Breaks(text=breaks):
                    if unwrap and "\n" in breaks:
                        breaks = unwrap_segment(breaks)
                    out += indent + breaks
                    continue
                case Stray(ticks=ticks):
                    out += indent + ticks
                    continue

            base = len(out) + len(indent)

            match seg:
                case Text(text=body):
                    if unwrap:
                        body = unwrap_segment(body)
                    out += indent + self._apply_tags(body, base, wrap_formats, formats, ledger)

                case Block(fence=fence, info=info, body=body):
                    # Reinstate the newline unwrapping removed before the block
                    if unwrap and out and not out.endswith("\n"):
                        out = out[:-1] + "\n"
                    attributes = TagAttributes(
                        Tag.CODE_BLOCK,
                        fence,
                        0,
                        False,
                        indent,
                        info.strip() or None,
                    )
                    ledger.append(Replacement(base, 1, formats.apply(body, attributes)))
                    out += indent + "?"

                case Span(ticks=ticks, body=body):
                    attributes = TagAttributes(Tag.CODE_SPAN, ticks)
                    shadow = wrap_formats.apply(body, attributes)
                    placeholder = _placeholder(shadow)
                    formatted = (
                        shadow if wrap_formats is formats else formats.apply(body, attributes)
                    )
                    ledger.append(Replacement(base, len(placeholder), formatted, shadow))
                    out += indent + placeholder

        return out, ledger

    @staticmethod
    def _apply_tags(
        body: str,
        base: int,
        wrap_formats: TagFormats,
        formats: TagFormats,
        ledger: list[Replacement],
    ) -> str:
        """Replace each top-level tag in ``body`` by its placeholder."""
        parts: list[str] = []
        pos = 0
        adjust = 0
        for match in find_tags(body):
            shadow = render_match(match, wrap_formats)
            placeholder = _placeholder(shadow)
            formatted = shadow if wrap_formats is formats else render_match(match, formats)
            ledger.append(
                Replacement(base + match.start + adjust, len(placeholder), formatted, shadow)
            )
            adjust += len(placeholder) - (match.end - match.start)
            parts.append(body[pos : match.start])
            parts.append(placeholder)
            pos = match.end
        parts.append(body[pos:])
        return "".join(parts)

    @staticmethod
    def _resolve_escapes(
        out: str,
        ledger: list[Replacement],
        *,
        unformat: bool,
        remove_escapes: bool,
        wrap_after: bool,
    ) -> tuple[str, list[Replacement]]:
        """Resolve backslash escapes in the working string.

        Escapes are removed (or turned into placeholders) and the offsets of
        entries recorded after each escape are shifted accordingly. Where the
        escape must reappear in the output, an entry restores it.
        """
        tagged = list(ledger)
        original = [entry.offset for entry in tagged]
        added: list[Replacement] = []
        adjust = 0
        preserve = wrap_after and not remove_escapes

        def resolve(m: re.Match[str]) -> str:
            nonlocal adjust
            raw = m.group(0)
            char = escapes.escaped_char(m)

            if preserve:
                # Keep "\ " in one piece while wrapping
                if char != " ":
                    return raw
                added.append(Replacement(m.start() + adjust, 2, raw))
                return "\\x"

            delta = len(char) - len(raw)
            for i, offset in enumerate(original):
                if offset >= m.start():
                    tagged[i] = tagged[i].shifted(delta)

            placeholder = "x" if char == " " else None
            if unformat or not remove_escapes or placeholder is not None:
                added.append(
                    Replacement(
                        m.start() + adjust,
                        len(char),
                        raw if unformat or not remove_escapes else char,
                    )
                )
            adjust += delta
            return placeholder if placeholder is not None else char

        out = escapes.ESCAPE_RE.sub(resolve, out)
        return out, tagged + added

    def _resolve_width(self, wrap_to: WrapWidth | None) -> WrapWidth | None:
        """Resolve relative wrap widths against the width callback."""
        if wrap_to is None:
            return None

        reported: int | None = None
        queried = False

        def add_to_reported(value: int) -> int | None:
            nonlocal reported, queried
            if value > 0:
                return value
            if not queried:
                reported = self.width_callback() if self.width_callback else None
                queried = True
            if reported is None:
                return None
            return max(0, value + reported)

        if isinstance(wrap_to, int):
            width = add_to_reported(wrap_to)
            resolved: WrapWidth | None = width
        else:
            first = add_to_reported(wrap_to[0])
            rest = add_to_reported(wrap_to[1])
            resolved = None if first is None or rest is None else (first, rest)

        if resolved is None:
            logger.debug("no width available for wrap_to=%r; not wrapping", wrap_to)
        else:
            logger.trace("wrapping to %r", resolved)
        return resolved

    def format_diff(self, diff: str) -> str:
        """Format the header, range, addition and removal lines of a unified diff."""

        def apply(m: re.Match[str]) -> str:
            prefix = m.group(1)
            tag = _DIFF_TAGS[prefix]
            return self.tag_formats.apply(m.group(0), TagAttributes(tag, prefix))

        return _DIFF_LINE_RE.sub(apply, diff)

    def format_message(
        self,
        msg1: str,
        msg2: str | None = None,
        level: Level = Level.INFO,
        msg_type: MessageType = MessageType.STANDARD,
    ) -> str:
        """Format a message with its prefix.

        Message text is not parsed for markup here; callers format it first
        if needed.
        """
        attributes = MessageAttributes(level, msg_type)
        if msg_type is MessageType.UNFORMATTED:
            formats = NULL_MESSAGE_FORMATS
            prefix = ""
        else:
            formats = self.message_formats
            prefix = self.get_message_prefix(level, msg_type)
        return formats.get(level, msg_type).apply(msg1, msg2, prefix, attributes)

    def get_message_prefix(
        self,
        level: Level,
        msg_type: MessageType = MessageType.STANDARD,
    ) -> str:
        """Return the prefix for a message.

        Progress messages get the current spinner frame, which may advance
        the spinner.
        """
        match msg_type:
            case MessageType.UNDECORATED | MessageType.UNFORMATTED:
                return ""
            case MessageType.PROGRESS:
                return self.spinner_state.next_prefix()
        prefix = self.type_prefixes.get(msg_type)
        if prefix is None:
            prefix = self.level_prefixes.get(level, "")
        return prefix

    # ---- static helpers ----

    @staticmethod
    def escape_tags(text: str, escape_newlines: bool = False) -> str:
        return escapes.escape_tags(text, escape_newlines)

    @staticmethod
    def unescape_tags(text: str) -> str:
        return escapes.unescape_tags(text)

    @classmethod
    def remove_tags(cls, text: str) -> str:
        """Return ``text`` with tags and escapes removed."""
        return cls.default().format(text)
