# topmark:header:start
#
#   project      : ConsMark
#   file         : targets.py
#   file_relpath : src/consmark/rendering/targets.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output targets and their formatters.

Each `OutputTarget` has one `TagFormats` and one `MessageFormats` registry,
built on first use and cached for the life of the process (the formatter
relies on registry identity). `formatter_for` wraps them in a new
`Formatter`.

| Target     | Tags            | Escapes   | Wraps             |
|------------|-----------------|-----------|-------------------|
| `plain`    | removed         | removed   | before formatting |
| `tty`      | ANSI styles     | removed   | before formatting |
| `markdown` | Markdown        | preserved | after formatting  |
| `man`      | Pandoc Markdown | preserved | after formatting  |
| `loopback` | original markup | preserved | after formatting  |
"""

from __future__ import annotations

from functools import cache
from typing import TYPE_CHECKING

from consmark.core.enum_mixins import KeyedStrEnum
from consmark.core.levels import (
    LEVELS_ERRORS,
    LEVELS_ERRORS_AND_WARNINGS,
    LEVELS_INFO,
    TYPES_ALL,
    TYPES_GROUP,
    Level,
    MessageType,
)
from consmark.markup.formatter import Formatter
from consmark.markup.tags import Tag
from consmark.rendering import ansi
from consmark.rendering.formats import (
    NULL_FORMAT,
    ManPageFormat,
    MarkdownFormat,
    MessageFormat,
    TtyFormat,
)
from consmark.rendering.registry import (
    LOOPBACK_TAG_FORMATS,
    NULL_MESSAGE_FORMATS,
    NULL_TAG_FORMATS,
    MessageFormats,
    TagFormats,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from consmark.markup.spinner import SpinnerState


class OutputTarget(KeyedStrEnum):
    """Where formatted output is going."""

    PLAIN = ("plain", "Plain text", ("text", "null"))
    TTY = ("tty", "ANSI terminal", ("ansi", "terminal"))
    MARKDOWN = ("markdown", "Markdown", ("md",))
    MAN = ("man", "Man page (Pandoc Markdown)", ("manpage", "man_page"))
    LOOPBACK = ("loopback", "Original markup", ("markup",))


def _tty_tag_formats() -> TagFormats:
    bold = TtyFormat.bold()
    return (
        TagFormats()
        .with_format(Tag.HEADING, TtyFormat.bold(ansi.CYAN_FG))
        .with_format(Tag.BOLD, bold)
        .with_format(Tag.ITALIC, TtyFormat.colour(ansi.YELLOW_FG))
        .with_format(Tag.UNDERLINE, TtyFormat.underline(ansi.YELLOW_FG))
        .with_format(Tag.LOW_PRIORITY, TtyFormat.faint())
        .with_format(Tag.CODE_SPAN, bold)
        .with_format(Tag.DIFF_HEADER, bold)
        .with_format(Tag.DIFF_RANGE, TtyFormat.colour(ansi.CYAN_FG))
        .with_format(Tag.DIFF_ADDITION, TtyFormat.colour(ansi.GREEN_FG))
        .with_format(Tag.DIFF_REMOVAL, TtyFormat.colour(ansi.RED_FG))
    )


def _tty_message_formats() -> MessageFormats:
    null = NULL_FORMAT
    bold = TtyFormat.bold()
    faint = TtyFormat.faint()
    bold_red = TtyFormat.bold(ansi.RED_FG)
    bold_green = TtyFormat.bold(ansi.GREEN_FG)
    bold_yellow = TtyFormat.bold(ansi.YELLOW_FG)
    bold_magenta = TtyFormat.bold(ansi.MAGENTA_FG)
    bold_cyan = TtyFormat.bold(ansi.CYAN_FG)
    green = TtyFormat.colour(ansi.GREEN_FG)
    yellow = TtyFormat.colour(ansi.YELLOW_FG)
    cyan = TtyFormat.colour(ansi.CYAN_FG)

    return (
        MessageFormats()
        .with_format(LEVELS_ERRORS, TYPES_ALL, MessageFormat(bold_red, null, bold_red))
        .with_format(Level.WARNING, TYPES_ALL, MessageFormat(yellow, null, bold_yellow))
        .with_format(Level.NOTICE, TYPES_ALL, MessageFormat(bold, cyan, bold_cyan))
        .with_format(Level.INFO, TYPES_ALL, MessageFormat(null, yellow, yellow))
        .with_format(Level.DEBUG, TYPES_ALL, MessageFormat(faint, faint, faint))
        .with_format(LEVELS_INFO, MessageType.PROGRESS, MessageFormat(null, yellow, yellow))
        .with_format(LEVELS_INFO, TYPES_GROUP, MessageFormat(bold_magenta, null, bold_magenta))
        .with_format(LEVELS_INFO, MessageType.SUMMARY, MessageFormat(null, null, bold))
        .with_format(LEVELS_INFO, MessageType.SUCCESS, MessageFormat(green, null, bold_green))
        .with_format(
            LEVELS_ERRORS_AND_WARNINGS,
            MessageType.FAILURE,
            MessageFormat(yellow, null, bold_yellow),
        )
    )


@cache
def tag_formats_for(target: OutputTarget) -> TagFormats:
    """Return the (shared) tag formats of ``target``."""
    match target:
        case OutputTarget.TTY:
            return _tty_tag_formats()
        case OutputTarget.MARKDOWN:
            return TagFormats(remove_escapes=False, wrap_after=True, fallback=MarkdownFormat())
        case OutputTarget.MAN:
            return TagFormats(remove_escapes=False, wrap_after=True, fallback=ManPageFormat())
        case OutputTarget.LOOPBACK:
            return LOOPBACK_TAG_FORMATS
        case _:
            return NULL_TAG_FORMATS


@cache
def message_formats_for(target: OutputTarget) -> MessageFormats:
    """Return the (shared) message formats of ``target``."""
    if target is OutputTarget.TTY:
        return _tty_message_formats()
    return NULL_MESSAGE_FORMATS


def formatter_for(
    target: OutputTarget,
    width_callback: Callable[[], int | None] | None = None,
    *,
    level_prefixes: Mapping[Level, str] | None = None,
    type_prefixes: Mapping[MessageType, str] | None = None,
    spinner_state: SpinnerState | None = None,
) -> Formatter:
    """Return a new formatter for ``target``.

    Args:
        target (OutputTarget): Rendering target.
        width_callback (Callable[[], int | None] | None): Width provider for
            relative wrap widths.
        level_prefixes (Mapping[Level, str] | None): Overrides the default
            level prefixes.
        type_prefixes (Mapping[MessageType, str] | None): Overrides the default
            type prefixes.
        spinner_state (SpinnerState | None): Spinner to share with other formatters.

    Returns:
        Formatter: A formatter using the target's shared registries.
    """
    return Formatter(
        tag_formats_for(target),
        message_formats_for(target),
        width_callback,
        level_prefixes=level_prefixes,
        type_prefixes=type_prefixes,
        spinner_state=spinner_state,
    )
