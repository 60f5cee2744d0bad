# topmark:header:start
#
#   project      : ConsMark
#   file         : wrap.py
#   file_relpath : src/consmark/markup/wrap.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Word wrapping and Markdown-aware unwrapping.

`wordwrap` never changes the length of its input: it only turns spaces into
newlines. The formatter relies on this to keep recorded replacement offsets
valid across wrapping.

`unwrap` joins hard-wrapped lines back into paragraphs while keeping
paragraph breaks, list items, indented code and escaped line breaks.
"""

from __future__ import annotations

import re
from typing import Final, Union

from consmark.config.logging import get_logger

logger = get_logger(__name__)

WrapWidth = Union[int, tuple[int, int]]

# A run of backslashes of even length (possibly empty) that is not itself
# escaped; used to anchor patterns that must not follow an escape.
_UNESCAPED: Final[str] = r"(?<!\\)((?:\\\\)*)"

_TRAILING_HSPACE_RE: Final[re.Pattern[str]] = re.compile(_UNESCAPED + r"[ \t]+\n")
_SOFT_NEWLINE_RE: Final[re.Pattern[str]] = re.compile(
    _UNESCAPED + r"(?<!\n)\n(?!\n|    |\t|(?:[-+*]|[0-9]+[).])[ \t])"
)
_BLANK_LINES_RE: Final[re.Pattern[str]] = re.compile(r"\n{3,}")


def wordwrap(text: str, width: int) -> str:
    """Wrap ``text`` at ``width`` columns by replacing spaces with newlines.

    Existing newlines reset the column. Words longer than ``width`` are never
    cut; they overflow onto their own line.

    Args:
        text (str): Text to wrap.
        width (int): Maximum line width (0 breaks at every space).

    Returns:
        str: The wrapped text, always the same length as ``text``.
    """
    if not text:
        return text
    out = list(text)
    last_start = last_space = 0
    for cur, c in enumerate(text):
        if c == "\n":
            last_start = last_space = cur + 1
        elif c == " ":
            if cur - last_start >= width:
                out[cur] = "\n"
                last_start = cur + 1
            last_space = cur
        elif cur - last_start >= width and last_start != last_space:
            out[last_space] = "\n"
            last_start = last_space + 1
    return "".join(out)


def wrap(text: str, width: WrapWidth) -> str:
    """Wrap ``text`` to a single width or a ``(first_line, other_lines)`` pair.

    With a pair, a narrower first line is produced by padding the start of
    the text before wrapping; a wider first line by wrapping only what
    follows its extra characters.
    """
    if isinstance(width, int):
        return wordwrap(text, width)

    first, rest = width
    delta = rest - first
    if delta == 0:
        return wordwrap(text, rest)
    if delta < 0:
        return text[:-delta] + wordwrap(text[-delta:], rest)
    return wordwrap("x" * delta + text, rest)[delta:]


def unwrap(text: str) -> str:
    """Undo hard wrapping, preserving Markdown paragraphs and lists.

    - Unescaped trailing spaces and tabs before a newline are removed.
    - An unescaped single newline becomes a space unless the next line is
      blank, indented by four spaces or a tab, or starts a list item.
    - Three or more consecutive newlines collapse to a blank line.
    """
    text = _TRAILING_HSPACE_RE.sub("\\1\n", text)
    text = _SOFT_NEWLINE_RE.sub("\\1 ", text)
    return _BLANK_LINES_RE.sub("\n\n", text)


def unwrap_segment(text: str) -> str:
    """Unwrap one segment, judging its edge newlines only by their context inside it."""
    if "\n" not in text:
        return text
    return unwrap(f".{text}.")[1:-1]
