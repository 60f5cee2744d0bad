# topmark:header:start
#
#   project      : ConsMark
#   file         : escapes.py
#   file_relpath : src/consmark/markup/escapes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Backslash escapes.

An escape is a backslash followed by ASCII punctuation or a space, or a
backslash (optionally preceded by one space) followed by a newline, which is
a hard line break.

Example:
    ```python
    escape_tags("2 * 3 = <six>")       # '2 \\* 3 = \\<six\\>'
    unescape_tags("2 \\* 3 = \\<six\\>")  # '2 * 3 = <six>'
    ```
"""

from __future__ import annotations

import re
from typing import Final

from consmark.markup.tags import TAG_CHARACTERS

ESCAPE_RE: Final[re.Pattern[str]] = re.compile(
    r"\\([-\\ !\"#$%&'()*+,./:;<=>?@\[\]^_`{|}~])| ?\\(\n)"
)

_TAG_CHARACTER_RE: Final[re.Pattern[str]] = re.compile(
    "([" + re.escape(TAG_CHARACTERS) + "])"
)


def escaped_char(match: re.Match[str]) -> str:
    """Return the character an `ESCAPE_RE` match stands for."""
    return match.group(1) if match.group(1) is not None else match.group(2)


def escape_tags(text: str, escape_newlines: bool = False) -> str:
    """Backslash-escape every character that can open or close a tag.

    Args:
        text (str): Text to escape.
        escape_newlines (bool): Also turn each newline into an escaped line break.

    Returns:
        str: The escaped text.
    """
    escaped = _TAG_CHARACTER_RE.sub(r"\\\1", text)
    if escape_newlines:
        return escaped.replace("\n", "\\\n")
    return escaped


def unescape_tags(text: str) -> str:
    """Replace every escape sequence with the character it stands for."""
    return ESCAPE_RE.sub(escaped_char, text)
