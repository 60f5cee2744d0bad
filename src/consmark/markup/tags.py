# topmark:header:start
#
#   project      : ConsMark
#   file         : tags.py
#   file_relpath : src/consmark/markup/tags.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tag kinds and the delimiter table.

The delimiter table is closed: every delimiter the matcher can produce has an
entry here, and `tag_for_delimiter` raises `MarkupLogicError` otherwise.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Final

from consmark.core.errors import MarkupLogicError


class Tag(str, Enum):
    """Formatting construct recognised by the engine."""

    HEADING = "heading"
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    LOW_PRIORITY = "low_priority"
    CODE_SPAN = "code_span"
    CODE_BLOCK = "code_block"
    DIFF_HEADER = "diff_header"
    DIFF_RANGE = "diff_range"
    DIFF_ADDITION = "diff_addition"
    DIFF_REMOVAL = "diff_removal"


TAG_MAP: Final = MappingProxyType(
    {
        "___": Tag.HEADING,
        "***": Tag.HEADING,
        "##": Tag.HEADING,
        "__": Tag.BOLD,
        "**": Tag.BOLD,
        "_": Tag.ITALIC,
        "*": Tag.ITALIC,
        "<": Tag.UNDERLINE,
        "~~": Tag.LOW_PRIORITY,
    }
)

# ASCII punctuation that may be backslash-escaped (CommonMark's set).
ESCAPABLE: Final[str] = "-\\!\"#$%&'()*+,./:;<=>?@[]^_`{|}~"

# Characters escaped by `escape_tags`: the ones that can open or close a tag.
TAG_CHARACTERS: Final[str] = "\\#*<>_`~"


def tag_for_delimiter(delimiter: str) -> Tag:
    """Return the tag opened by ``delimiter``.

    Raises:
        MarkupLogicError: If ``delimiter`` is not in the table.
    """
    try:
        return TAG_MAP[delimiter]
    except KeyError:
        raise MarkupLogicError(delimiter) from None
