# topmark:header:start
#
#   project      : ConsMark
#   file         : attributes.py
#   file_relpath : src/consmark/markup/attributes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Attributes passed to format strategies.

Both classes are frozen dataclasses. `TagAttributes` is created once per
matched tag occurrence; `MessageAttributes` is created once per message and
moved between roles with the ``with_is_*`` helpers, which return copies.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from consmark.core.levels import Level, MessageType
from consmark.markup.tags import Tag


@dataclass(frozen=True)
class TagAttributes:
    """Attributes of one tag occurrence.

    Attributes:
        tag (Tag): Kind of construct.
        open_delimiter (str): Delimiter text as written (``**``, ``_``, a backtick run,
            a code fence, ...).
        depth (int): Nesting depth, 0 for top-level tags.
        has_children (bool): Whether nested tags were found inside this one.
        indent (str | None): Leading indentation of a fenced code block.
        info_string (str | None): Info string of a fenced code block, stripped.
    """

    tag: Tag
    open_delimiter: str = ""
    depth: int = 0
    has_children: bool = False
    indent: str | None = None
    info_string: str | None = None


@dataclass(frozen=True)
class MessageAttributes:
    """Attributes of one message part.

    Exactly one of the ``is_*`` flags is set while a part is being formatted.
    """

    level: Level
    type: MessageType
    is_prefix: bool = False
    is_msg1: bool = False
    is_msg2: bool = False

    def with_is_prefix(self) -> MessageAttributes:
        return replace(self, is_prefix=True, is_msg1=False, is_msg2=False)

    def with_is_msg1(self) -> MessageAttributes:
        return replace(self, is_prefix=False, is_msg1=True, is_msg2=False)

    def with_is_msg2(self) -> MessageAttributes:
        return replace(self, is_prefix=False, is_msg1=False, is_msg2=True)
