# topmark:header:start
#
#   project      : ConsMark
#   file         : registry.py
#   file_relpath : src/consmark/rendering/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable format registries.

`TagFormats` maps each `Tag` to a `Format`; `MessageFormats` maps each
``(Level, MessageType)`` pair to a `MessageFormat`. Both fall back to a no-op
format for unmapped keys, and both are value objects: every ``with_*`` method
returns a new registry and leaves the receiver untouched.

Notes:
    The formatter compares `TagFormats` instances by identity to decide
    whether formatted text has to be rendered a second time. Build a registry
    once per target and reuse it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING

from consmark.rendering.formats import NULL_FORMAT, NULL_MESSAGE_FORMAT, LoopbackFormat

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from consmark.core.levels import Level, MessageType
    from consmark.markup.attributes import TagAttributes
    from consmark.markup.tags import Tag
    from consmark.rendering.formats import Format, MessageFormat


def _empty() -> Mapping[object, object]:
    return MappingProxyType({})


@dataclass(frozen=True)
class TagFormats:
    """Tag-to-format map for one rendering target.

    Attributes:
        formats (Mapping[Tag, Format]): Read-only tag map.
        remove_escapes (bool): Whether backslash escapes are removed from output.
        wrap_after (bool): Whether text is wrapped after formatting (formats that
            emit literal markup) rather than before it (formats that emit
            invisible sequences or nothing).
        fallback (Format): Format used for tags with no entry.
    """

    formats: Mapping[Tag, Format] = field(default_factory=_empty)  # type: ignore[arg-type]
    remove_escapes: bool = True
    wrap_after: bool = False
    fallback: Format = NULL_FORMAT

    def get(self, tag: Tag) -> Format:
        return self.formats.get(tag, self.fallback)

    def apply(self, text: str, attributes: TagAttributes) -> str:
        """Format ``text`` with the format registered for ``attributes.tag``."""
        return self.get(attributes.tag).apply(text, attributes)

    def with_format(self, tag: Tag, fmt: Format) -> TagFormats:
        formats = dict(self.formats)
        formats[tag] = fmt
        return replace(self, formats=MappingProxyType(formats))

    def with_remove_escapes(self, remove_escapes: bool = True) -> TagFormats:
        if remove_escapes is self.remove_escapes:
            return self
        return replace(self, remove_escapes=remove_escapes)

    def with_wrap_after(self, wrap_after: bool = True) -> TagFormats:
        if wrap_after is self.wrap_after:
            return self
        return replace(self, wrap_after=wrap_after)


@dataclass(frozen=True)
class MessageFormats:
    """``(Level, MessageType)``-to-message-format map for one rendering target."""

    formats: Mapping[tuple[Level, MessageType], MessageFormat] = field(
        default_factory=_empty  # type: ignore[arg-type]
    )
    fallback: MessageFormat = NULL_MESSAGE_FORMAT

    def get(self, level: Level, msg_type: MessageType) -> MessageFormat:
        return self.formats.get((level, msg_type), self.fallback)

    def with_format(
        self,
        levels: Level | Iterable[Level],
        types: MessageType | Iterable[MessageType],
        fmt: MessageFormat,
    ) -> MessageFormats:
        """Return a copy with ``fmt`` registered for every level/type combination.

        Args:
            levels (Level | Iterable[Level]): One level or a group of levels.
            types (MessageType | Iterable[MessageType]): One type or a group of types.
            fmt (MessageFormat): Format to register; replaces existing entries.

        Returns:
            MessageFormats: The new registry.
        """
        level_set = (levels,) if isinstance(levels, int) else tuple(levels)
        type_set = (types,) if isinstance(types, str) else tuple(types)
        formats = dict(self.formats)
        for level in level_set:
            for msg_type in type_set:
                formats[(level, msg_type)] = fmt
        return replace(self, formats=MappingProxyType(formats))


NULL_TAG_FORMATS: TagFormats = TagFormats()
NULL_MESSAGE_FORMATS: MessageFormats = MessageFormats()

# Used by the formatter to "unformat" text, whatever the target.
LOOPBACK_TAG_FORMATS: TagFormats = TagFormats(
    remove_escapes=False,
    wrap_after=True,
    fallback=LoopbackFormat(),
)
