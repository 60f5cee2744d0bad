# topmark:header:start
#
#   project      : ConsMark
#   file         : enum_mixins.py
#   file_relpath : src/consmark/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Keyed string enums with human labels and parse aliases.

`KeyedStrEnum` is used for user-facing choices that appear both on the
command line and in TOML configuration (output targets, colour modes). The
member value is the stable machine key; the label and aliases only help with
help texts and lenient parsing.

Example:
    ```python
    class Target(KeyedStrEnum):
        TTY = ("tty", "ANSI terminal", ("ansi", "terminal"))
        PLAIN = ("plain", "Plain text")

    assert Target.parse("Terminal") is Target.TTY
    assert Target.TTY.key == "tty"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def _norm_token(s: str) -> str:
    """Normalize an identifier-like string to match keys, names and aliases."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """Enum where `.value` is a stable machine key; metadata lives on attributes.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        """Create a member from its key, label and optional aliases.

        Args:
            key (str): The stable machine key (stored as `.value`).
            label (str): The human-readable label.
            aliases (Iterable[str]): Optional aliases for parsing.

        Returns:
            _KS: The newly created enum member.
        """
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    def __str__(self) -> str:
        return str(self.value)

    @property
    def key(self) -> str:
        """Stable machine key (same as `.value`)."""
        return str(self.value)

    @classmethod
    def keys(cls) -> list[str]:
        """Return the machine keys of all members, in definition order."""
        return [m.key for m in cls]

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Parse a token into an enum member.

        Matching is case-insensitive against the key, the member name and the
        aliases; ``-`` and spaces are treated as ``_``.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)

        for m in cls:
            if token in (_norm_token(m.value), _norm_token(m.name)):
                return m
            if any(token == _norm_token(a) for a in m.aliases):
                return m
        return None
