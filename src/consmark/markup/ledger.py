# topmark:header:start
#
#   project      : ConsMark
#   file         : ledger.py
#   file_relpath : src/consmark/markup/ledger.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Replacement ledger.

While the formatter works on a string of same-length placeholders, every
placeholder is recorded as a `Replacement`: the offset and length of the
placeholder in the working string, and the text that finally replaces it.
Entries are applied rightmost first so earlier offsets stay valid.

Wrapping may turn a space *inside* a placeholder into a newline. Such breaks
are moved into the replacement text (see `Replacement.with_breaks`) instead
of being lost when the placeholder is substituted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Final

from consmark.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = get_logger(__name__)

_SGR_RE: Final[re.Pattern[str]] = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True, slots=True)
class Replacement:
    """One recorded edit.

    Attributes:
        offset (int): Start of the placeholder in the working string.
        length (int): Length of the placeholder.
        text (str): Final text substituted for the placeholder.
        shadow (str | None): Visible text the placeholder was derived from, when
            the placeholder may contain spaces (formatted tags and code spans).
    """

    offset: int
    length: int
    text: str
    shadow: str | None = None

    def shifted(self, delta: int) -> Replacement:
        return replace(self, offset=self.offset + delta)

    def with_breaks(self, positions: Sequence[int], brk: str) -> Replacement:
        """Return a copy with wrap breaks carried into ``text``.

        Args:
            positions (Sequence[int]): Offsets, relative to the placeholder, of spaces
                the wrapper turned into newlines.
            brk (str): Line break sequence to insert.

        Returns:
            Replacement: The updated entry (unchanged if the breaks cannot be mapped).
        """
        if not positions or self.shadow is None:
            return self
        targets = _map_positions(self.shadow, self.text, positions)
        if targets is None:
            logger.debug(
                "dropping %d wrap break(s) inside %r: no mapping to %r",
                len(positions),
                self.shadow,
                self.text,
            )
            return self
        chars = list(self.text)
        for t in targets:
            chars[t] = brk
        return replace(self, text="".join(chars))


def _visible_index_map(text: str) -> list[int]:
    """Return the index in ``text`` of each character outside SGR sequences."""
    indices: list[int] = []
    pos = 0
    for m in _SGR_RE.finditer(text):
        indices.extend(range(pos, m.start()))
        pos = m.end()
    indices.extend(range(pos, len(text)))
    return indices


def _map_positions(shadow: str, text: str, positions: Sequence[int]) -> list[int] | None:
    """Map space positions in ``shadow`` onto spaces in ``text``."""
    if text == shadow:
        return list(positions)

    visible = _visible_index_map(text)
    if "".join(text[i] for i in visible) == shadow:
        return [visible[p] for p in positions]

    shadow_spaces = [i for i, c in enumerate(shadow) if c == " "]
    text_spaces = [i for i, c in enumerate(text) if c == " "]
    if len(shadow_spaces) != len(text_spaces):
        return None
    ordinal = {p: k for k, p in enumerate(shadow_spaces)}
    try:
        return [text_spaces[ordinal[p]] for p in positions]
    except KeyError:
        return None


def wrap_breaks(
    before: str,
    after: str,
    ledger: list[Replacement],
    brk: str,
) -> list[Replacement]:
    """Account for the newlines a wrap pass inserted into ``before``.

    Breaks that fall inside a recorded placeholder are carried into that
    entry's text. When ``brk`` is not ``"\\n"``, a new entry is added for
    each remaining wrap-inserted newline.

    Args:
        before (str): Working string before wrapping.
        after (str): Working string after wrapping (same length).
        ledger (list[Replacement]): Entries recorded so far.
        brk (str): Requested line break sequence.

    Returns:
        list[Replacement]: The updated ledger (a new list).
    """
    inserted = [i for i, (a, b) in enumerate(zip(before, after)) if b == "\n" and a != "\n"]
    if not inserted:
        return list(ledger)

    claimed: set[int] = set()
    updated: list[Replacement] = []
    for entry in ledger:
        if entry.shadow is not None and entry.length:
            end = entry.offset + entry.length
            inside = [i for i in inserted if entry.offset <= i < end]
            if inside:
                claimed.update(inside)
                entry = entry.with_breaks([i - entry.offset for i in inside], brk)
        updated.append(entry)

    if brk != "\n":
        updated.extend(Replacement(i, 1, brk) for i in inserted if i not in claimed)
    return updated


def apply_replacements(subject: str, entries: Iterable[Replacement], *, resort: bool) -> str:
    """Apply ``entries`` to ``subject``, rightmost first.

    Args:
        subject (str): Working string.
        entries (Iterable[Replacement]): Entries in the order they were recorded.
        resort (bool): If False, entries are known to be in ascending offset
            order and are simply reversed; otherwise they are sorted.

    Returns:
        str: The final string.
    """
    ordered = (
        sorted(entries, key=lambda e: e.offset, reverse=True)
        if resort
        else list(reversed(list(entries)))
    )
    for e in ordered:
        subject = subject[: e.offset] + e.text + subject[e.offset + e.length :]
    return subject
