# topmark:header:start
#
#   project      : ConsMark
#   file         : matcher.py
#   file_relpath : src/consmark/markup/matcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline tag matching.

Matching happens in two phases:

1. `find_tags` scans a text segment left to right and returns immutable
   `TagMatch` trees. Positions are relative to the scanned string; the
   children of a match are found by scanning its inner text as a new subject.
2. `render_match` folds a tree into output using a set of tag formats.

Delimiter families:

- ``_``, ``__``, ``___``: the opening run needs a word boundary before it and
  the closing run one after it.
- ``*``, ``**``, ``***``: no boundary rules; the closer may be the start of a
  longer run.
- ``<...>``: underline.
- ``~~...~~``: low priority.
- ``## ...``: a heading occupying the rest of its line, with an optional
  closing ``#`` sequence.

A delimiter preceded by an odd number of backslashes is escaped. Openers may
not be followed by whitespace and closers may not be preceded by it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from consmark.markup.attributes import TagAttributes
from consmark.markup.escapes import ESCAPE_RE, escaped_char
from consmark.markup.tags import ESCAPABLE, tag_for_delimiter

if TYPE_CHECKING:
    from consmark.rendering.registry import TagFormats

_HSPACE: Final[str] = " \t"
# Whitespace that ends a heading without being allowed inside it
_VSPACE: Final[str] = "\n\v\f\r"


@dataclass(frozen=True, slots=True)
class TagMatch:
    """One matched tag.

    Attributes:
        start (int): Offset of the opening delimiter.
        end (int): Offset just past the match.
        delimiter (str): Opening delimiter (``**``, ``_``, ``<``, ``##``, ...).
        text (str): Inner text, escapes and nested tags untouched.
        children (tuple[TagMatch, ...]): Tags nested in ``text`` (offsets relative to it).
    """

    start: int
    end: int
    delimiter: str
    text: str
    children: tuple[TagMatch, ...] = ()

    @property
    def has_children(self) -> bool:
        return bool(self.children)


def _is_word(c: str) -> bool:
    return c == "_" or c.isalnum()


def _boundary(s: str, i: int) -> bool:
    before = i > 0 and _is_word(s[i - 1])
    after = i < len(s) and _is_word(s[i])
    return before != after


def _escaped(s: str, i: int) -> bool:
    """Return True if ``s[i]`` is preceded by an odd number of backslashes."""
    count = 0
    while i - count > 0 and s[i - count - 1] == "\\":
        count += 1
    return count % 2 == 1


def _skip_escape(s: str, q: int) -> int:
    """Return the index after the escape (or lone backslash) at ``q``."""
    if q + 1 < len(s) and s[q + 1] in ESCAPABLE:
        return q + 2
    return q + 1


def _scan_delimited(s: str, q: int, delim: str, *, word_boundary: bool = False) -> int:
    """Scan inner text from ``q`` to the closing ``delim``.

    Returns the offset of the closing delimiter, or -1 if there is none.
    Delimiter characters that do not form a valid closer are consumed as a
    whole run.
    """
    n = len(s)
    dc = delim[0]
    while q < n:
        c = s[q]
        if c == "\\":
            q = _skip_escape(s, q)
            continue
        if c != dc:
            q += 1
            continue
        closer = (
            not s[q - 1].isspace()
            and s.startswith(delim, q)
            and (not word_boundary or _boundary(s, q + len(delim)))
        )
        if closer:
            return q
        while q < n and s[q] == dc:
            q += 1
    return -1


def _match_run(s: str, i: int, dc: str, *, word_boundary: bool) -> tuple[int, str, int] | None:
    """Match the ``_`` or ``*`` family at ``i``; return ``(end, delimiter, text_start)``."""
    n = len(s)
    if word_boundary and not _boundary(s, i):
        return None
    k = 0
    while k < 3 and i + k < n and s[i + k] == dc:
        k += 1
    delim = s[i : i + k]
    t = i + k
    if t >= n or s[t].isspace():
        return None
    close = _scan_delimited(s, t, delim, word_boundary=word_boundary)
    if close < 0:
        return None
    return close + k, delim, t


def _match_fixed(s: str, i: int, opener: str, closer: str) -> tuple[int, str, int] | None:
    """Match ``<...>`` or ``~~...~~`` at ``i``."""
    if not s.startswith(opener, i):
        return None
    t = i + len(opener)
    if t >= len(s) or s[t].isspace():
        return None
    close = _scan_delimited(s, t, closer)
    if close < 0:
        return None
    return close + len(closer), opener, t


def _closes_line(s: str, q: int, eol: int) -> bool:
    """Return True if only horizontal whitespace lies between ``q`` and ``eol``."""
    return all(c in _HSPACE for c in s[q:eol])


def _match_heading(s: str, i: int) -> tuple[int, str, int, int] | None:
    """Match a ``## heading`` line at ``i``; return ``(end, "##", text_start, text_end)``.

    The text may not end in a ``#`` run unless whitespace separates that run
    from it, in which case the run is the closing sequence and nothing may
    follow it. A heading without text is left alone.
    """
    n = len(s)
    if not (i == 0 or s[i - 1] == "\n") or not s.startswith("##", i):
        return None
    t = i + 2
    if t >= n or s[t] not in _HSPACE:
        return None
    while t < n and s[t] in _HSPACE:
        t += 1
    eol = s.find("\n", t)
    eol = n if eol < 0 else eol

    k = t
    while k < eol:
        c = s[k]
        if c == "\\":
            k = _skip_escape(s, k)
        elif c == "#":
            r = k
            while r < eol and s[r] == "#":
                r += 1
            if _closes_line(s, r, eol):
                # A trailing run keeps all but its last "#"
                k = r - 1
                break
            k = r
        elif c in _HSPACE:
            r = k
            while r < eol and s[r] in _HSPACE:
                r += 1
            h = r
            while h < eol and s[h] == "#":
                h += 1
            if _closes_line(s, h, eol):
                break
            k = r
        elif c in _VSPACE:
            break
        else:
            k += 1

    if k == t:
        return None
    tail = s[k:eol]
    closer = tail.lstrip(_HSPACE)
    if closer and not (closer != tail and closer.strip("#") == ""):
        return None
    return eol, "##", t, k


def find_tags(s: str) -> tuple[TagMatch, ...]:
    """Return the top-level tags in ``s``, each with its nested tags resolved."""
    matches: list[TagMatch] = []
    n = len(s)
    i = 0
    while i < n:
        c = s[i]
        found: tuple[int, str, int, int] | None = None
        if c in "_*<~#" and not _escaped(s, i):
            if c == "_":
                m = _match_run(s, i, "_", word_boundary=True)
            elif c == "*":
                m = _match_run(s, i, "*", word_boundary=False)
            elif c == "<":
                m = _match_fixed(s, i, "<", ">")
            elif c == "~":
                m = _match_fixed(s, i, "~~", "~~")
            else:
                m = None
                found = _match_heading(s, i)
            if m is not None:
                end, delim, t = m
                found = (end, delim, t, end - len(delim) if delim != "<" else end - 1)
        if found is None:
            i += 1
            continue
        end, delim, t, text_end = found
        inner = s[t:text_end]
        matches.append(TagMatch(i, end, delim, inner, find_tags(inner)))
        i = end
    return tuple(matches)


def _literal(text: str, unescape: bool) -> str:
    return ESCAPE_RE.sub(escaped_char, text) if unescape else text


def render_text(text: str, matches: tuple[TagMatch, ...], formats: TagFormats, depth: int) -> str:
    """Render ``text``, replacing each match with its formatted output.

    Literal runs between matches are unescaped when ``formats`` removes
    escapes; formatted output is never unescaped twice.
    """
    unescape = formats.remove_escapes
    parts: list[str] = []
    pos = 0
    for m in matches:
        parts.append(_literal(text[pos : m.start], unescape))
        parts.append(render_match(m, formats, depth))
        pos = m.end
    parts.append(_literal(text[pos:], unescape))
    return "".join(parts)


def render_match(match: TagMatch, formats: TagFormats, depth: int = 0) -> str:
    """Render one tag (and its nested tags) with ``formats``.

    Raises:
        MarkupLogicError: If the delimiter has no tag.
    """
    tag = tag_for_delimiter(match.delimiter)
    inner = render_text(match.text, match.children, formats, depth + 1)
    return formats.apply(
        inner,
        TagAttributes(tag, match.delimiter, depth, match.has_children),
    )
