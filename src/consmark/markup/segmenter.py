# topmark:header:start
#
#   project      : ConsMark
#   file         : segmenter.py
#   file_relpath : src/consmark/markup/segmenter.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Split markup into breaks, text, fenced code blocks, code spans and stray backticks.

The segmenter is a single left-to-right scanner. At every position it first
claims the leading indentation (only at the start of a line), then tries, in
order:

1. **Breaks**: one or more whitespace-only lines.
2. **Text**: everything up to the next unescaped backtick, including escaped
   punctuation, escaped line breaks and single newlines, followed by any
   trailing blank lines.
3. **Block**: a fenced code block, only directly after claimed indentation.
4. **Span**: a code span closed by a backtick run of the same length.
5. **Stray**: a backtick run with no closer, kept as literal text.

Segments are exhaustive and contiguous: joining their ``raw`` attributes
reproduces the input exactly.

Example:
    ```python
    segs = segment("Run `make`\\n```sh\\nmake\\n```")
    [type(s).__name__ for s in segs]
    # ['Text', 'Span', 'Breaks', 'Block']
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from consmark.config.logging import get_logger
from consmark.core.errors import MarkupParseError
from consmark.markup.tags import ESCAPABLE

logger = get_logger(__name__)

_HSPACE = " \t"


@dataclass(frozen=True, slots=True)
class Breaks:
    """Whitespace-only lines between paragraphs."""

    indent: str | None
    raw: str
    text: str


@dataclass(frozen=True, slots=True)
class Text:
    """Formattable text (may span several lines)."""

    indent: str | None
    raw: str
    text: str


@dataclass(frozen=True, slots=True)
class Block:
    """Fenced code block.

    Attributes:
        indent (str | None): Indentation of the opening fence.
        raw (str): Exact source slice, including both fences.
        fence (str): The opening backtick run (3 or more backticks).
        info (str): Raw info string following the opening fence.
        body (str): Block content, without the newline before the closing fence.
    """

    indent: str | None
    raw: str
    fence: str
    info: str
    body: str


@dataclass(frozen=True, slots=True)
class Span:
    """Code span; ``body`` is already normalised (newlines to spaces, edge spaces)."""

    indent: str | None
    raw: str
    ticks: str
    body: str


@dataclass(frozen=True, slots=True)
class Stray:
    """Backtick run without a matching closer."""

    indent: str | None
    raw: str
    ticks: str


Segment = Union[Breaks, Text, Block, Span, Stray]


def normalize_span(body: str) -> str:
    """Apply the CommonMark code span rules to ``body``.

    Newlines become spaces; if the result begins and ends with a space but is
    not all spaces, exactly one space is removed from each end.
    """
    body = body.replace("\n", " ")
    if len(body) >= 2 and body[0] == " " and body[-1] == " " and body.strip(" "):
        return body[1:-1]
    return body


class _Scanner:
    """Position-tracking scanner over one subject string."""

    def __init__(self, subject: str) -> None:
        self.s = subject
        self.n = len(subject)

    # --- primitives ---

    def at_line_start(self, i: int) -> bool:
        return i == 0 or self.s[i - 1] == "\n"

    def end_of_line(self, i: int) -> int:
        """Return the index after ``[ \\t]*\\n`` at ``i``, or -1."""
        s, n = self.s, self.n
        while i < n and s[i] in _HSPACE:
            i += 1
        if i < n and s[i] == "\n":
            return i + 1
        return -1

    def backtick_run(self, i: int) -> int:
        s, n = self.s, self.n
        while i < n and s[i] == "`":
            i += 1
        return i

    def end_of_block(self, i: int, indent: str, fence: str) -> int:
        """Return the end of a closing fence line starting at ``i``, or -1.

        The returned index points at the newline ending the fence line (or the
        end of the subject).
        """
        s, n = self.s, self.n
        if i > n or not self.at_line_start(i) or i == n:
            return -1
        if not s.startswith(indent, i):
            return -1
        j = i + len(indent)
        if not s.startswith(fence, j):
            return -1
        j += len(fence)
        while j < n and s[j] in _HSPACE:
            j += 1
        if j == n or s[j] == "\n":
            return j
        return -1

    # --- segment kinds ---

    def breaks(self, p: int) -> int:
        q = self.end_of_line(p)
        if q < 0:
            return -1
        while (nxt := self.end_of_line(q)) >= 0:
            q = nxt
        return q

    def text(self, p: int) -> int:
        s, n = self.s, self.n
        q = p
        while q < n:
            c = s[q]
            if c == "`":
                break
            if c == "\\":
                if q + 1 < n and (s[q + 1] in ESCAPABLE or s[q + 1] == "\n"):
                    q += 2
                else:
                    q += 1
            elif c == "\n":
                if self.end_of_line(q + 1) >= 0:
                    break
                q += 1
            else:
                q += 1
        if q == p:
            return -1
        while (nxt := self.end_of_line(q)) >= 0:
            q = nxt
        return q

    def block(self, p: int, indent: str) -> tuple[int, str, str, str] | None:
        """Match a fenced code block at ``p``; return ``(end, fence, info, body)``."""
        s, n = self.s, self.n
        f = self.backtick_run(p)
        if f - p < 3:
            return None
        nl = s.find("\n", f)
        if nl < 0:
            return None
        fence = s[p:f]
        info = s[f:nl]
        start = q = nl + 1

        in_block = False
        while True:
            if self.end_of_block(q, indent, fence) >= 0:
                break
            if s.startswith(indent, q):
                r = q + len(indent)
            elif self.end_of_line(q) >= 0:
                r = q
            else:
                break
            eol = s.find("\n", r)
            r = n if eol < 0 else eol
            in_block = True
            if r < n and self.end_of_block(r + 1, indent, fence) >= 0:
                # Stop before the newline preceding the closing fence
                q = r
                break
            nxt = r + 1 if r < n else r
            if nxt == q:
                break
            q = nxt

        body = s[start:q]
        if in_block and q < n and s[q] == "\n":
            end = self.end_of_block(q + 1, indent, fence)
            if end >= 0:
                return end, fence, info, body
        elif not in_block:
            end = self.end_of_block(q, indent, fence)
            if end >= 0:
                return end, fence, info, body
        if q == n:
            return n, fence, info, body
        return None

    def span(self, p: int) -> tuple[int, str, str] | None:
        """Match a code span at ``p``; return ``(end, ticks, content)``."""
        s, n = self.s, self.n
        t = self.backtick_run(p)
        ticks = s[p:t]
        q = t
        while q < n:
            if s[q] != "`":
                nxt = s.find("`", q)
                q = n if nxt < 0 else nxt
                continue
            r = self.backtick_run(q)
            if r - q == len(ticks):
                return r, ticks, s[t:q]
            q = r
        return None


def segment(subject: str) -> list[Segment]:
    """Split ``subject`` into an exhaustive, contiguous list of segments.

    Args:
        subject (str): Markup with ``\\n`` line endings.

    Returns:
        list[Segment]: Segments whose ``raw`` values concatenate to ``subject``.

    Raises:
        MarkupParseError: If no segment kind matches at some offset.
    """
    sc = _Scanner(subject)
    s, n = subject, sc.n
    segments: list[Segment] = []
    pos = 0

    while pos < n:
        indent: str | None = None
        p = pos
        if sc.at_line_start(pos):
            while p < n and s[p] in _HSPACE:
                p += 1
            indent = s[pos:p]

        seg: Segment | None = None
        if (end := sc.breaks(p)) >= 0:
            seg = Breaks(indent, s[pos:end], s[p:end])
        elif (end := sc.text(p)) >= 0:
            seg = Text(indent, s[pos:end], s[p:end])
        elif indent is not None and (blk := sc.block(p, indent)) is not None:
            end, fence, info, body = blk
            seg = Block(indent, s[pos:end], fence, info, body)
        elif p < n and s[p] == "`":
            if (spn := sc.span(p)) is not None:
                end, ticks, content = spn
                seg = Span(indent, s[pos:end], ticks, normalize_span(content))
            else:
                end = sc.backtick_run(p)
                seg = Stray(indent, s[pos:end], s[p:end])
        elif p == n and indent:
            # Indentation at the very end of the subject
            end = n
            seg = Text(None, s[pos:end], s[pos:end])

        if seg is None or end <= pos:
            raise MarkupParseError(subject, pos)
        segments.append(seg)
        pos = end

    logger.trace("segmented %d chars into %d segments", n, len(segments))
    return segments
