# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark package.

ConsMark is an inline console markup engine. It turns Markdown-like annotated
strings into output for a rendering target (ANSI terminal, plain text,
Markdown, man page, or a "loopback" re-emission of the original markup), and
wraps the result to a target width without splitting formatted runs.

Typical usage:
    ```python
    from consmark import Formatter
    from consmark.rendering.targets import OutputTarget, formatter_for

    fmt = formatter_for(OutputTarget.TTY)
    print(fmt.format("**bold** and _em_", wrap_to=40))
    ```
"""

from __future__ import annotations

from consmark.core.errors import ConsmarkError, MarkupLogicError, MarkupParseError
from consmark.core.levels import Level, MessageType
from consmark.markup.formatter import Formatter

__all__ = [
    "ConsmarkError",
    "Formatter",
    "Level",
    "MarkupLogicError",
    "MarkupParseError",
    "MessageType",
]
