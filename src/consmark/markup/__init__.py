# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/markup/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Inline console markup engine.

Pipeline, leaf first:

- `segmenter`: splits raw text into breaks, text, fenced code blocks, code
  spans and stray backtick runs.
- `matcher`: finds nested inline tags inside text segments.
- `escapes`: backslash escapes and escaped line breaks.
- `ledger`: (offset, length, replacement) edits applied after wrapping.
- `wrap`: width-aware word wrapping and Markdown-aware unwrapping.
- `spinner`: time-gated frame selection for progress prefixes.
- `formatter`: the `Formatter` tying the passes together.
"""
