# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering targets for ConsMark.

This package holds everything that depends on *where* output goes: ANSI
sequences, per-target format strategies, the format registries and the
target-to-formatter factories. The markup engine itself (`consmark.markup`)
only talks to these through `TagFormats` and `MessageFormats`.

Public modules:
    - consmark.rendering.ansi
    - consmark.rendering.color
    - consmark.rendering.formats
    - consmark.rendering.registry
    - consmark.rendering.targets
"""

from __future__ import annotations
