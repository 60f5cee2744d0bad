# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for ConsMark.

Public modules:
    - consmark.config.logging: TRACE-aware logging setup, used by every module.
    - consmark.config.io: TOML loading and config file discovery (``tomlkit``).
    - consmark.config.model: `MutableRenderConfig` (the mutable builder used
      while merging sources) and `RenderConfig` (the frozen snapshot handed
      to the rendering layer).

This package deliberately re-exports nothing: the markup engine imports
`consmark.config.logging`, and the config model imports the engine.
"""

from __future__ import annotations
