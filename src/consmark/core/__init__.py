# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core types shared by the markup engine, the renderers and the CLI."""
