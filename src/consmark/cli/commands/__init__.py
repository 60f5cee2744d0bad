# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark subcommands."""
