# topmark:header:start
#
#   project      : ConsMark
#   file         : __init__.py
#   file_relpath : src/consmark/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Command line front end for ConsMark.

The ``consmark`` Click group lives in `consmark.cli.main`; each subcommand
has its own module under `consmark.cli.commands`. Program output goes
through `ClickConsole`, diagnostics through logging.
"""
