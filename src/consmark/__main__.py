# topmark:header:start
#
#   project      : ConsMark
#   file         : __main__.py
#   file_relpath : src/consmark/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running ConsMark via ``python -m consmark``.

It delegates directly to :func:`consmark.cli.main.cli`, so the module and the
``consmark`` console script share a single entry point.

Examples:
    Render a file for the terminal::

        python -m consmark render README.txt --width 72
"""

from __future__ import annotations

from consmark.cli.main import cli

if __name__ == "__main__":
    cli()
