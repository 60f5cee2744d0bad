# topmark:header:start
#
#   project      : ConsMark
#   file         : escape.py
#   file_relpath : src/consmark/cli/commands/escape.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark `escape`, `unescape` and `strip` commands.

Thin wrappers over the formatter's static helpers:

- ``escape``: backslash-escape markup characters so text renders literally
- ``unescape``: undo ``escape``
- ``strip``: remove all tags and escapes (plain-text rendering, no wrapping)
"""

from __future__ import annotations

import click

from consmark.cli.cmd_common import get_console, run_engine
from consmark.cli.io import read_source
from consmark.cli.options import CONTEXT_SETTINGS, input_argument
from consmark.markup.formatter import Formatter


@click.command(
    name="escape",
    help="Escape markup characters in FILE (or STDIN) so they render literally.",
    context_settings=CONTEXT_SETTINGS,
)
@input_argument
@click.option(
    "--newlines",
    "escape_newlines",
    is_flag=True,
    default=False,
    help="Also escape newlines so that unwrapping keeps them.",
)
@click.pass_context
def escape_command(ctx: click.Context, *, source: str, escape_newlines: bool) -> None:
    get_console(ctx).emit(Formatter.escape_tags(read_source(source), escape_newlines))


@click.command(
    name="unescape",
    help="Remove backslash escapes from FILE (or STDIN).",
    context_settings=CONTEXT_SETTINGS,
)
@input_argument
@click.pass_context
def unescape_command(ctx: click.Context, *, source: str) -> None:
    get_console(ctx).emit(Formatter.unescape_tags(read_source(source)))


@click.command(
    name="strip",
    help="Remove tags and escapes from FILE (or STDIN), leaving plain text.",
    context_settings=CONTEXT_SETTINGS,
)
@input_argument
@click.pass_context
def strip_command(ctx: click.Context, *, source: str) -> None:
    get_console(ctx).emit(run_engine(Formatter.remove_tags, read_source(source)))
