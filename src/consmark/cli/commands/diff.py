# topmark:header:start
#
#   project      : ConsMark
#   file         : diff.py
#   file_relpath : src/consmark/cli/commands/diff.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark `diff` command: colour a unified diff read from a file or STDIN."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from consmark.cli.cmd_common import build_formatter, get_console, get_render_config
from consmark.cli.cli_types import EnumChoiceParam
from consmark.cli.io import read_source
from consmark.cli.options import CONTEXT_SETTINGS, input_argument
from consmark.rendering.targets import OutputTarget

if TYPE_CHECKING:
    from consmark.config.model import RenderConfig


@click.command(
    name="diff",
    help="Highlight the header, range, addition and removal lines of a unified diff.",
    context_settings=CONTEXT_SETTINGS,
)
@input_argument
@click.option(
    "--target",
    "-t",
    "target",
    type=EnumChoiceParam(OutputTarget),
    default=None,
    help="Output target (default: tty when colour is enabled, else plain).",
)
@click.pass_context
def diff_command(ctx: click.Context, *, source: str, target: OutputTarget | None) -> None:
    config: RenderConfig = get_render_config(ctx, {"target": target})
    formatter, _ = build_formatter(ctx, config)
    get_console(ctx).emit(formatter.format_diff(read_source(source)))
