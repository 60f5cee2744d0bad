# topmark:header:start
#
#   project      : ConsMark
#   file         : render.py
#   file_relpath : src/consmark/cli/commands/render.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark `render` command.

Formats console markup read from a file or STDIN for the selected output
target and prints the result.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from consmark.cli.cmd_common import (
    build_formatter,
    get_console,
    get_render_config,
    run_engine,
    wrap_width,
)
from consmark.cli.io import read_source
from consmark.cli.options import CONTEXT_SETTINGS, common_render_options, input_argument

if TYPE_CHECKING:
    from consmark.config.model import RenderConfig
    from consmark.rendering.targets import OutputTarget


def _strip_line_ending(text: str) -> str:
    """Remove one final ``\\r\\n``, ``\\n`` or ``\\r`` from ``text``."""
    for ending in ("\r\n", "\n", "\r"):
        if text.endswith(ending):
            return text[: -len(ending)]
    return text


@click.command(
    name="render",
    help="Format console markup from FILE (or STDIN) for the output target.",
    context_settings=CONTEXT_SETTINGS,
)
@input_argument
@common_render_options
@click.option(
    "--unformat",
    is_flag=True,
    default=False,
    help="Re-emit the original markup (still unwrapping and wrapping as requested).",
)
@click.pass_context
def render_command(
    ctx: click.Context,
    *,
    source: str,
    target: OutputTarget | None,
    width: int | None,
    wrap: bool | None,
    unwrap: bool | None,
    unformat: bool,
) -> None:
    """Render markup from ``source``.

    Args:
        ctx (click.Context): Current Click context.
        source (str): Input path, or ``-`` for STDIN.
        target (OutputTarget | None): Target override.
        width (int | None): Wrap width override.
        wrap (bool | None): Wrap override.
        unwrap (bool | None): Unwrap override.
        unformat (bool): Re-emit markup instead of formatting it.
    """
    config: RenderConfig = get_render_config(
        ctx, {"target": target, "width": width, "wrap": wrap, "unwrap": unwrap}
    )
    formatter, _ = build_formatter(ctx, config)
    text: str = read_source(source)
    # Unwrapping would turn the final line ending into a space
    body: str = _strip_line_ending(text)
    out: str = run_engine(
        formatter.format,
        body,
        unwrap=config.unwrap,
        wrap_to=wrap_width(config),
        unformat=unformat,
    )
    get_console(ctx).emit(out + ("\n" if body != text else ""))
