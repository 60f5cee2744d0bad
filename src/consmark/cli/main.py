# topmark:header:start
#
#   project      : ConsMark
#   file         : main.py
#   file_relpath : src/consmark/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark command line entry point.

Key ideas:
- Group-level options are resolved once and stored on ``ctx.obj``
  (see `consmark.cli.cmd_common` for the keys).
- Configuration is merged once per run: discovered files, then ``--config``
  files, then ``--color``. Command options are applied on top by each
  subcommand.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from consmark.cli.commands.config import config_command
from consmark.cli.commands.diff import diff_command
from consmark.cli.commands.escape import escape_command, strip_command, unescape_command
from consmark.cli.commands.message import message_command
from consmark.cli.commands.render import render_command
from consmark.cli.commands.version import version_command
from consmark.cli.console import ClickConsole
from consmark.cli.errors import ConsmarkConfigError
from consmark.cli.options import (
    CONTEXT_SETTINGS,
    common_color_options,
    common_config_options,
    common_verbose_options,
    log_level_for_verbosity,
    resolve_verbosity,
)
from consmark.config.logging import get_logger, resolve_env_log_level, setup_logging
from consmark.config.model import MutableRenderConfig
from consmark.core.errors import ConfigError
from consmark.rendering.color import ColorMode, resolve_color_mode

if TYPE_CHECKING:
    from consmark.config.logging import ConsmarkLogger
    from consmark.config.model import RenderConfig

logger: ConsmarkLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_paths: tuple[str, ...] = (),
    no_config: bool = False,
) -> None:
    """Initialize shared state (verbosity, logging, config and colour) on the context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit colour mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces colour off.
        config_paths (tuple[str, ...]): Extra config files from ``--config``.
        no_config (bool): Skip config file discovery.

    Raises:
        ConsmarkConfigError: If a config file cannot be loaded.
    """
    ctx.obj = ctx.obj or {}

    verbosity: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbosity

    # CONSMARK_LOG_LEVEL wins over -v for internal diagnostics.
    level_env: int | None = resolve_env_log_level()
    log_level: int | None = (
        level_env if level_env is not None else log_level_for_verbosity(verbosity)
    )
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    cli_color: ColorMode | None = ColorMode.NEVER if no_color else color_mode

    # Provisional console so that config errors can be reported.
    ctx.obj["console"] = ClickConsole(
        enable_color=resolve_color_mode(color_mode_override=cli_color)
    )

    try:
        draft: MutableRenderConfig = MutableRenderConfig.load_merged(
            extra_config_files=[Path(p) for p in config_paths],
            no_config=no_config,
        )
    except ConfigError as e:
        raise ConsmarkConfigError(str(e)) from e
    draft.apply_cli_args({"color": cli_color})
    config: RenderConfig = draft.freeze()
    ctx.obj["config"] = config
    logger.debug("Effective config sources: %s", list(config.config_files))

    enable_color: bool = resolve_color_mode(color_mode_override=config.color)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color
    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="ConsMark: render console markup for terminals, Markdown and man pages.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the ConsMark CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        config_paths=config_paths,
        no_config=no_config,
    )
    console: ClickConsole = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'consmark render [FILE]' to format markup.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(render_command)

cli.add_command(message_command)

cli.add_command(diff_command)

cli.add_command(escape_command)

cli.add_command(unescape_command)

cli.add_command(strip_command)

cli.add_command(config_command)

if __name__ == "__main__":
    cli()
