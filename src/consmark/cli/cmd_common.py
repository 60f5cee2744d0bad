# topmark:header:start
#
#   project      : ConsMark
#   file         : cmd_common.py
#   file_relpath : src/consmark/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by ConsMark subcommands.

These read the state that `consmark.cli.main.init_common_state` stores on
``ctx.obj``:

- ``console``: the `ClickConsole` for program output
- ``verbosity_level``: program-output verbosity (``-1`` quiet .. ``3``)
- ``color_enabled``: whether ANSI output is enabled
- ``config``: the frozen `RenderConfig` (files and global options merged)
- ``spinner``: the `SpinnerState` shared by every formatter of the run
"""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING, Any

import click

from consmark.cli.errors import from_library_error
from consmark.config.logging import get_logger
from consmark.config.model import RenderConfig
from consmark.constants import FALLBACK_TERMINAL_WIDTH
from consmark.core.errors import ConsmarkError
from consmark.markup.spinner import SpinnerState
from consmark.rendering.targets import formatter_for

if TYPE_CHECKING:
    from consmark.cli.console import ClickConsole
    from consmark.config.logging import ConsmarkLogger
    from consmark.config.model import ArgsLike
    from consmark.markup.formatter import Formatter
    from consmark.markup.wrap import WrapWidth
    from consmark.rendering.targets import OutputTarget

logger: ConsmarkLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ClickConsole:
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity for this command (0 when unset)."""
    return int(ctx.obj.get("verbosity_level", 0))


def terminal_width() -> int | None:
    """Return the terminal width, falling back to a fixed width."""
    return shutil.get_terminal_size((FALLBACK_TERMINAL_WIDTH, 24)).columns


def get_render_config(ctx: click.Context, overrides: ArgsLike | None = None) -> RenderConfig:
    """Return the run's render config with command options applied.

    Args:
        ctx (click.Context): Current Click context.
        overrides (ArgsLike | None): Command options (``target``, ``width``,
            ``wrap``, ``unwrap``); ``None`` values are ignored.

    Returns:
        RenderConfig: The effective configuration for this command.
    """
    config: RenderConfig = ctx.obj["config"]
    if not overrides or all(v is None for v in overrides.values()):
        return config
    return config.thaw().apply_cli_args(overrides).freeze()


def build_formatter(ctx: click.Context, config: RenderConfig) -> tuple[Formatter, OutputTarget]:
    """Build the formatter for ``config`` and return it with its resolved target."""
    target: OutputTarget = config.resolved_target(bool(ctx.obj.get("color_enabled")))
    spinner: SpinnerState = ctx.obj.setdefault(
        "spinner", SpinnerState(interval_ms=config.spinner_interval_ms)
    )
    logger.debug("Formatting for target '%s'", target.key)
    formatter = formatter_for(
        target,
        terminal_width,
        level_prefixes=config.level_prefixes,
        type_prefixes=config.type_prefixes,
        spinner_state=spinner,
    )
    return formatter, target


def wrap_width(config: RenderConfig) -> WrapWidth | None:
    """Return the ``wrap_to`` argument matching ``config``.

    ``0`` asks the formatter for the full terminal width.
    """
    if not config.wrap:
        return None
    return config.width if config.width is not None else 0


def run_engine(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call an engine function, translating library errors into CLI errors."""
    try:
        return func(*args, **kwargs)
    except ConsmarkError as e:
        raise from_library_error(e) from e
