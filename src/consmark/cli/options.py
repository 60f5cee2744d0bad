# topmark:header:start
#
#   project      : ConsMark
#   file         : options.py
#   file_relpath : src/consmark/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reusable Click option groups and option resolution helpers.

Option decorators are applied bottom-up like any Click decorator; each
group adds its options to the decorated command and nothing else.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Final, ParamSpec, TypeVar

import click

from consmark.cli.cli_types import EnumChoiceParam
from consmark.cli.errors import ConsmarkUsageError
from consmark.config.logging import TRACE_LEVEL
from consmark.rendering.color import ColorMode
from consmark.rendering.targets import OutputTarget

P = ParamSpec("P")
R = TypeVar("R")

#: Click context settings shared by all commands.
CONTEXT_SETTINGS: Final[dict[str, Any]] = {
    "help_option_names": ["-h", "--help"],
}

# Log level enabled by each -v count when CONSMARK_LOG_LEVEL is unset.
_VERBOSITY_LOG_LEVELS: Final[dict[int, int]] = {
    1: logging.INFO,
    2: logging.DEBUG,
    3: TRACE_LEVEL,
}


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve program-output verbosity from the ``-v`` and ``-q`` counts.

    Args:
        verbose_count: Number of times ``-v`` was passed.
        quiet_count: Number of times ``-q`` was passed.

    Returns:
        ``-1`` when quiet, ``0`` by default, otherwise the ``-v`` count
        (capped at 3).

    Raises:
        ConsmarkUsageError: If both flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise ConsmarkUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return min(verbose_count, 3)
    if quiet_count > 0:
        return -1
    return 0


def log_level_for_verbosity(verbosity: int) -> int | None:
    """Return the log level implied by a verbosity, or ``None`` for the default."""
    if verbosity <= 0:
        return None
    return _VERBOSITY_LOG_LEVELS[min(verbosity, 3)]


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --verbose and --quiet options to a command.

    Behavior:
        Adds -v/--verbose and -q/--quiet options that count occurrences.
        They are mutually exclusive. Without ``CONSMARK_LOG_LEVEL``, ``-v``
        also enables INFO, ``-vv`` DEBUG and ``-vvv`` TRACE diagnostics.
    """
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Repeat up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress informational output.",
    )(f)
    return f


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds --color and --no-color options to a command."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds ``--config`` (repeatable) and ``--no-config`` options to a command."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Do not discover pyproject.toml / consmark.toml files.",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_render_options(f: Callable[P, R]) -> Callable[P, R]:
    """Adds the options that override the render configuration.

    Every option defaults to ``None`` so that an unset option leaves the
    configured value in place.
    """
    f = click.option(
        "--target",
        "-t",
        "target",
        type=EnumChoiceParam(OutputTarget),
        default=None,
        help="Output target (default: tty when colour is enabled, else plain).",
    )(f)
    f = click.option(
        "--width",
        "-w",
        "width",
        type=click.IntRange(min=1),
        default=None,
        help="Wrap width (default: terminal width).",
    )(f)
    f = click.option(
        "--wrap/--no-wrap",
        "wrap",
        default=None,
        help="Wrap output to the width (default: wrap).",
    )(f)
    f = click.option(
        "--unwrap/--no-unwrap",
        "unwrap",
        default=None,
        help="Join hard-wrapped input lines before formatting.",
    )(f)
    return f


def input_argument(f: Callable[P, R]) -> Callable[P, R]:
    """Adds an optional ``FILE`` argument; ``-`` or no argument reads STDIN."""
    return click.argument(
        "source",
        metavar="[FILE|-]",
        required=False,
        default="-",
        type=click.Path(dir_okay=False, allow_dash=True),
    )(f)
