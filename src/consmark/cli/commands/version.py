# topmark:header:start
#
#   project      : ConsMark
#   file         : version.py
#   file_relpath : src/consmark/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark `version` command.

Prints the current ConsMark version as installed in the active Python environment.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from consmark.cli.cmd_common import get_effective_verbosity
from consmark.cli.options import CONTEXT_SETTINGS
from consmark.constants import CONSMARK_VERSION

if TYPE_CHECKING:
    from consmark.cli.console import ClickConsole


@click.command(
    name="version",
    help="Show the current version of ConsMark.",
    context_settings=CONTEXT_SETTINGS,
)
def version_command() -> None:
    """Show the current version of ConsMark."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ClickConsole = ctx.obj["console"]

    if get_effective_verbosity(ctx) > 0:
        console.print(console.styled("ConsMark version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(CONSMARK_VERSION, bold=True)}")
    else:
        console.print(console.styled(CONSMARK_VERSION, bold=True))
