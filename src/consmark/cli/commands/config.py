# topmark:header:start
#
#   project      : ConsMark
#   file         : config.py
#   file_relpath : src/consmark/cli/commands/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark `config` command.

Emits the effective render configuration as TOML after merging discovered
config files, ``--config`` files and global options. The output is wrapped
between ``# === BEGIN ===`` and ``# === END ===`` markers for easy parsing in
tests or tooling. With ``-v`` the merged sources are listed first.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from consmark.cli.cmd_common import get_console, get_effective_verbosity
from consmark.cli.options import CONTEXT_SETTINGS
from consmark.config.io import to_toml

if TYPE_CHECKING:
    from consmark.cli.console import ClickConsole
    from consmark.config.model import RenderConfig


@click.command(
    name="config",
    help="Dump the effective ConsMark configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
@click.pass_context
def config_command(ctx: click.Context) -> None:
    console: ClickConsole = get_console(ctx)
    config: RenderConfig = ctx.obj["config"]

    if get_effective_verbosity(ctx) > 0:
        sources = config.config_files or ("<defaults>",)
        console.print(console.styled("Config sources:", bold=True))
        for source in sources:
            console.print(f"  - {source}")
        console.print()

    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict()), nl=False)
    console.print("# === END ===")
