# topmark:header:start
#
#   project      : ConsMark
#   file         : message.py
#   file_relpath : src/consmark/cli/commands/message.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""ConsMark `message` command.

Prints one message with its level/type prefix. Message text may contain
markup, which is formatted (without wrapping) before the message styles are
applied.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from consmark.cli.cli_types import EnumChoiceParam
from consmark.cli.cmd_common import build_formatter, get_console, get_render_config, run_engine
from consmark.cli.options import CONTEXT_SETTINGS
from consmark.core.levels import Level, MessageType
from consmark.rendering.targets import OutputTarget

if TYPE_CHECKING:
    from consmark.config.model import RenderConfig


@click.command(
    name="message",
    help="Format MSG1 (and optional MSG2) as one prefixed message.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("msg1")
@click.argument("msg2", required=False, default=None)
@click.option(
    "--level",
    "-l",
    "level",
    type=EnumChoiceParam(Level),
    default=Level.INFO.name.lower(),
    show_default=True,
    help="Message level.",
)
@click.option(
    "--type",
    "msg_type",
    type=EnumChoiceParam(MessageType),
    default=MessageType.STANDARD.value,
    show_default=True,
    help="Message type.",
)
@click.option(
    "--target",
    "-t",
    "target",
    type=EnumChoiceParam(OutputTarget),
    default=None,
    help="Output target (default: tty when colour is enabled, else plain).",
)
@click.pass_context
def message_command(
    ctx: click.Context,
    *,
    msg1: str,
    msg2: str | None,
    level: Level,
    msg_type: MessageType,
    target: OutputTarget | None,
) -> None:
    """Print one formatted message."""
    config: RenderConfig = get_render_config(ctx, {"target": target})
    formatter, _ = build_formatter(ctx, config)
    if msg_type is not MessageType.UNFORMATTED:
        msg1 = run_engine(formatter.format, msg1)
        if msg2 is not None:
            msg2 = run_engine(formatter.format, msg2)
    get_console(ctx).print(formatter.format_message(msg1, msg2, level, msg_type))
