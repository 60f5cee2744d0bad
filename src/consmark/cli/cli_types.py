# topmark:header:start
#
#   project      : ConsMark
#   file         : cli_types.py
#   file_relpath : src/consmark/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom Click parameter types.

`EnumChoiceParam` accepts the enums used on the ConsMark command line
(`OutputTarget`, `ColorMode`, `Level`, `MessageType`). Each of them exposes a
lenient ``parse()`` classmethod, so aliases such as ``--target md`` or
``--level warn`` are accepted while help texts and completion only list the
canonical keys.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import TYPE_CHECKING, Any, Generic, NoReturn, Protocol, TypeVar

import click

if TYPE_CHECKING:
    from click.shell_completion import CompletionItem as ClickCompletionItem

    class ParamTypeBase(Protocol):
        """Typed base to avoid subclassing Any when Click lacks stubs."""

        name: str

else:
    ParamTypeBase = click.ParamType  # type: ignore[assignment]

E = TypeVar("E", bound=Enum)


def choice_key(member: Enum) -> str:
    """Return the canonical command-line token of an enum member."""
    if isinstance(member, IntEnum):
        return member.name.lower()
    return str(member.value)


class EnumChoiceParam(ParamTypeBase, Generic[E]):
    """A Click parameter type that converts a string to a member of an Enum."""

    enum_cls: type[E]
    name: str
    choices: list[str]

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__.lower()
        self.choices = [choice_key(e) for e in enum_cls]

    def _fail_noreturn(
        self,
        message: str,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> NoReturn:
        """Raise a BadParameter with a NoReturn signature (clear to type checkers)."""
        raise click.BadParameter(message, param=param, ctx=ctx)

    def convert(
        self,
        value: Any,
        param: click.Parameter | None,
        ctx: click.Context | None,
    ) -> E | None:
        """Convert a string to a member of the Enum."""
        if value is None or isinstance(value, self.enum_cls):
            return value
        parse: Any = getattr(self.enum_cls, "parse")
        member: E | None = parse(str(value))
        if member is not None:
            return member
        self._fail_noreturn(
            f"Invalid value '{value}'. Must be one of: {', '.join(self.choices)}",
            param,
            ctx,
        )

    def get_metavar(self, param: click.Parameter, ctx: click.Context | None = None) -> str:
        return f"[{'|'.join(self.choices)}]"

    def shell_complete(
        self,
        ctx: click.Context,  # pylint: disable=unused-argument
        param: click.Parameter,  # pylint: disable=unused-argument
        incomplete: str,
    ) -> list[ClickCompletionItem]:
        """Tab completion for Click.

        Bash: `eval "$(_CONSMARK_COMPLETE=bash_source consmark)"`
        Zsh: `eval "$(_CONSMARK_COMPLETE=zsh_source consmark)"`
        """
        from click.shell_completion import CompletionItem as RuntimeCompletionItem

        prefix = (incomplete or "").lower()
        return [RuntimeCompletionItem(c) for c in self.choices if c.startswith(prefix)]

    def __repr__(self) -> str:
        return f"EnumParam({self.enum_cls.__name__})"
