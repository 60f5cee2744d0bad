# topmark:header:start
#
#   project      : ConsMark
#   file         : console.py
#   file_relpath : src/consmark/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Console abstraction for user-facing program output.

This module provides a `ClickConsole` class that separates CLI output from
internal logging. Use it for text intended for end users and keep `logging`
for diagnostics.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click


class ClickConsole:
    """Console for rendered markup and other end-user output.

    Rendered text already carries its own ANSI sequences when the target is
    ``tty``. Click removes them again on the way out when colour is disabled,
    so a ``--no-color`` run never leaks escape codes into a pipe.

    Args:
        enable_color (bool): Pass ANSI sequences through (otherwise Click
            strips them).
        out (TextIO | None): Stream for rendered output (defaults to sys.stdout).
        err (TextIO | None): Stream for error reports (defaults to sys.stderr).
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write one line (or a fragment when ``nl`` is False) to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def emit(self, text: str) -> None:
        """Write a rendered document, adding a final newline only if it lacks one.

        Args:
            text (str): Engine output; may already end with a newline.
        """
        self.print(text, nl=not text.endswith("\n"))

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error report to stderr."""
        click.echo(text, nl=nl, file=self.err, color=self.enable_color)

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` passed through click.style, or unchanged when colour is off.

        Args:
            text (str): Text to style.
            **style_kwargs (Any): Keyword arguments accepted by click.style.

        Returns:
            str: The styled text.
        """
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
