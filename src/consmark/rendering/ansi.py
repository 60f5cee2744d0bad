# topmark:header:start
#
#   project      : ConsMark
#   file         : ansi.py
#   file_relpath : src/consmark/rendering/ansi.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""SGR (Select Graphic Rendition) sequences used by the TTY target.

Every sequence is produced by ``click.style`` with ``reset=False`` so that
ConsMark emits exactly the codes Click would. Each attribute has a matching
"off" sequence; the TTY formats rely on these being distinct so that a nested
close sequence can be rewritten into the enclosing style's open sequence.
"""

from __future__ import annotations

from typing import Final

import click


BOLD: Final[str] = click.style("", bold=True, reset=False)
FAINT: Final[str] = click.style("", dim=True, reset=False)
UNDERLINED: Final[str] = click.style("", underline=True, reset=False)

NOT_BOLD_NOT_FAINT: Final[str] = click.style("", bold=False, reset=False)
NOT_UNDERLINED: Final[str] = click.style("", underline=False, reset=False)
DEFAULT_FG: Final[str] = click.style("", fg="reset", reset=False)

BOLD_NOT_FAINT: Final[str] = NOT_BOLD_NOT_FAINT + BOLD
FAINT_NOT_BOLD: Final[str] = NOT_BOLD_NOT_FAINT + FAINT

RED_FG: Final[str] = click.style("", fg="red", reset=False)
GREEN_FG: Final[str] = click.style("", fg="green", reset=False)
YELLOW_FG: Final[str] = click.style("", fg="yellow", reset=False)
MAGENTA_FG: Final[str] = click.style("", fg="magenta", reset=False)
CYAN_FG: Final[str] = click.style("", fg="cyan", reset=False)
