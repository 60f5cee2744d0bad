# topmark:header:start
#
#   project      : ConsMark
#   file         : color.py
#   file_relpath : src/consmark/rendering/color.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-independent colour helpers.

- `ColorMode`: user intent for coloured output (``auto``, ``always``, ``never``).
- `resolve_color_mode`: turns that intent, the environment and the TTY status
  of stdout into a final yes/no.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from consmark.config.logging import get_logger
from consmark.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from consmark.config.logging import ConsmarkLogger

logger: ConsmarkLogger = get_logger(__name__)


class ColorMode(KeyedStrEnum):
    """User intent for colorized terminal output.

    Attributes:
        AUTO: Enable color only when stdout is a TTY.
        ALWAYS: Force-enable color regardless of TTY status.
        NEVER: Disable color entirely.
    """

    AUTO = ("auto", "Colour when writing to a terminal")
    ALWAYS = ("always", "Always colour", ("force", "on", "yes"))
    NEVER = ("never", "Never colour", ("off", "no", "none"))


def resolve_color_mode(
    *,
    color_mode_override: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Decision precedence:
        1. **CLI override**: ``ALWAYS`` → True; ``NEVER`` → False.
        2. **Environment**:
            - ``FORCE_COLOR`` (set and not equal to ``"0"``) → True
            - ``NO_COLOR`` (set to any value) → False
        3. **Auto**: ``stdout.isatty()``.

    Args:
        color_mode_override (ColorMode | None): Parsed ``--color`` value or the
            configured mode; ``None`` and ``AUTO`` both mean "decide".
        stdout_isatty (bool | None): Optional override for TTY detection. When
            ``None``, ``sys.stdout.isatty()`` is called (False on error).

    Returns:
        bool: True if ANSI color should be enabled.
    """
    if color_mode_override == ColorMode.ALWAYS:
        return True
    if color_mode_override == ColorMode.NEVER:
        return False

    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False

    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (OSError, ValueError):
            stdout_isatty = False
    logger.trace("color auto-detection: isatty=%s", stdout_isatty)
    return bool(stdout_isatty)
