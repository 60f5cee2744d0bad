# topmark:header:start
#
#   project      : ConsMark
#   file         : io.py
#   file_relpath : src/consmark/cli/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Input helpers for CLI commands.

Commands take a single optional ``[FILE|-]`` argument. ``-`` (the default)
reads UTF-8 text from STDIN; anything else is read as a UTF-8 file. Read
failures are raised as CLI errors with their own exit codes.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from consmark.cli.errors import (
    ConsmarkEncodingError,
    ConsmarkFileNotFoundError,
    ConsmarkIOError,
)
from consmark.config.logging import get_logger

if TYPE_CHECKING:
    from consmark.config.logging import ConsmarkLogger

logger: ConsmarkLogger = get_logger(__name__)

STDIN_MARKER = "-"


def read_source(source: str | None) -> str:
    """Return the text of ``source`` (a path, or ``-``/``None`` for STDIN).

    Newlines are kept exactly as read, so the engine sees ``\\r\\n`` input.

    Raises:
        ConsmarkFileNotFoundError: If the path does not exist.
        ConsmarkEncodingError: If the content is not valid UTF-8.
        ConsmarkIOError: If the content cannot be read.
    """
    if source is None or source == STDIN_MARKER:
        logger.debug("Reading input from STDIN")
        try:
            with click.open_file(STDIN_MARKER, "rb") as stream:
                data: bytes = stream.read()
        except OSError as e:
            raise ConsmarkIOError(f"Cannot read STDIN: {e}") from e
        return _decode(data, "<stdin>")

    path = Path(source)
    logger.debug("Reading input from %s", path)
    try:
        data = path.read_bytes()
    except FileNotFoundError as e:
        raise ConsmarkFileNotFoundError(f"No such file: {path}") from e
    except OSError as e:
        raise ConsmarkIOError(f"Cannot read {path}: {e.strerror or e}") from e
    return _decode(data, str(path))


def _decode(data: bytes, name: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ConsmarkEncodingError(f"{name} is not valid UTF-8: {e.reason}") from e
