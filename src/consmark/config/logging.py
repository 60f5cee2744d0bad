# topmark:header:start
#
#   project      : ConsMark
#   file         : logging.py
#   file_relpath : src/consmark/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom ConsMark logging with TRACE logging.

This module extends the standard logging module with a TRACE level below
DEBUG, a logger class exposing ``trace()``, and a formatter that colours
records by severity using ``click.style``.

The markup engine only logs at TRACE and DEBUG; diagnostics never reach the
rendered output.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Any, Final, cast

import click

from consmark.constants import LOG_LEVEL_ENV_VAR

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5


class ConsmarkLogger(logging.Logger):
    """Logger class with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Optional extra information for the record.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(ConsmarkLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"


# Thresholds in descending order; the first one at or below the record level wins.
LEVEL_STYLES: Final[tuple[tuple[int, dict[str, Any]], ...]] = (
    (logging.CRITICAL, {"fg": "bright_red"}),
    (logging.ERROR, {"fg": "red"}),
    (logging.WARNING, {"fg": "yellow"}),
    (logging.INFO, {"fg": "green"}),
    (logging.DEBUG, {"fg": "bright_black"}),
    (TRACE_LEVEL, {"fg": "blue"}),
)


class ClickStyleFormatter(logging.Formatter):
    """Formatter that colours log records by severity with ``click.style``."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the record, then colour it according to `LEVEL_STYLES`.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colourised message.
        """
        message = super().format(record)
        for threshold, style in LEVEL_STYLES:
            if record.levelno >= threshold:
                return click.style(message, **style)
        return click.style(message, fg="red", dim=True)


def resolve_env_log_level() -> int | None:
    """Return a logging level from the environment or None if unset.

    Honors CONSMARK_LOG_LEVEL (e.g., "TRACE", "DEBUG", "INFO", numeric "10").
    """
    val = os.environ.get(LOG_LEVEL_ENV_VAR)
    if not val:
        return None
    v = val.strip().upper()
    if v.isdigit():
        return int(v)
    name_to_level = {
        "TRACE": TRACE_LEVEL,
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "WARN": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
        "FATAL": logging.CRITICAL,
        "NOTSET": logging.NOTSET,
    }
    return name_to_level.get(v)


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with a level and coloured stdout output.

    If ``level`` is None, the environment is consulted via
    `resolve_env_log_level`. Default is CRITICAL when unspecified.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    formatter = ClickStyleFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    root_logger.propagate = False


def get_logger(name: str) -> ConsmarkLogger:
    """Retrieve a ConsmarkLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        ConsmarkLogger: A ConsmarkLogger instance.
    """
    logger = logging.getLogger(name)
    return cast("ConsmarkLogger", logger)
