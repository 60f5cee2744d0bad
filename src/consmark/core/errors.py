# topmark:header:start
#
#   project      : ConsMark
#   file         : errors.py
#   file_relpath : src/consmark/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Library exceptions for ConsMark.

These exceptions are raised by the engine and the configuration layer. They
are independent of Click; the CLI maps them onto its own
``click.ClickException`` subclasses (see `consmark.cli.errors`).

Malformed user markup is never an error: stray delimiters are rendered as
literal text. The two engine errors below signal internal inconsistencies.
"""

from __future__ import annotations


class ConsmarkError(Exception):
    """Base class for all ConsMark library errors."""


class MarkupParseError(ConsmarkError):
    """The segmenter could not make progress at some offset.

    Attributes:
        subject (str): The text being segmented.
        offset (int): Offset at which segmentation stalled.
    """

    def __init__(self, subject: str, offset: int = 0) -> None:
        super().__init__(f"Unable to parse: {subject}")
        self.subject = subject
        self.offset = offset


class MarkupLogicError(ConsmarkError):
    """A matched delimiter has no entry in the delimiter-to-tag table.

    Attributes:
        delimiter (str): The delimiter that could not be resolved.
    """

    def __init__(self, delimiter: str) -> None:
        super().__init__(f"Invalid tag: {delimiter}")
        self.delimiter = delimiter


class ConfigError(ConsmarkError):
    """Invalid configuration value, or an unreadable/malformed TOML source."""
