# topmark:header:start
#
#   project      : ConsMark
#   file         : levels.py
#   file_relpath : src/consmark/core/levels.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Message levels and message types.

Levels follow the RFC 5424 / PSR-3 severity order, so a *lower* value is
*more* severe. Message types describe the role of a message (progress line,
group start, summary, ...) independently of its severity.

Level and type groups are plain frozensets so they can be used directly as
keys when registering message formats and prefixes.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


class Level(IntEnum):
    """Severity of a message (lower is more severe)."""

    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFO = 6
    DEBUG = 7

    @classmethod
    def parse(cls, raw: str) -> Level | None:
        """Return the level named ``raw`` (case-insensitive), or ``None``."""
        member = cls.__members__.get(raw.strip().upper())
        if member is None and raw.strip().upper() == "WARN":
            return cls.WARNING
        return member


class MessageType(str, Enum):
    """Role of a message, used to select message formats and prefixes."""

    STANDARD = "standard"
    UNDECORATED = "undecorated"
    UNFORMATTED = "unformatted"
    PROGRESS = "progress"
    GROUP_START = "group_start"
    GROUP_END = "group_end"
    SUMMARY = "summary"
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def parse(cls, raw: str) -> MessageType | None:
        """Return the type whose value or name matches ``raw``, or ``None``."""
        token = raw.strip().lower().replace("-", "_")
        for member in cls:
            if token == member.value:
                return member
        return None


LEVELS_ALL: Final[frozenset[Level]] = frozenset(Level)
LEVELS_ERRORS: Final[frozenset[Level]] = frozenset(
    {Level.EMERGENCY, Level.ALERT, Level.CRITICAL, Level.ERROR}
)
LEVELS_ERRORS_AND_WARNINGS: Final[frozenset[Level]] = LEVELS_ERRORS | {Level.WARNING}
LEVELS_INFO: Final[frozenset[Level]] = frozenset({Level.NOTICE, Level.INFO, Level.DEBUG})
LEVELS_INFO_EXCEPT_DEBUG: Final[frozenset[Level]] = frozenset({Level.NOTICE, Level.INFO})

TYPES_ALL: Final[frozenset[MessageType]] = frozenset(MessageType)
TYPES_GROUP: Final[frozenset[MessageType]] = frozenset(
    {MessageType.GROUP_START, MessageType.GROUP_END}
)
