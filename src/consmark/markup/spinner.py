# topmark:header:start
#
#   project      : ConsMark
#   file         : spinner.py
#   file_relpath : src/consmark/markup/spinner.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Time-gated spinner for progress message prefixes.

The spinner is the only mutable state a `Formatter` owns. It advances at most
once per interval, no matter how often a prefix is requested, so a caller can
redraw a progress line as often as it likes without the animation speeding
up.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Final

from consmark.config.logging import get_logger
from consmark.constants import DEFAULT_SPINNER_INTERVAL_MS

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

logger = get_logger(__name__)

SPINNER_FRAMES: Final[tuple[str, ...]] = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")


class SpinnerState:
    """Frame index plus the time of the last advance.

    Args:
        frames (Sequence[str]): Animation frames (must not be empty).
        interval_ms (int): Minimum number of milliseconds between two advances.
        clock (Callable[[], float] | None): Monotonic clock returning seconds;
            defaults to `time.monotonic`.
    """

    def __init__(
        self,
        frames: Sequence[str] = SPINNER_FRAMES,
        interval_ms: int = DEFAULT_SPINNER_INTERVAL_MS,
        clock: Callable[[], float] | None = None,
    ) -> None:
        if not frames:
            raise ValueError("Spinner needs at least one frame")
        self.frames: tuple[str, ...] = tuple(frames)
        self.interval: float = max(0, interval_ms) / 1000
        self._clock: Callable[[], float] = clock or time.monotonic
        self.index: int = 0
        self.last_advance: float | None = None

    @property
    def frame(self) -> str:
        return self.frames[self.index]

    def tick(self) -> str:
        """Advance the frame if the interval has elapsed, then return it.

        The first call only records the time and returns the first frame.
        """
        now = self._clock()
        if self.last_advance is None:
            self.last_advance = now
        elif now - self.last_advance >= self.interval:
            self.index = (self.index + 1) % len(self.frames)
            self.last_advance = now
            logger.trace("spinner advanced to frame %d", self.index)
        return self.frame

    def next_prefix(self) -> str:
        """Return the prefix for a progress message (frame plus a space)."""
        return f"{self.tick()} "
