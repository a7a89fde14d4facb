"""Time sources for the engine.

Domain code never reads a clock; the engine passes `now` (epoch seconds)
into every operation. Clocks here are monotonically non-decreasing and
have whole-second resolution.
"""

import threading
import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


class SystemClock:
    """Wall clock truncated to seconds, never moving backwards."""

    def __init__(self) -> None:
        self._last = 0
        self._lock = threading.Lock()

    def now(self) -> int:
        with self._lock:
            self._last = max(self._last, int(time.time()))
            return self._last

    def observe(self, timestamp: int) -> None:
        """Never hand out a time earlier than `timestamp` (used after replay)."""
        with self._lock:
            self._last = max(self._last, timestamp)


class ManualClock:
    """Clock driven explicitly — tests and simulations."""

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def observe(self, timestamp: int) -> None:
        self._now = max(self._now, timestamp)

    def set(self, timestamp: int) -> None:
        if timestamp < self._now:
            raise ValueError(f"Clock cannot move backwards: {timestamp} < {self._now}")
        self._now = timestamp

    def advance(self, seconds: int) -> int:
        self.set(self._now + seconds)
        return self._now
