"""Server time source for change timestamps and query answers."""

import time
from typing import Callable

# Returns the current time in milliseconds since the Unix epoch
Clock = Callable[[], int]


def now_ms() -> int:
    """Wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class ServerClock:
    """
    Hands out server times and change timestamps.

    Clients send back the last serverTime they received as changesSince, so a
    change must never be stamped with a time at or before a serverTime that
    was already handed out, or that client would skip it.
    """

    def __init__(self, source: Clock = now_ms):
        self._source = source
        self._last_issued = 0

    def server_time(self) -> int:
        """Time to report to a client as serverTime."""
        now = self._source()
        self._last_issued = max(self._last_issued, now)
        return now

    def change_time(self) -> int:
        """Timestamp for a change happening now."""
        return max(self._source(), self._last_issued + 1)
