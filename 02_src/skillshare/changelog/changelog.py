"""Append-only log of talk changes."""

from ..models import ChangeEvent


class ChangeLog:
    """
    Time-ordered sequence of change events.

    Entries are only ever appended, so timestamps never decrease from the
    oldest entry to the newest. The log is not compacted.
    """

    def __init__(self):
        self._events: list[ChangeEvent] = []

    def append(self, title: str, timestamp: int) -> ChangeEvent:
        """Record that a talk changed at the given time."""
        # Wall clock stepping backwards must not break the ordering
        if self._events and timestamp < self._events[-1].timestamp:
            timestamp = self._events[-1].timestamp

        event = ChangeEvent(title=title, timestamp=timestamp)
        self._events.append(event)
        return event

    def changes_since(self, since: float) -> list[str]:
        """
        Titles changed strictly after `since`, most recent first.

        Scans backwards from the newest entry and stops at the first entry
        that is not newer than `since`, so the cost is bounded by the number
        of new entries. Each title is reported once.
        """
        found: list[str] = []
        seen: set[str] = set()

        for event in reversed(self._events):
            if event.timestamp <= since:
                break
            if event.title in seen:
                continue
            seen.add(event.title)
            found.append(event.title)

        return found

    @property
    def last_timestamp(self) -> int | None:
        """Timestamp of the newest entry, if any."""
        return self._events[-1].timestamp if self._events else None

    def clear(self) -> None:
        """Drop every entry."""
        self._events.clear()

    def __len__(self) -> int:
        return len(self._events)
