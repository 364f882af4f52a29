"""TalkBoard: the service object behind the HTTP layer."""

import math
import re
from typing import Protocol

from .changelog import ChangeLog
from .clock import Clock, ServerClock, now_ms
from .config import DEFAULT_POLL_TIMEOUT
from .dispatcher import NotificationDispatcher
from .errors import BadRequest, TalkNotFound
from .logging_config import get_logger
from .models import ChangeSet, Talk
from .store import TalkStore
from .waiters import WaiterRegistry

logger = get_logger(__name__)

_DECIMAL = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?\Z")
_PREFIXED = re.compile(r"0([xXoObB])([0-9a-fA-F]+)\Z")
_RADIXES = {"x": 16, "o": 8, "b": 2}
_INFINITIES = {"Infinity": math.inf, "+Infinity": math.inf, "-Infinity": -math.inf}


class ITalkBoard(Protocol):
    """Talk CRUD plus the long-polling change feed."""

    def get_talk(self, title: str) -> Talk:
        """Get a talk or raise TalkNotFound."""
        ...

    def list_talks(self) -> list[Talk]:
        """Get every talk."""
        ...

    def put_talk(self, title: str, presenter: str, summary: str) -> Talk:
        """Create or replace a talk. Always a change."""
        ...

    def remove_talk(self, title: str) -> bool:
        """Delete a talk. A change only if it existed."""
        ...

    def append_comment(self, title: str, author: str, message: str) -> Talk:
        """Add a comment to an existing talk or raise TalkNotFound."""
        ...

    async def query_changes(self, since: str | float | None = None) -> ChangeSet:
        """Full listing, or changes since a timestamp (may suspend)."""
        ...


def parse_since(value: str | float | int) -> float:
    """
    Parse a changesSince value.

    Follows JavaScript Number() coercion, which is what existing clients
    expect: surrounding whitespace is ignored, a blank string means 0,
    0x/0o/0b prefixes and Infinity are accepted, and anything else that is
    not a plain decimal literal (digit separators, "inf", "nan") is rejected.
    """
    if isinstance(value, bool):
        raise BadRequest("Invalid parameter")

    if isinstance(value, (int, float)):
        number = float(value)
    else:
        number = _parse_js_number(value.strip())

    if math.isnan(number):
        raise BadRequest("Invalid parameter")
    return number


def _parse_js_number(text: str) -> float:
    if not text:
        return 0.0
    if text in _INFINITIES:
        return _INFINITIES[text]
    if _DECIMAL.match(text):
        return float(text)

    prefixed = _PREFIXED.match(text)
    if prefixed:
        try:
            return float(int(prefixed.group(2), _RADIXES[prefixed.group(1).lower()]))
        except ValueError:
            pass
    raise BadRequest("Invalid parameter")


class TalkBoard:
    """Owns the store, change log, waiter registry and dispatcher."""

    def __init__(
        self,
        poll_timeout: float = DEFAULT_POLL_TIMEOUT,
        clock: Clock = now_ms,
    ):
        server_clock = ServerClock(clock)
        self._store = TalkStore()
        self._change_log = ChangeLog()
        self._registry = WaiterRegistry(
            timeout=poll_timeout, clock=server_clock.server_time
        )
        self._dispatcher = NotificationDispatcher(
            self._store, self._change_log, self._registry, clock=server_clock
        )

    def get_talk(self, title: str) -> Talk:
        """Get a talk or raise TalkNotFound."""
        talk = self._store.get(title)
        if talk is None:
            raise TalkNotFound(title)
        return talk

    def list_talks(self) -> list[Talk]:
        """Get every talk."""
        return self._store.all()

    def put_talk(self, title: str, presenter: str, summary: str) -> Talk:
        """Create or replace a talk. Identical content still counts as a change."""
        talk = self._store.put(title, presenter, summary)
        self._dispatcher.register_change(title)
        return talk

    def remove_talk(self, title: str) -> bool:
        """Delete a talk. Deleting a missing talk succeeds but changes nothing."""
        existed = self._store.remove(title)
        if existed:
            self._dispatcher.register_change(title)
        return existed

    def append_comment(self, title: str, author: str, message: str) -> Talk:
        """Add a comment to an existing talk or raise TalkNotFound."""
        talk = self._store.append_comment(title, author, message)
        self._dispatcher.register_change(title)
        return talk

    async def query_changes(self, since: str | float | None = None) -> ChangeSet:
        """Full listing, or changes since a timestamp (may suspend)."""
        since_value = None if since is None else parse_since(since)
        return await self._dispatcher.query(since_value)

    def reset(self) -> None:
        """Drop every talk and the change history. Waiters stay registered."""
        self._store.clear()
        self._change_log.clear()
        logger.info("Talk board reset")

    def close(self) -> None:
        """Abandon pending long-poll requests."""
        self._registry.close()

    @property
    def pending_waiters(self) -> int:
        """Number of suspended long-poll requests."""
        return len(self._registry)

    @property
    def change_count(self) -> int:
        """Number of logged change events."""
        return len(self._change_log)
