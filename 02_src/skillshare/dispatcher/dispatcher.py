"""NotificationDispatcher: wakes long-poll waiters when talks change."""

from ..changelog import ChangeLog
from ..clock import ServerClock
from ..logging_config import get_logger
from ..models import ChangeEvent, ChangeSet, Tombstone
from ..store import IStore
from ..waiters import WaiterRegistry

logger = get_logger(__name__)


class NotificationDispatcher:
    """
    Ties the store, the change log and the waiter registry together.

    `register_change` has no suspension point, so on a single event loop
    the append and the drain-and-notify step run as one unit: a waiter is
    either drained by this call or registered after the new event is
    already visible to it.
    """

    def __init__(
        self,
        store: IStore,
        change_log: ChangeLog,
        registry: WaiterRegistry,
        clock: ServerClock | None = None,
    ):
        self._store = store
        self._change_log = change_log
        self._registry = registry
        self._clock = clock or ServerClock()

    def snapshot(self, talks: list[dict]) -> ChangeSet:
        """Wrap serialized talks with the current server time."""
        return ChangeSet(server_time=self._clock.server_time(), talks=talks)

    def changed_talks(self, since: float) -> list[dict]:
        """Current value of every talk changed after `since`, tombstones for deleted ones."""
        found = []
        for title in self._change_log.changes_since(since):
            talk = self._store.get(title)
            if talk is not None:
                found.append(talk.to_dict())
            else:
                found.append(Tombstone(title).to_dict())
        return found

    def register_change(self, title: str) -> ChangeEvent:
        """Log a change and answer every waiting query."""
        event = self._change_log.append(title, self._clock.change_time())

        woken = 0
        for waiter in self._registry.drain_all():
            if waiter.resolve(self.snapshot(self.changed_talks(waiter.since))):
                woken += 1

        logger.info(
            "Change registered",
            extra={
                "context": {
                    "title": title,
                    "timestamp": event.timestamp,
                    "waiters_woken": woken,
                }
            },
        )
        return event

    async def query(self, since: float | None) -> ChangeSet:
        """
        Answer a talks query.

        Without `since` the full listing is returned. Otherwise changes after
        `since` are returned right away when there are any; if there are
        none the call suspends until the next change or the poll timeout.
        """
        if since is None:
            return self.snapshot([talk.to_dict() for talk in self._store.all()])

        changed = self.changed_talks(since)
        if changed:
            return self.snapshot(changed)

        waiter = self._registry.register(since)
        try:
            return await waiter.wait()
        finally:
            # No-op unless the caller was cancelled while suspended
            self._registry.cancel_if_present(waiter.handle)
