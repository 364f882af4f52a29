"""Registry of suspended long-poll requests."""

import asyncio
import itertools

from ..clock import Clock, now_ms
from ..config import DEFAULT_POLL_TIMEOUT
from ..logging_config import get_logger
from ..models import ChangeSet

logger = get_logger(__name__)


class Waiter:
    """A suspended query awaiting either a change notification or a timeout."""

    def __init__(self, handle: int, since: float):
        self.handle = handle
        self.since = since
        self.timer: asyncio.TimerHandle | None = None
        self._future: asyncio.Future[ChangeSet] = (
            asyncio.get_running_loop().create_future()
        )

    @property
    def resolved(self) -> bool:
        """Whether an answer was delivered or the waiter was abandoned."""
        return self._future.done()

    def resolve(self, change_set: ChangeSet) -> bool:
        """Deliver the answer. Only the first call has any effect."""
        if self._future.done():
            return False
        self._future.set_result(change_set)
        return True

    def cancel_timer(self) -> None:
        if self.timer is not None:
            self.timer.cancel()
            self.timer = None

    def abandon(self) -> None:
        """Drop the waiter without an answer (server shutdown)."""
        self.cancel_timer()
        self._future.cancel()

    async def wait(self) -> ChangeSet:
        """Suspend until the waiter is resolved."""
        return await self._future


class WaiterRegistry:
    """
    Outstanding long-poll requests keyed by handle.

    A waiter leaves the registry exactly once: drained by a change
    notification, removed by its own timeout, or removed by its caller.
    Whichever path removes it is the one allowed to resolve it.
    """

    def __init__(self, timeout: float = DEFAULT_POLL_TIMEOUT, clock: Clock = now_ms):
        self._timeout = timeout
        self._clock = clock
        self._waiters: dict[int, Waiter] = {}
        self._handles = itertools.count(1)

    @property
    def timeout(self) -> float:
        return self._timeout

    def register(self, since: float) -> Waiter:
        """Store a waiter and arm its timeout."""
        waiter = Waiter(next(self._handles), since)
        waiter.timer = asyncio.get_running_loop().call_later(
            self._timeout, self._expire, waiter.handle
        )
        self._waiters[waiter.handle] = waiter

        logger.debug(
            "Waiter registered",
            extra={"context": {"handle": waiter.handle, "since": since}},
        )
        return waiter

    def cancel_if_present(self, handle: int) -> Waiter | None:
        """Remove a waiter if it is still registered. Idempotent."""
        waiter = self._waiters.pop(handle, None)
        if waiter is not None:
            waiter.cancel_timer()
        return waiter

    def drain_all(self) -> list[Waiter]:
        """Remove and return every registered waiter."""
        waiters = list(self._waiters.values())
        self._waiters.clear()
        for waiter in waiters:
            waiter.cancel_timer()
        return waiters

    def close(self) -> None:
        """Abandon every pending waiter."""
        waiters = self.drain_all()
        for waiter in waiters:
            waiter.abandon()
        if waiters:
            logger.info("Abandoned %s pending waiters", len(waiters))

    def _expire(self, handle: int) -> None:
        waiter = self.cancel_if_present(handle)
        if waiter is None:
            return

        logger.debug("Waiter timed out", extra={"context": {"handle": handle}})
        waiter.resolve(ChangeSet(server_time=self._clock()))

    def __len__(self) -> int:
        return len(self._waiters)
