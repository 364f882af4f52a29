"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol

from .board import TalkBoard
from .config import resolve_poll_timeout
from .logging_config import get_logger

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Build the talk board."""
        ...

    async def stop(self) -> None:
        """Abandon pending requests and drop the board."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...

    @property
    def board(self) -> TalkBoard:
        """Get the talk board."""
        ...


class Application:
    """Main application bootstrap."""

    def __init__(self, poll_timeout: float | None = None):
        env_timeout = os.getenv("POLL_TIMEOUT") if poll_timeout is None else poll_timeout
        self._poll_timeout = resolve_poll_timeout(env_timeout)

        # Created in start()
        self._board: TalkBoard | None = None

    async def start(self) -> None:
        """Build the talk board. Calling start twice keeps the running board."""
        if self._board is not None:
            return

        logger.info("Starting application")
        self._board = TalkBoard(poll_timeout=self._poll_timeout)
        logger.info(
            "TalkBoard initialized",
            extra={"context": {"poll_timeout": self._poll_timeout}},
        )

    async def stop(self) -> None:
        """Abandon pending requests and drop the board."""
        if self._board:
            self._board.close()
            self._board = None
            logger.info("Application stopped")

    async def reset(self) -> None:
        """Reset data between test runs."""
        if self._board:
            self._board.reset()

    @property
    def poll_timeout(self) -> float:
        return self._poll_timeout

    @property
    def board(self) -> TalkBoard:
        """Get talk board instance."""
        if not self._board:
            raise RuntimeError("Application not started")
        return self._board
