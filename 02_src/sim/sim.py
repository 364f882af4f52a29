"""SIM implementation - a long-polling client that mirrors the talk board."""

import asyncio
from typing import Protocol
from urllib.parse import quote

import httpx

from skillshare.logging_config import get_logger

logger = get_logger(__name__)


class ISim(Protocol):
    """Follow the talk board's change feed."""

    async def start(self) -> None:
        """Start the polling loop."""
        ...

    async def stop(self) -> None:
        """Stop the polling loop."""
        ...


class Sim:
    """
    Client that keeps a local copy of every talk.

    It fetches the full listing once, then repeatedly long-polls
    ``GET /talks?changesSince=<serverTime>`` using the server time from the
    previous answer, so client clock skew never causes a missed update.
    """

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        client: httpx.AsyncClient | None = None,
        poll_timeout: float = 120.0,
        retry_delay: float = 2.5,
    ):
        self._api_url = api_url.rstrip("/")
        self._client = client
        self._owns_client = client is None
        self._poll_timeout = poll_timeout
        self._retry_delay = retry_delay
        self._running = False
        self._task: asyncio.Task | None = None

        self.talks: dict[str, dict] = {}
        self.server_time: int | None = None
        self.updated = asyncio.Event()

    async def start(self) -> None:
        """Start the polling loop."""
        if self._running:
            return

        self._running = True
        if self._client is None:
            self._client = httpx.AsyncClient()

        self._task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        """Stop the polling loop."""
        self._running = False

        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def poll_once(self) -> dict:
        """Fetch the listing (first call) or the next batch of changes."""
        if not self._client:
            raise RuntimeError("SIM not started")

        params = {}
        if self.server_time is not None:
            params["changesSince"] = str(self.server_time)

        response = await self._client.get(
            f"{self._api_url}/talks", params=params, timeout=self._poll_timeout
        )
        response.raise_for_status()
        data = response.json()
        self._apply(data)
        return data

    def _apply(self, data: dict) -> None:
        server_time = data["serverTime"]
        talks = list(data["talks"])
        if not all(isinstance(talk, dict) and "title" in talk for talk in talks):
            raise ValueError("SIM: talk entries must be objects with a title")

        self.server_time = server_time
        for talk in talks:
            if talk.get("deleted"):
                self.talks.pop(talk["title"], None)
            else:
                self.talks[talk["title"]] = talk

        if talks:
            logger.info(
                "SIM: applied %s talk changes", len(talks),
                extra={"context": {"server_time": self.server_time}},
            )
            self.updated.set()

    async def _poll_loop(self) -> None:
        while self._running:
            try:
                await self.poll_once()
            except (httpx.HTTPError, ValueError, KeyError, TypeError):
                # Malformed answers are retried like network errors
                logger.exception("SIM: poll failed, retrying in %ss", self._retry_delay)
                await asyncio.sleep(self._retry_delay)

    async def propose_talk(self, title: str, presenter: str, summary: str) -> None:
        """Create or replace a talk."""
        await self._send(
            "PUT", self._talk_url(title), {"presenter": presenter, "summary": summary}
        )

    async def add_comment(self, title: str, author: str, message: str) -> None:
        """Add a comment to a talk."""
        await self._send(
            "POST",
            self._talk_url(title) + "/comments",
            {"author": author, "message": message},
        )

    async def delete_talk(self, title: str) -> None:
        """Delete a talk."""
        await self._send("DELETE", self._talk_url(title))

    def _talk_url(self, title: str) -> str:
        return f"{self._api_url}/talks/{quote(title, safe='')}"

    async def _send(self, method: str, url: str, body: dict | None = None) -> None:
        if not self._client:
            raise RuntimeError("SIM not started")

        response = await self._client.request(method, url, json=body, timeout=10.0)
        if response.status_code != 204:
            logger.error(
                "SIM: %s %s failed: %s %s",
                method, url, response.status_code, response.text,
            )
        response.raise_for_status()
