"""Tests for the SIM long-polling client."""

import asyncio

import httpx
import pytest
import pytest_asyncio

from sim import Sim


@pytest_asyncio.fixture
async def sim_client(fastapi_app):
    """Create an HTTP client routed to the in-process app."""
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport) as c:
        yield c


@pytest.fixture
def sim(sim_client):
    """Create a SIM bound to the in-process app."""
    return Sim(api_url="http://test", client=sim_client, retry_delay=0.05)


class TestSimPollOnce:
    """Tests for Sim.poll_once()."""

    async def test_requires_client(self):
        """Test polling without a client."""
        with pytest.raises(RuntimeError, match="not started"):
            await Sim().poll_once()

    async def test_first_poll_is_full_listing(self, sim, application):
        """Test the first poll mirrors every talk."""
        application.board.put_talk("Intro", "Alice", "Basics")

        await sim.poll_once()

        assert set(sim.talks) == {"Intro"}
        assert sim.server_time is not None

    async def test_tombstone_removes_talk(self, sim, application):
        """Test a deleted talk disappears from the mirror."""
        application.board.put_talk("Intro", "Alice", "Basics")
        await sim.poll_once()
        await asyncio.sleep(0.01)

        application.board.remove_talk("Intro")
        await sim.poll_once()

        assert sim.talks == {}


class TestSimLoop:
    """Tests for the background polling loop."""

    async def test_follows_changes(self, sim):
        """Test talks and comments published by the SIM come back over the feed."""
        await sim.start()
        try:
            await asyncio.sleep(0.05)

            await sim.propose_talk("Intro talk", "Alice", "Basics")
            await asyncio.wait_for(sim.updated.wait(), 2.0)
            assert sim.talks["Intro talk"]["presenter"] == "Alice"

            sim.updated.clear()
            await sim.add_comment("Intro talk", "Bob", "Nice talk")
            await asyncio.wait_for(sim.updated.wait(), 2.0)
            assert sim.talks["Intro talk"]["comments"] == [
                {"author": "Bob", "message": "Nice talk"}
            ]

            sim.updated.clear()
            await sim.delete_talk("Intro talk")
            await asyncio.wait_for(sim.updated.wait(), 2.0)
            assert "Intro talk" not in sim.talks
        finally:
            await sim.stop()

    async def test_failed_request_raises(self, sim):
        """Test a rejected comment surfaces as an HTTP error."""
        await sim.start()
        try:
            with pytest.raises(httpx.HTTPStatusError):
                await sim.add_comment("ghost", "Bob", "hi")
        finally:
            await sim.stop()

    async def test_stop_is_idempotent(self, sim):
        """Test stopping a SIM that never started."""
        await sim.stop()
        await sim.stop()


class TestSimRetry:
    """Tests for recovery from bad answers."""

    async def test_retries_after_non_json_answer(self):
        """Test the loop keeps polling after a 200 whose body is not JSON."""
        answers = [
            httpx.Response(200, text="<html>proxy error</html>"),
            httpx.Response(
                200,
                json={
                    "serverTime": 2000,
                    "talks": [
                        {"title": "a", "presenter": "Alice", "summary": "A", "comments": []}
                    ],
                },
            ),
        ]

        async def handler(request: httpx.Request) -> httpx.Response:
            if answers:
                return answers.pop(0)
            # Hold later polls open like a long poll
            await asyncio.sleep(0.05)
            return httpx.Response(200, json={"serverTime": 2000, "talks": []})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
            sim = Sim(api_url="http://test", client=c, retry_delay=0.01)
            await sim.start()
            try:
                await asyncio.wait_for(sim.updated.wait(), 2.0)
            finally:
                await sim.stop()

        assert set(sim.talks) == {"a"}
        assert sim.server_time == 2000

    async def test_retries_after_incomplete_answer(self):
        """Test a payload missing serverTime is retried without touching the mirror."""
        answers = [
            httpx.Response(200, json={"talks": [{"title": "ghost"}]}),
            httpx.Response(200, json={"serverTime": 3000, "talks": [{"title": "b"}]}),
        ]

        async def handler(request: httpx.Request) -> httpx.Response:
            if answers:
                return answers.pop(0)
            # Hold later polls open like a long poll
            await asyncio.sleep(0.05)
            return httpx.Response(200, json={"serverTime": 3000, "talks": []})

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as c:
            sim = Sim(api_url="http://test", client=c, retry_delay=0.01)
            await sim.start()
            try:
                await asyncio.wait_for(sim.updated.wait(), 2.0)
            finally:
                await sim.stop()

        assert set(sim.talks) == {"b"}

    def test_apply_rejects_entries_without_title(self):
        """Test a malformed entry leaves the mirror untouched."""
        sim = Sim()
        with pytest.raises(ValueError):
            sim._apply({"serverTime": 1, "talks": [{"deleted": True}]})
        assert sim.talks == {}
        assert sim.server_time is None
