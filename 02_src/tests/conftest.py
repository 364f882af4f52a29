"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Manually advanced epoch-millisecond clock."""

    def __init__(self, start: int = 1_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int = 1) -> int:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    """Create a fake clock starting at t=1000ms."""
    return FakeClock()


@pytest.fixture
def store():
    """Create an empty talk store."""
    from skillshare.store import TalkStore

    return TalkStore()


@pytest.fixture
def change_log():
    """Create an empty change log."""
    from skillshare.changelog import ChangeLog

    return ChangeLog()


@pytest.fixture
def registry(clock):
    """Create a waiter registry with a short timeout."""
    from skillshare.waiters import WaiterRegistry

    return WaiterRegistry(timeout=0.2, clock=clock)


@pytest.fixture
def dispatcher(store, change_log, registry, clock):
    """Create a dispatcher over the store, log and registry fixtures."""
    from skillshare.clock import ServerClock
    from skillshare.dispatcher import NotificationDispatcher

    return NotificationDispatcher(
        store, change_log, registry, clock=ServerClock(clock)
    )


@pytest.fixture
def board(clock):
    """Create a talk board with a short poll timeout and a fake clock."""
    from skillshare.board import TalkBoard

    return TalkBoard(poll_timeout=0.2, clock=clock)


@pytest_asyncio.fixture
async def application():
    """Create and start an application with a short poll timeout."""
    from skillshare.app import Application

    app = Application(poll_timeout=0.2)
    await app.start()
    yield app
    await app.stop()


@pytest.fixture
def public_dir(tmp_path):
    """Create a public directory with an index page."""
    root = tmp_path / "public"
    root.mkdir()
    (root / "index.html").write_text("<h1>Skill Sharing</h1>", encoding="utf-8")
    return root


@pytest.fixture
def fastapi_app(application, public_dir):
    """Create the FastAPI app around the started application."""
    from skillshare.api import create_fastapi_app

    return create_fastapi_app(application, public_dir=public_dir)


@pytest_asyncio.fixture
async def client(fastapi_app):
    """Create an in-process HTTP client for the FastAPI app."""
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
