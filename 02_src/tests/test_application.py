"""Tests for Application."""

import pytest

from skillshare.app import Application
from skillshare.board import TalkBoard
from skillshare.config import DEFAULT_POLL_TIMEOUT


class TestApplicationStart:
    """Tests for Application.start()."""

    async def test_start_initializes_board(self):
        """Test that start builds the talk board."""
        app = Application(poll_timeout=1.0)
        await app.start()

        assert isinstance(app.board, TalkBoard)
        await app.stop()

    async def test_start_twice_keeps_board(self):
        """Test that a second start does not replace the running board."""
        app = Application(poll_timeout=1.0)
        await app.start()
        board = app.board
        board.put_talk("t1", "Alice", "Intro")

        await app.start()

        assert app.board is board
        assert app.board.get_talk("t1").presenter == "Alice"
        await app.stop()


class TestApplicationConfig:
    """Tests for poll timeout configuration."""

    def test_default_poll_timeout(self, monkeypatch):
        """Test the default timeout is used without configuration."""
        monkeypatch.delenv("POLL_TIMEOUT", raising=False)
        assert Application().poll_timeout == DEFAULT_POLL_TIMEOUT

    def test_poll_timeout_from_env(self, monkeypatch):
        """Test POLL_TIMEOUT is read from the environment."""
        monkeypatch.setenv("POLL_TIMEOUT", "15")
        assert Application().poll_timeout == 15.0

    def test_explicit_poll_timeout_wins(self, monkeypatch):
        """Test an explicit timeout overrides the environment."""
        monkeypatch.setenv("POLL_TIMEOUT", "15")
        assert Application(poll_timeout=0.5).poll_timeout == 0.5

    def test_invalid_poll_timeout(self, monkeypatch):
        """Test a non-positive timeout is rejected."""
        monkeypatch.setenv("POLL_TIMEOUT", "0")
        with pytest.raises(ValueError, match="POLL_TIMEOUT"):
            Application()


class TestApplicationStop:
    """Tests for Application.stop()."""

    async def test_stop_drops_board(self):
        """Test that stop releases the board."""
        app = Application(poll_timeout=1.0)
        await app.start()
        await app.stop()

        with pytest.raises(RuntimeError, match="not started"):
            _ = app.board

    async def test_stop_without_start(self):
        """Test that stop before start is harmless."""
        app = Application(poll_timeout=1.0)
        await app.stop()


class TestApplicationReset:
    """Tests for Application.reset()."""

    async def test_reset_clears_talks(self, application):
        """Test that reset drops talks and history."""
        application.board.put_talk("t1", "Alice", "Intro")

        await application.reset()

        assert application.board.list_talks() == []
        assert application.board.change_count == 0


class TestApplicationProperties:
    """Tests for Application properties."""

    async def test_board_property_raises_when_not_started(self):
        """Test that board property raises when not started."""
        app = Application(poll_timeout=1.0)

        with pytest.raises(RuntimeError, match="not started"):
            _ = app.board
