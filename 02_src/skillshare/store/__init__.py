"""Store module."""

from .store import IStore, TalkStore

__all__ = ["IStore", "TalkStore"]
