"""In-memory talk store."""

from typing import Protocol

from ..errors import BadRequest, TalkNotFound
from ..models import Comment, Talk


class IStore(Protocol):
    """Current value of every talk, keyed by title."""

    def get(self, title: str) -> Talk | None:
        """Get a talk by title."""
        ...

    def all(self) -> list[Talk]:
        """Get every talk (order not significant)."""
        ...

    def put(self, title: str, presenter: str, summary: str) -> Talk:
        """Create or fully replace a talk. Comments are reset."""
        ...

    def remove(self, title: str) -> bool:
        """Delete a talk. Returns whether it existed."""
        ...

    def append_comment(self, title: str, author: str, message: str) -> Talk:
        """Append a comment to an existing talk."""
        ...

    def clear(self) -> None:
        """Drop every talk."""
        ...


def _require_strings(kind: str, **fields: object) -> None:
    for name, value in fields.items():
        if not isinstance(value, str):
            raise BadRequest(f"Bad {kind} data: '{name}' must be a string")


class TalkStore:
    """Dict-backed talk store."""

    def __init__(self):
        self._talks: dict[str, Talk] = {}

    def get(self, title: str) -> Talk | None:
        """Get a talk by title."""
        return self._talks.get(title)

    def all(self) -> list[Talk]:
        """Get every talk in insertion order."""
        return list(self._talks.values())

    def put(self, title: str, presenter: str, summary: str) -> Talk:
        """Create or fully replace a talk. Comments are reset."""
        _require_strings("talk", title=title, presenter=presenter, summary=summary)

        talk = Talk(title=title, presenter=presenter, summary=summary)
        self._talks[title] = talk
        return talk

    def remove(self, title: str) -> bool:
        """Delete a talk. Missing titles are a no-op returning False."""
        return self._talks.pop(title, None) is not None

    def append_comment(self, title: str, author: str, message: str) -> Talk:
        """Append a comment to an existing talk."""
        _require_strings("comment", author=author, message=message)

        talk = self._talks.get(title)
        if talk is None:
            raise TalkNotFound(title)

        talk.comments.append(Comment(author=author, message=message))
        return talk

    def clear(self) -> None:
        """Drop every talk."""
        self._talks.clear()

    def __contains__(self, title: object) -> bool:
        return title in self._talks

    def __len__(self) -> int:
        return len(self._talks)
