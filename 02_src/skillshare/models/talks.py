"""Talk-related data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Comment:
    """A comment left on a talk. Immutable once appended."""

    author: str
    message: str

    def to_dict(self) -> dict:
        return {"author": self.author, "message": self.message}


@dataclass
class Talk:
    """A proposed talk, keyed by its title."""

    title: str
    presenter: str
    summary: str
    comments: list[Comment] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize the talk the way clients receive it."""
        return {
            "title": self.title,
            "presenter": self.presenter,
            "summary": self.summary,
            "comments": [comment.to_dict() for comment in self.comments],
        }
