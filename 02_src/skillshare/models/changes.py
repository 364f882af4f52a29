"""Change-tracking data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ChangeEvent:
    """A logged fact that a talk was mutated at a point in time."""

    title: str
    timestamp: int  # epoch milliseconds


@dataclass(frozen=True)
class Tombstone:
    """Stands in for a talk that was deleted inside a change window."""

    title: str

    def to_dict(self) -> dict:
        return {"title": self.title, "deleted": True}


@dataclass
class ChangeSet:
    """Answer to a talks query: serialized talks plus the server's clock."""

    server_time: int
    talks: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"serverTime": self.server_time, "talks": self.talks}
