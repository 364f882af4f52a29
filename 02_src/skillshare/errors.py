"""Errors raised by the talk board."""


class SkillShareError(Exception):
    """Base class for talk board errors."""


class TalkNotFound(SkillShareError):
    """An operation referenced a talk that does not exist."""

    def __init__(self, title: str):
        super().__init__(f"No talk '{title}' found")
        self.title = title


class BadRequest(SkillShareError):
    """Input was rejected before anything was mutated."""


class MalformedPayload(BadRequest):
    """A request body could not be decoded at all."""
