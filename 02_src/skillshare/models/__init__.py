"""Core data models for the talk board."""

from .talks import Comment, Talk
from .changes import ChangeEvent, ChangeSet, Tombstone

__all__ = [
    # Talks
    "Talk",
    "Comment",
    # Changes
    "ChangeEvent",
    "ChangeSet",
    "Tombstone",
]
