"""Skill-sharing talk board with a long-polling change feed."""

from .app import Application, IApplication
from .board import ITalkBoard, TalkBoard, parse_since
from .changelog import ChangeLog
from .clock import ServerClock, now_ms
from .dispatcher import NotificationDispatcher
from .errors import BadRequest, MalformedPayload, SkillShareError, TalkNotFound
from .models import ChangeEvent, ChangeSet, Comment, Talk, Tombstone
from .store import IStore, TalkStore
from .waiters import Waiter, WaiterRegistry

__all__ = [
    # Application
    "Application",
    "IApplication",
    # Models
    "Talk",
    "Comment",
    "ChangeEvent",
    "ChangeSet",
    "Tombstone",
    # Components
    "IStore",
    "TalkStore",
    "ChangeLog",
    "ServerClock",
    "now_ms",
    "Waiter",
    "WaiterRegistry",
    "NotificationDispatcher",
    "ITalkBoard",
    "TalkBoard",
    "parse_since",
    # Errors
    "SkillShareError",
    "TalkNotFound",
    "BadRequest",
    "MalformedPayload",
]
