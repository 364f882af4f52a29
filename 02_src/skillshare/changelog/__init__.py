"""ChangeLog module."""

from .changelog import ChangeLog

__all__ = ["ChangeLog"]
