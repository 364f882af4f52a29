"""Dispatcher module."""

from .dispatcher import NotificationDispatcher

__all__ = ["NotificationDispatcher"]
