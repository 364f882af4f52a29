"""Waiters module."""

from .registry import Waiter, WaiterRegistry

__all__ = ["Waiter", "WaiterRegistry"]
