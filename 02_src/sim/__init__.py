"""Simulated talk board client."""

from .sim import ISim, Sim

__all__ = ["ISim", "Sim"]
