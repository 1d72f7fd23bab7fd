"""Ports consumed by the engine's imperative shell."""

from .clock import ClockPort

__all__ = ["ClockPort"]
