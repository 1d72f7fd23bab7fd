"""
Library status engine.

Derives loan and room-booking lifecycle status from record snapshots and
computes the deposit settlement that follows from it. Every derivation is a
pure function of (record, now); the clock is always injected.
"""

__version__ = "0.1.0"
