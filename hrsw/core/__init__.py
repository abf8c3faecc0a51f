"""
Core components for hrsw.

This module provides the stopwatch state machine.
"""

from .stopwatch import Stopwatch

__all__ = [
    "Stopwatch",
]
