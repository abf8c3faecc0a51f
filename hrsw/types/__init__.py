"""
Type definitions and protocols for hrsw.

This module provides type definitions, protocols, and enumerations
used throughout the hrsw library for type safety and clarity.
"""

from .enums import (
    ClockSource,
    StopwatchState,
    RegressionPolicy
)
from .protocols import IClock
from .aliases import Nanoseconds

__all__ = [
    # Enums
    "ClockSource",
    "StopwatchState",
    "RegressionPolicy",
    
    # Protocols
    "IClock",
    
    # Type aliases
    "Nanoseconds",
]
