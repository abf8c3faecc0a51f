"""
Type aliases for hrsw.

This module defines type aliases used throughout the library
for better type safety and code clarity.
"""

from typing import NewType

# Instants and durations are integer nanoseconds
Nanoseconds = NewType('Nanoseconds', int)
