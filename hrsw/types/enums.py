"""
Enumeration types for hrsw.

This module defines the enumeration types used for clock selection,
stopwatch state reporting and clock regression handling.
"""

from enum import IntEnum


class ClockSource(IntEnum):
    """Clock sources a stopwatch can read instants from."""
    MONOTONIC = 1
    PERF_COUNTER = 2
    PROCESS_TIME = 3
    THREAD_TIME = 4
    CUDA_SYNCHRONIZED = 5


class StopwatchState(IntEnum):
    """Run state of a stopwatch."""
    STOPPED = 0
    RUNNING = 1


class RegressionPolicy(IntEnum):
    """What to do when the clock reads earlier than the run-start instant."""
    RAISE = 1
    SATURATE = 2
