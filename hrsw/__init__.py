"""
hrsw - High Resolution Stopwatch

A small stopwatch for measuring elapsed time over one or more run
intervals, for benchmarking and instrumentation.

Key Features:
- Start/stop accumulation across any number of intervals
- Queries while running include the in-flight interval
- Swappable clock sources (monotonic, perf counter, CPU time, CUDA)
- Manual clock for deterministic tests
- Explicit policy for misbehaving clocks
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Core components
from .core.stopwatch import Stopwatch

# Clocks
from .clocks import (
    MonotonicClock,
    PerfCounterClock,
    ProcessTimeClock,
    ThreadTimeClock,
    CudaSynchronizedClock,
    ManualClock,
    get_clock
)

# Configuration and presets
from .config import StopwatchConfig, get_default_config
from .factory import (
    create_stopwatch,
    create_benchmark_stopwatch,
    create_cpu_stopwatch,
    create_cuda_stopwatch
)

# Types
from .types.enums import (
    ClockSource,
    StopwatchState,
    RegressionPolicy
)
from .types.protocols import IClock

# Exceptions
from .exceptions import (
    HrswError,
    ClockError,
    ClockRegressionError,
    ClockUnavailableError,
    ConfigurationError
)

# Public API
__all__ = [
    # Core components
    "Stopwatch",
    
    # Clocks
    "MonotonicClock",
    "PerfCounterClock",
    "ProcessTimeClock",
    "ThreadTimeClock",
    "CudaSynchronizedClock",
    "ManualClock",
    "get_clock",
    
    # Configuration
    "StopwatchConfig",
    "get_default_config",
    "create_stopwatch",
    "create_benchmark_stopwatch",
    "create_cpu_stopwatch",
    "create_cuda_stopwatch",
    
    # Types
    "ClockSource",
    "StopwatchState",
    "RegressionPolicy",
    "IClock",
    
    # Exceptions
    "HrswError",
    "ClockError",
    "ClockRegressionError",
    "ClockUnavailableError",
    "ConfigurationError",
]

# Version info
VERSION_INFO = tuple(map(int, __version__.split('.')))

def get_version() -> str:
    """Get the current version string."""
    return __version__

def get_version_info() -> tuple[int, ...]:
    """Get version as tuple of integers."""
    return VERSION_INFO
