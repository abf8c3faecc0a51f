from __future__ import annotations
from typing import Optional

from .clocks import CudaSynchronizedClock, PerfCounterClock, ProcessTimeClock
from .config import StopwatchConfig, get_default_config
from .core.stopwatch import Stopwatch


def create_stopwatch(
    started: bool = False,
    config: Optional[StopwatchConfig] = None,
    **kwargs
) -> Stopwatch:
    """Create a stopwatch from a config (the environment default if omitted)."""
    config = config or get_default_config()
    kwargs.setdefault('regression_policy', config.regression_policy)
    if kwargs.get('clock') is None:
        kwargs['clock'] = config.create_clock()
    
    if started:
        return Stopwatch.new_started(**kwargs)
    return Stopwatch.new(**kwargs)


def create_benchmark_stopwatch(started: bool = False) -> Stopwatch:
    """Create a stopwatch on the highest resolution clock."""
    return create_stopwatch(started=started, clock=PerfCounterClock())


def create_cpu_stopwatch(started: bool = False) -> Stopwatch:
    """Create a stopwatch measuring process CPU time instead of elapsed time."""
    return create_stopwatch(started=started, clock=ProcessTimeClock())


def create_cuda_stopwatch(started: bool = False, device: Optional[object] = None) -> Stopwatch:
    """Create a stopwatch that waits for queued CUDA work on every read."""
    return create_stopwatch(started=started, clock=CudaSynchronizedClock(device))
