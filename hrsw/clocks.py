"""
Clock sources for hrsw.

Every clock satisfies the ``IClock`` protocol: ``now_ns()`` returns an
instant in integer nanoseconds that never decreases between reads, and
``resolution_ns`` reports the smallest step the clock can observe.
Instants from different clocks are not comparable with each other.
"""

from __future__ import annotations
import logging
import time
from typing import Callable, Dict, Optional

from .exceptions import ClockUnavailableError
from .types.aliases import Nanoseconds
from .types.enums import ClockSource
from .types.protocols import IClock

# Optional dependencies
try:
    import torch
    HAS_TORCH = True
except ImportError:
    HAS_TORCH = False

logger = logging.getLogger(__name__)

NS_PER_SECOND = 1_000_000_000


def _resolution_of(name: str) -> Nanoseconds:
    resolution = time.get_clock_info(name).resolution
    return Nanoseconds(max(1, round(resolution * NS_PER_SECOND)))


class _SystemClock:
    """Clock backed by one of the ``time`` module's ``*_ns`` functions."""
    __slots__ = ('_read', '_resolution_ns')

    clock_name = ''

    def __init__(self, read: Callable[[], int]):
        self._read = read
        self._resolution_ns = _resolution_of(self.clock_name)

    @property
    def resolution_ns(self) -> Nanoseconds:
        return self._resolution_ns

    def now_ns(self) -> Nanoseconds:
        return Nanoseconds(self._read())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(resolution_ns={self._resolution_ns})"


class MonotonicClock(_SystemClock):
    """System monotonic clock, unaffected by wall-clock adjustments."""
    __slots__ = ()

    clock_name = 'monotonic'

    def __init__(self):
        super().__init__(time.monotonic_ns)


class PerfCounterClock(_SystemClock):
    """Highest resolution clock available, suited to short benchmarks."""
    __slots__ = ()

    clock_name = 'perf_counter'

    def __init__(self):
        super().__init__(time.perf_counter_ns)


class ProcessTimeClock(_SystemClock):
    """CPU time (user + system) of the current process; excludes sleep."""
    __slots__ = ()

    clock_name = 'process_time'

    def __init__(self):
        super().__init__(time.process_time_ns)


class ThreadTimeClock(_SystemClock):
    """CPU time of the calling thread; excludes sleep."""
    __slots__ = ()

    clock_name = 'thread_time'

    def __init__(self):
        super().__init__(time.thread_time_ns)


class CudaSynchronizedClock:
    """
    Performance counter that waits for queued CUDA work before each read.

    Kernel launches return before the device has finished, so reading a
    plain host clock around GPU code only measures launch overhead. This
    clock calls ``torch.cuda.synchronize()`` first whenever CUDA is
    available and falls back to the bare performance counter otherwise.
    """
    __slots__ = ('_device', '_resolution_ns', '_cuda_available')

    def __init__(self, device: Optional[object] = None):
        if not HAS_TORCH:
            raise ClockUnavailableError(
                "CudaSynchronizedClock requires torch to be installed",
                clock_source=ClockSource.CUDA_SYNCHRONIZED.name
            )

        self._device = device
        self._resolution_ns = _resolution_of('perf_counter')
        self._cuda_available = torch.cuda.is_available()

        if not self._cuda_available:
            logger.debug("CUDA is not available, CudaSynchronizedClock reads the host clock only")

    @property
    def resolution_ns(self) -> Nanoseconds:
        return self._resolution_ns

    @property
    def synchronizes(self) -> bool:
        """Whether reads wait for the CUDA device."""
        return self._cuda_available

    def now_ns(self) -> Nanoseconds:
        if self._cuda_available:
            torch.cuda.synchronize(self._device)
        return Nanoseconds(time.perf_counter_ns())

    def __repr__(self) -> str:
        return f"CudaSynchronizedClock(device={self._device!r}, synchronizes={self._cuda_available})"


class ManualClock:
    """
    Clock driven by the caller, for deterministic tests.

    Every ``now_ns()`` returns the current instant and then advances it by
    ``step_ns``. With the default step of zero time only moves through
    ``advance()``, ``advance_seconds()`` and ``set_ns()``. ``set_ns()`` may
    move time backwards, which no real monotonic clock does.
    """
    __slots__ = ('_now_ns', '_step_ns', '_reads')

    def __init__(self, start_ns: int = 0, step_ns: int = 0):
        if step_ns < 0:
            raise ValueError(f"step_ns must be non-negative: {step_ns}")
        self._now_ns = start_ns
        self._step_ns = step_ns
        self._reads = 0

    @property
    def resolution_ns(self) -> Nanoseconds:
        return Nanoseconds(1)

    @property
    def reads(self) -> int:
        """Number of ``now_ns()`` calls so far."""
        return self._reads

    def now_ns(self) -> Nanoseconds:
        now = self._now_ns
        self._now_ns += self._step_ns
        self._reads += 1
        return Nanoseconds(now)

    def peek_ns(self) -> Nanoseconds:
        """Current instant, without counting as a read or stepping."""
        return Nanoseconds(self._now_ns)

    def advance(self, ns: int) -> None:
        if ns < 0:
            raise ValueError(f"Cannot advance by a negative amount: {ns}")
        self._now_ns += ns

    def advance_seconds(self, seconds: float) -> None:
        self.advance(round(seconds * NS_PER_SECOND))

    def set_ns(self, ns: int) -> None:
        self._now_ns = ns

    def __repr__(self) -> str:
        return f"ManualClock(now_ns={self._now_ns}, step_ns={self._step_ns})"


_CLOCK_FACTORIES: Dict[ClockSource, Callable[[], IClock]] = {
    ClockSource.MONOTONIC: MonotonicClock,
    ClockSource.PERF_COUNTER: PerfCounterClock,
    ClockSource.PROCESS_TIME: ProcessTimeClock,
    ClockSource.THREAD_TIME: ThreadTimeClock,
    ClockSource.CUDA_SYNCHRONIZED: CudaSynchronizedClock,
}


def get_clock(source: ClockSource = ClockSource.MONOTONIC) -> IClock:
    """Build a clock for the given source."""
    try:
        factory = _CLOCK_FACTORIES[ClockSource(source)]
    except (KeyError, ValueError):
        raise ClockUnavailableError(f"Unknown clock source: {source!r}", clock_source=str(source)) from None

    clock = factory()
    logger.debug("Created %r for clock source %s", clock, ClockSource(source).name)
    return clock


__all__ = [
    "MonotonicClock",
    "PerfCounterClock",
    "ProcessTimeClock",
    "ThreadTimeClock",
    "CudaSynchronizedClock",
    "ManualClock",
    "get_clock",
    "HAS_TORCH",
    "NS_PER_SECOND",
]
