"""
Stopwatch implementation for hrsw.

A stopwatch accumulates the length of every run interval between
``start()`` and ``stop()`` until it is reset. While it runs, queries add
the in-flight interval on top of the accumulated total.

Example::

    stopwatch = Stopwatch.new()
    stopwatch.start()
    # do something and get the elapsed time
    elapsed = stopwatch.elapsed()
    # do something else and get the total elapsed time
    stopwatch.stop()
    total_elapsed = stopwatch.elapsed()
"""

from __future__ import annotations
import logging
import sys
from datetime import timedelta
from typing import Any, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from ..clocks import NS_PER_SECOND
from ..config import get_default_config
from ..exceptions import ClockRegressionError
from ..types.aliases import Nanoseconds
from ..types.enums import RegressionPolicy, StopwatchState
from ..types.protocols import IClock

logger = logging.getLogger(__name__)


class Stopwatch:
    """
    Accumulating stopwatch with two states, stopped and running.

    The stopwatch is running exactly when ``running_since`` holds an
    instant. ``start()`` on a running stopwatch and ``stop()`` on a stopped
    one are no-ops. It does no locking; share it between threads only
    behind the caller's own lock.

    If the clock reads earlier than ``running_since`` (a broken clock),
    ``RegressionPolicy.RAISE`` raises ``ClockRegressionError`` without
    touching the state and ``RegressionPolicy.SATURATE`` counts the
    interval as zero.
    """
    __slots__ = ('_running_since', '_accumulated_ns', '_clock', '_regression_policy')

    def __init__(
        self,
        clock: Optional[IClock] = None,
        regression_policy: Optional[RegressionPolicy] = None
    ):
        if clock is None or regression_policy is None:
            config = get_default_config()
            if clock is None:
                clock = config.create_clock()
            if regression_policy is None:
                regression_policy = config.regression_policy

        self._clock = clock
        self._regression_policy = RegressionPolicy(regression_policy)
        self._running_since: Optional[Nanoseconds] = None
        self._accumulated_ns = Nanoseconds(0)

    @classmethod
    def new(
        cls,
        clock: Optional[IClock] = None,
        regression_policy: Optional[RegressionPolicy] = None
    ) -> Self:
        """Create a stopped stopwatch with nothing accumulated."""
        return cls(clock=clock, regression_policy=regression_policy)

    @classmethod
    def new_started(
        cls,
        clock: Optional[IClock] = None,
        regression_policy: Optional[RegressionPolicy] = None
    ) -> Self:
        """Create a stopwatch and start it immediately."""
        stopwatch = cls(clock=clock, regression_policy=regression_policy)
        stopwatch.start()
        return stopwatch

    def start(self) -> None:
        """Start measuring. Has no effect if already running."""
        if self._running_since is None:
            self._running_since = self._clock.now_ns()

    def stop(self) -> None:
        """Stop measuring and add the finished interval to the total.

        Has no effect if never started or already stopped.
        """
        if self._running_since is not None:
            interval = self._interval_ns(self._clock.now_ns())
            self._accumulated_ns = Nanoseconds(self._accumulated_ns + interval)
            self._running_since = None

    def reset(self) -> None:
        """Stop without accumulating and clear the total."""
        self._running_since = None
        self._accumulated_ns = Nanoseconds(0)

    def reset_and_start(self) -> None:
        """Same as ``reset()`` followed by ``start()``."""
        self.reset()
        self.start()

    def elapsed_ns(self) -> Nanoseconds:
        """Total elapsed time in nanoseconds, including the running interval."""
        if self._running_since is None:
            return self._accumulated_ns
        return Nanoseconds(self._accumulated_ns + self._interval_ns(self._clock.now_ns()))

    def elapsed(self) -> float:
        """Total elapsed time in seconds, including the running interval."""
        return self.elapsed_ns() / NS_PER_SECOND

    def elapsed_timedelta(self) -> timedelta:
        """Total elapsed time as a ``timedelta`` (microsecond resolution)."""
        return timedelta(microseconds=self.elapsed_ns() / 1000)

    def is_running(self) -> bool:
        return self._running_since is not None

    @property
    def state(self) -> StopwatchState:
        return StopwatchState.RUNNING if self._running_since is not None else StopwatchState.STOPPED

    @property
    def running_since(self) -> Optional[Nanoseconds]:
        return self._running_since

    @property
    def accumulated_ns(self) -> Nanoseconds:
        """Sum of the completed intervals, excluding the running one."""
        return self._accumulated_ns

    @property
    def clock(self) -> IClock:
        return self._clock

    @property
    def regression_policy(self) -> RegressionPolicy:
        return self._regression_policy

    def _interval_ns(self, now: Nanoseconds) -> Nanoseconds:
        interval = now - self._running_since
        if interval >= 0:
            return Nanoseconds(interval)

        if self._regression_policy is RegressionPolicy.SATURATE:
            logger.warning(
                "Clock %r went backwards by %d ns, counting the interval as zero",
                self._clock, -interval
            )
            return Nanoseconds(0)

        logger.error(
            "Clock %r went backwards: started at %d ns, now %d ns",
            self._clock, self._running_since, now
        )
        raise ClockRegressionError(
            f"Clock went backwards by {-interval} ns since the stopwatch was started",
            started_ns=self._running_since,
            now_ns=now,
            clock=repr(self._clock)
        )

    def copy(self) -> Stopwatch:
        """Independent stopwatch with the same state, reading the same clock."""
        duplicate = Stopwatch(clock=self._clock, regression_policy=self._regression_policy)
        duplicate._running_since = self._running_since
        duplicate._accumulated_ns = self._accumulated_ns
        return duplicate

    __copy__ = copy

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Stopwatch):
            return NotImplemented
        return (
            self._running_since == other._running_since
            and self._accumulated_ns == other._accumulated_ns
            and self._clock is other._clock
            and self._regression_policy == other._regression_policy
        )

    __hash__ = None  # mutable

    def __enter__(self) -> Self:
        self.start()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.stop()

    def __repr__(self) -> str:
        return (
            f"Stopwatch(state={self.state.name}, accumulated_ns={self._accumulated_ns}, "
            f"running_since={self._running_since}, clock={self._clock!r})"
        )
