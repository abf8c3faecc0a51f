import time

import pytest
from unittest.mock import patch

from hrsw import clocks
from hrsw.clocks import (
    CudaSynchronizedClock,
    ManualClock,
    MonotonicClock,
    PerfCounterClock,
    ProcessTimeClock,
    ThreadTimeClock,
    get_clock,
)
from hrsw.exceptions import ClockUnavailableError
from hrsw.types import ClockSource, IClock


class TestSystemClocks:
    @pytest.mark.parametrize("clock_type", [
        MonotonicClock, PerfCounterClock, ProcessTimeClock, ThreadTimeClock
    ])
    def test_satisfies_protocol(self, clock_type):
        clock = clock_type()

        assert isinstance(clock, IClock)
        assert clock.resolution_ns >= 1
        assert isinstance(clock.now_ns(), int)

    @pytest.mark.parametrize("clock_type", [MonotonicClock, PerfCounterClock])
    def test_non_decreasing(self, clock_type):
        clock = clock_type()
        readings = [clock.now_ns() for _ in range(100)]

        assert readings == sorted(readings)

    def test_monotonic_advances_across_sleep(self):
        clock = MonotonicClock()
        before = clock.now_ns()
        time.sleep(0.01)

        assert clock.now_ns() - before >= 10_000_000

    def test_repr_names_clock(self):
        assert "PerfCounterClock" in repr(PerfCounterClock())


class TestManualClock:
    def test_fixed_step(self):
        clock = ManualClock(start_ns=100, step_ns=5)

        assert [clock.now_ns() for _ in range(3)] == [100, 105, 110]
        assert clock.reads == 3
        assert clock.peek_ns() == 115

    def test_advance(self):
        clock = ManualClock()
        clock.advance(7)
        clock.advance_seconds(0.5)

        assert clock.now_ns() == 500_000_007

    def test_advance_rejects_negative(self):
        with pytest.raises(ValueError, match="negative"):
            ManualClock().advance(-1)

    def test_negative_step_rejected(self):
        with pytest.raises(ValueError, match="step_ns"):
            ManualClock(step_ns=-1)

    def test_set_ns_can_go_backwards(self):
        clock = ManualClock(start_ns=50)
        clock.set_ns(10)

        assert clock.now_ns() == 10

    def test_satisfies_protocol(self):
        clock = ManualClock()
        assert isinstance(clock, IClock)
        assert clock.resolution_ns == 1


class TestCudaSynchronizedClock:
    def test_requires_torch(self):
        with patch.object(clocks, "HAS_TORCH", False):
            with pytest.raises(ClockUnavailableError, match="requires torch") as exc_info:
                CudaSynchronizedClock()

        assert exc_info.value.clock_source == "CUDA_SYNCHRONIZED"

    def test_without_cuda_reads_host_clock(self):
        torch = pytest.importorskip("torch")

        with patch.object(torch.cuda, "is_available", return_value=False), \
                patch.object(torch.cuda, "synchronize") as synchronize:
            clock = CudaSynchronizedClock()
            first = clock.now_ns()
            second = clock.now_ns()

        assert not clock.synchronizes
        assert second >= first
        synchronize.assert_not_called()

    def test_synchronizes_before_each_read(self):
        torch = pytest.importorskip("torch")

        with patch.object(torch.cuda, "is_available", return_value=True), \
                patch.object(torch.cuda, "synchronize") as synchronize:
            clock = CudaSynchronizedClock(device="cuda:0")
            clock.now_ns()
            clock.now_ns()

        assert clock.synchronizes
        assert synchronize.call_count == 2
        synchronize.assert_called_with("cuda:0")


class TestGetClock:
    @pytest.mark.parametrize("source,clock_type", [
        (ClockSource.MONOTONIC, MonotonicClock),
        (ClockSource.PERF_COUNTER, PerfCounterClock),
        (ClockSource.PROCESS_TIME, ProcessTimeClock),
        (ClockSource.THREAD_TIME, ThreadTimeClock),
    ])
    def test_maps_source_to_clock(self, source, clock_type):
        assert isinstance(get_clock(source), clock_type)

    def test_default_is_monotonic(self):
        assert isinstance(get_clock(), MonotonicClock)

    def test_accepts_plain_int(self):
        assert isinstance(get_clock(2), PerfCounterClock)

    def test_unknown_source(self):
        with pytest.raises(ClockUnavailableError, match="Unknown clock source"):
            get_clock(99)
