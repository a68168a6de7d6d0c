"""
Elapsed-time measurement for rpnkey.

StopWatch marks a start and a stop point on a monotonic high-resolution
clock and reports the difference truncated to microseconds, milliseconds
or seconds. Reading before both marks are set returns an arbitrary value
(unset marks count as 0 ns); it is not an error.
"""

import time


class StopWatch:
    """
    Wall-clock stopwatch.

    Usage:
        watch = StopWatch()
        watch.start()
        do_work()
        watch.stop()
        print(watch.get_ms())
    """

    def __init__(self) -> None:
        self._start_ns = 0
        self._end_ns = 0

    def start(self) -> None:
        """Mark the start point."""
        self._start_ns = time.perf_counter_ns()

    def stop(self) -> None:
        """Mark the stop point."""
        self._end_ns = time.perf_counter_ns()

    @property
    def elapsed_ns(self) -> int:
        """Raw difference between the two marks in nanoseconds."""
        return self._end_ns - self._start_ns

    def get_us(self) -> int:
        """Elapsed time in whole microseconds."""
        return _truncate(self.elapsed_ns, 1_000)

    def get_ms(self) -> int:
        """Elapsed time in whole milliseconds."""
        return _truncate(self.elapsed_ns, 1_000_000)

    def get_s(self) -> int:
        """Elapsed time in whole seconds."""
        return _truncate(self.elapsed_ns, 1_000_000_000)


def _truncate(ns: int, unit: int) -> int:
    # toward zero, like a duration_cast
    return -(-ns // unit) if ns < 0 else ns // unit
