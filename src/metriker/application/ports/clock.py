from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def now(self) -> int: ...


class MonotonicClock:
    """Default high-resolution clock, nanosecond ticks."""

    def now(self) -> int:
        return time.perf_counter_ns()
