from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TimingMarks:
    """Monotonic clock ticks in nanoseconds."""

    started_at: int | None
    headers_sent_at: int | None = None
