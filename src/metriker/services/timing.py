"""Per-exchange timing capture.

``TimingCapture`` lives for one exchange only. ``started_at`` is taken on
construction, ``headers_sent_at`` on the first response-start message, and the
finished handler runs at most once, whether the response completed or the
downstream app bailed out.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from metriker.application.dto.exchange import ResponseInfo
from metriker.application.ports.clock import Clock
from metriker.domain.entities.timing import TimingMarks

logger = logging.getLogger(__name__)


class TimingCapture:
    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._started_at: int | None = clock.now()
        self._headers_sent_at: int | None = None
        self._on_finished: Callable[[], None] | None = None
        self._finished = False
        self.response = ResponseInfo()

    @property
    def headers_sent(self) -> bool:
        return self._headers_sent_at is not None

    @property
    def finished(self) -> bool:
        return self._finished

    def now(self) -> int:
        return self._clock.now()

    def mark_headers_sent(self, message: Mapping[str, Any]) -> bool:
        """Record the response-start mark. Returns False if already recorded."""
        if self._headers_sent_at is not None:
            return False
        sent_at = self._clock.now()
        self.response = ResponseInfo.from_start_message(message)
        self._headers_sent_at = sent_at
        return True

    def on_finished(self, handler: Callable[[], None]) -> None:
        self._on_finished = handler

    def finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        if self._on_finished is None:
            logger.debug("Exchange finished with no handler armed")
            return
        self._on_finished()

    def snapshot(self) -> TimingMarks:
        return TimingMarks(
            started_at=self._started_at,
            headers_sent_at=self._headers_sent_at,
        )
