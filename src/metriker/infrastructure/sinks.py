from __future__ import annotations

import logging


class LoggingSink:
    """Output sink that forwards each rendered line to a ``logging.Logger``."""

    def __init__(self, logger: logging.Logger | str = "metriker.access", level: int = logging.INFO) -> None:
        if isinstance(logger, str):
            logger = logging.getLogger(logger)
        self._logger = logger
        self._level = level

    def write(self, line: str) -> None:
        self._logger.log(self._level, "%s", line.rstrip("\n"))
