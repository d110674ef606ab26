from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Iterable

from metriker.application.exceptions import ConfigurationError
from metriker.application.ports.sink import Sink, TokenCallback
from metriker.config import Settings, settings as default_settings


@dataclass(frozen=True, slots=True)
class MetrikerOptions:
    """Middleware configuration, fixed for the lifetime of one middleware."""

    format: str
    blacklist: frozenset[str]
    output: Sink
    callback: TokenCallback | None = None

    @classmethod
    def build(
        cls,
        *,
        format: str | None = None,
        blacklist: Iterable[str] | None = None,
        output: Sink | None = None,
        callback: TokenCallback | None = None,
        settings: Settings | None = None,
    ) -> MetrikerOptions:
        """Merge explicit arguments over ``settings`` and validate them."""
        settings = settings or default_settings

        if format is None:
            format = settings.METRIKER_FORMAT
        if not isinstance(format, str):
            raise ConfigurationError(f"format must be a string, got {type(format).__name__}")

        if blacklist is None:
            blacklist = settings.METRIKER_BLACKLIST
        if isinstance(blacklist, (str, bytes)):
            raise ConfigurationError("blacklist must be a collection of paths, not a single string")

        if output is None:
            output = sys.stdout
        if not callable(getattr(output, "write", None)):
            raise ConfigurationError("output must expose a callable write()")

        if callback is not None and not callable(callback):
            raise ConfigurationError("callback must be callable")

        return cls(
            format=format,
            blacklist=frozenset(blacklist),
            output=output,
            callback=callback,
        )
