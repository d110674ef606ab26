from __future__ import annotations

from typing import Any, Callable, Protocol


class Sink(Protocol):
    def write(self, line: str, /) -> Any: ...


TokenCallback = Callable[[dict[str, str]], Any]
