from __future__ import annotations


class MetrikerError(Exception):
    """Base metriker error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ConfigurationError(MetrikerError):
    pass
