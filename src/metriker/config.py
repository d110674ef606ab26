from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

DEFAULT_FORMAT = ":method :url :status :res[content-length] - :response-time ms"
DEFAULT_BLACKLIST = ["/favicon.ico"]


class Settings(BaseSettings):
    METRIKER_FORMAT: str = DEFAULT_FORMAT
    METRIKER_BLACKLIST: list[str] = DEFAULT_BLACKLIST

    HOST: str = "0.0.0.0"
    PORT: int = 8000
    LOG_LEVEL: Literal["critical", "error", "warning", "info", "debug", "trace"] = "info"

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
