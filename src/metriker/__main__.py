"""Entrypoint: python -m metriker"""
from __future__ import annotations

import uvicorn

from metriker.config import settings


def main() -> None:
    uvicorn.run(
        "metriker.app:create_app",
        factory=True,
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL,
    )


if __name__ == "__main__":
    main()
