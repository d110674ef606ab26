"""Request instrumentation middleware.

Pure ASGI rather than ``BaseHTTPMiddleware`` so the response-start and final
body messages can be observed as they are sent.
"""
from __future__ import annotations

import logging
from typing import Iterable

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from metriker.application.dto.exchange import (
    Exchange,
    RequestInfo,
    client_host,
    original_path,
)
from metriker.application.options import MetrikerOptions
from metriker.application.ports.clock import Clock, MonotonicClock
from metriker.application.ports.sink import Sink, TokenCallback
from metriker.config import Settings
from metriker.services.format_parser import parse_format
from metriker.services.renderer import RenderResult, render
from metriker.services.timing import TimingCapture

logger = logging.getLogger(__name__)


class MetrikerMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        *,
        format: str | None = None,
        blacklist: Iterable[str] | None = None,
        output: Sink | None = None,
        callback: TokenCallback | None = None,
        clock: Clock | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.app = app
        self.options = MetrikerOptions.build(
            format=format,
            blacklist=blacklist,
            output=output,
            callback=callback,
            settings=settings,
        )
        self.template = parse_format(self.options.format)
        self._clock = clock or MonotonicClock()

    def is_blacklisted(self, scope: Scope) -> bool:
        return original_path(scope) in self.options.blacklist

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        # Blacklisted paths skip instrumentation but still reach the app.
        if self.is_blacklisted(scope):
            await self.app(scope, receive, send)
            return

        capture = TimingCapture(self._clock)
        remote_address = client_host(scope)
        capture.on_finished(lambda: self._emit(scope, capture, remote_address))

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                try:
                    capture.mark_headers_sent(message)
                except Exception:  # noqa: BLE001
                    logger.exception("Failed to record response start for %s", scope.get("path"))
            await send(message)
            if message["type"] == "http.response.body" and not message.get("more_body", False):
                capture.finish()

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            capture.finish()

    def _emit(self, scope: Scope, capture: TimingCapture, remote_address: str | None) -> None:
        try:
            exchange = Exchange(
                request=RequestInfo.from_scope(scope, remote_address=remote_address),
                response=capture.response,
                marks=capture.snapshot(),
                rendered_at=capture.now(),
            )
            result = render(self.template, exchange)
        except Exception:  # noqa: BLE001
            logger.exception("Failed to render request line for %s", scope.get("path"))
            return

        self._notify(result)
        self._write(result)

    def _notify(self, result: RenderResult) -> None:
        callback = self.options.callback
        if callback is None:
            return
        try:
            callback(dict(result.tokens))
        except Exception:  # noqa: BLE001
            logger.exception("Request metrics callback failed")

    def _write(self, result: RenderResult) -> None:
        try:
            self.options.output.write(result.line + "\n")
        except Exception:  # noqa: BLE001
            logger.exception("Failed to write request line")
