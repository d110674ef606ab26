"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

import pytest

from metriker.application.dto.exchange import Exchange, RequestInfo, ResponseInfo
from metriker.domain.entities.timing import TimingMarks

NS_PER_MS = 1_000_000


@dataclass
class FakeClock:
    """Returns the scripted ticks in order, then keeps returning the last one."""

    ticks: list[int] = field(default_factory=lambda: [0])
    calls: int = 0

    def now(self) -> int:
        index = min(self.calls, len(self.ticks) - 1)
        self.calls += 1
        return self.ticks[index]


@dataclass
class ListSink:
    lines: list[str] = field(default_factory=list)

    def write(self, line: str) -> None:
        self.lines.append(line)

    @property
    def text(self) -> str:
        return "".join(self.lines)


@dataclass
class RecordingCallback:
    calls: list[dict[str, str]] = field(default_factory=list)

    def __call__(self, tokens: dict[str, str]) -> None:
        self.calls.append(tokens)


def raw_headers(headers: Iterable[tuple[str, str]]) -> list[tuple[bytes, bytes]]:
    return [(k.encode("latin-1"), v.encode("latin-1")) for k, v in headers]


def make_scope(
    *,
    method: str = "GET",
    path: str = "/",
    query_string: bytes = b"",
    root_path: str = "",
    headers: Iterable[tuple[str, str]] = (),
    client: tuple[str, int] | None = ("10.0.0.1", 5000),
    state: dict[str, Any] | None = None,
    scope_type: str = "http",
) -> dict[str, Any]:
    scope: dict[str, Any] = {
        "type": scope_type,
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method,
        "scheme": "http",
        "path": path,
        "raw_path": path.encode(),
        "query_string": query_string,
        "root_path": root_path,
        "headers": raw_headers(headers),
        "client": client,
        "server": ("testserver", 80),
    }
    if state is not None:
        scope["state"] = state
    return scope


def make_app(
    *,
    status: int = 200,
    headers: Iterable[tuple[str, str]] = (),
    body: bytes = b"ok",
    chunks: int = 1,
):
    async def app(scope, receive, send):
        await send({
            "type": "http.response.start",
            "status": status,
            "headers": raw_headers(headers),
        })
        for index in range(chunks):
            await send({
                "type": "http.response.body",
                "body": body,
                "more_body": index < chunks - 1,
            })

    return app


async def receive_empty() -> dict[str, Any]:
    return {"type": "http.request", "body": b"", "more_body": False}


@dataclass
class SendCollector:
    messages: list[dict[str, Any]] = field(default_factory=list)

    async def __call__(self, message: dict[str, Any]) -> None:
        self.messages.append(message)


def make_exchange(
    *,
    scope: dict[str, Any] | None = None,
    status: int | None = 200,
    response_headers: Iterable[tuple[str, str]] = (),
    started_at: int | None = 0,
    headers_sent_at: int | None = None,
    rendered_at: int = 0,
    remote_address: str | None = None,
) -> Exchange:
    request = RequestInfo.from_scope(scope or make_scope(), remote_address=remote_address)
    response = ResponseInfo.from_start_message(
        {"status": status, "headers": raw_headers(response_headers)}
    )
    return Exchange(
        request=request,
        response=response,
        marks=TimingMarks(started_at=started_at, headers_sent_at=headers_sent_at),
        rendered_at=rendered_at,
    )


@pytest.fixture
def sink() -> ListSink:
    return ListSink()


@pytest.fixture
def callback() -> RecordingCallback:
    return RecordingCallback()
