from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from metriker.domain.entities.timing import TimingMarks

Headers = Mapping[str, tuple[str, ...]]


def _text(value: bytes | str) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return str(value)


def decode_headers(raw: Iterable[tuple[bytes | str, bytes | str]] | None) -> dict[str, tuple[str, ...]]:
    """Group raw ASGI header pairs by lowercased name, keeping repeats.

    Apps that put ``str`` pairs in a response-start message are tolerated.
    """
    grouped: dict[str, list[str]] = {}
    for name, value in raw or ():
        grouped.setdefault(_text(name).lower(), []).append(_text(value))
    return {name: tuple(values) for name, values in grouped.items()}


def original_path(scope: Mapping[str, Any]) -> str:
    path = scope.get("path") or ""
    root_path = scope.get("root_path") or ""
    if root_path and not (path == root_path or path.startswith(root_path + "/")):
        return root_path + path
    return path


def client_host(scope: Mapping[str, Any]) -> str | None:
    client = scope.get("client")
    if not client:
        return None
    return client[0]


def _property_value(value: Any) -> str | None:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    if isinstance(value, (list, tuple)):
        parts = [_property_value(v) for v in value]
        if any(p is None for p in parts):
            return None
        return ",".join(p for p in parts if p is not None)
    return None


@dataclass(frozen=True, slots=True)
class RequestInfo:
    method: str
    url: str
    path: str
    http_version: str | None
    headers: Headers = field(default_factory=dict)
    properties: Mapping[str, str] = field(default_factory=dict)
    ip: str | None = None
    remote_address: str | None = None
    peer_address: str | None = None

    @classmethod
    def from_scope(
        cls,
        scope: Mapping[str, Any],
        *,
        remote_address: str | None = None,
    ) -> RequestInfo:
        """Snapshot request facts from an ASGI HTTP scope.

        ``remote_address`` is the client host cached when the exchange
        entered the middleware; ``peer_address`` is re-read from the scope.
        """
        path = original_path(scope)
        query = scope.get("query_string") or b""
        url = f"{path}?{query.decode('latin-1')}" if query else path

        properties: dict[str, str] = {}
        for name, value in scope.items():
            if name in ("headers", "state", "app", "extensions"):
                continue
            rendered = _property_value(value)
            if rendered is not None:
                properties[name.lower()] = rendered

        state = scope.get("state") or {}
        ip = state.get("ip") if isinstance(state, Mapping) else None

        return cls(
            method=scope.get("method", ""),
            url=url,
            path=path,
            http_version=scope.get("http_version"),
            headers=decode_headers(scope.get("headers")),
            properties=properties,
            ip=str(ip) if ip else None,
            remote_address=remote_address,
            peer_address=client_host(scope),
        )


@dataclass(frozen=True, slots=True)
class ResponseInfo:
    status: int | None = None
    headers: Headers = field(default_factory=dict)

    @classmethod
    def from_start_message(cls, message: Mapping[str, Any]) -> ResponseInfo:
        return cls(
            status=message.get("status"),
            headers=decode_headers(message.get("headers")),
        )


@dataclass(frozen=True, slots=True)
class Exchange:
    """Everything the token resolvers may read for one finished exchange."""

    request: RequestInfo
    response: ResponseInfo
    marks: TimingMarks
    rendered_at: int
