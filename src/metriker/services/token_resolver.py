"""Token resolvers.

Each ``TokenKind`` maps to a pure function reading an ``Exchange``. Missing
data resolves to ``None``; the renderer turns that into an empty string.
"""
from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Callable, Mapping

from metriker.application.dto.exchange import Exchange, Headers
from metriker.domain.entities.template import TokenRef
from metriker.domain.value_objects.enums import TokenKind

logger = logging.getLogger(__name__)

Resolver = Callable[[Exchange, str | None], str | None]

_NS_PER_MS = 1_000_000


def _ms(start: int, end: int) -> str:
    return f"{max(end - start, 0) / _NS_PER_MS:.3f}"


def _header(headers: Headers, name: str) -> str | None:
    values = headers.get(name.lower())
    if not values:
        return None
    return ",".join(values)


def _url(exchange: Exchange, _key: str | None) -> str | None:
    return exchange.request.url or None


def _method(exchange: Exchange, _key: str | None) -> str | None:
    return exchange.request.method or None


def _status(exchange: Exchange, _key: str | None) -> str | None:
    status = exchange.response.status
    return None if status is None else str(status)


def _response_time(exchange: Exchange, _key: str | None) -> str | None:
    marks = exchange.marks
    if marks.started_at is None or marks.headers_sent_at is None:
        return None
    return _ms(marks.started_at, marks.headers_sent_at)


def _total_time(exchange: Exchange, _key: str | None) -> str | None:
    if exchange.marks.started_at is None:
        return None
    return _ms(exchange.marks.started_at, exchange.rendered_at)


def _http_version(exchange: Exchange, _key: str | None) -> str | None:
    return exchange.request.http_version


def _referrer(exchange: Exchange, _key: str | None) -> str | None:
    headers = exchange.request.headers
    return _header(headers, "referer") or _header(headers, "referrer")


def _remote_addr(exchange: Exchange, _key: str | None) -> str | None:
    request = exchange.request
    return request.ip or request.remote_address or request.peer_address


def _user_agent(exchange: Exchange, _key: str | None) -> str | None:
    return _header(exchange.request.headers, "user-agent")


def _req(exchange: Exchange, key: str | None) -> str | None:
    if not key:
        return ""
    value = _header(exchange.request.headers, key)
    if value is None:
        value = exchange.request.properties.get(key)
    return value if value is not None else ""


def _res(exchange: Exchange, key: str | None) -> str | None:
    if not key:
        return ""
    value = _header(exchange.response.headers, key)
    return value if value is not None else ""


RESOLVERS: Mapping[TokenKind, Resolver] = MappingProxyType(
    {
        TokenKind.URL: _url,
        TokenKind.METHOD: _method,
        TokenKind.STATUS: _status,
        TokenKind.RESPONSE_TIME: _response_time,
        TokenKind.TOTAL_TIME: _total_time,
        TokenKind.HTTP_VERSION: _http_version,
        TokenKind.REFERRER: _referrer,
        TokenKind.REMOTE_ADDR: _remote_addr,
        TokenKind.USER_AGENT: _user_agent,
        TokenKind.REQ: _req,
        TokenKind.RES: _res,
    }
)

_missing = set(TokenKind) - set(RESOLVERS)
if _missing:  # pragma: no cover
    raise RuntimeError(f"no resolver for token kinds: {sorted(_missing)}")


def get_resolver(kind: TokenKind) -> Resolver:
    return RESOLVERS[kind]


def resolve(ref: TokenRef, exchange: Exchange) -> str | None:
    resolver = get_resolver(ref.kind)
    key = ref.key if ref.kind.takes_key else None
    try:
        return resolver(exchange, key)
    except Exception:  # noqa: BLE001
        logger.debug("Failed to resolve %s", ref.text, exc_info=True)
        return None
