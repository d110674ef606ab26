from __future__ import annotations

from enum import StrEnum


class TokenKind(StrEnum):
    URL = "url"
    METHOD = "method"
    STATUS = "status"
    RESPONSE_TIME = "response-time"
    TOTAL_TIME = "total-time"
    HTTP_VERSION = "http-version"
    REFERRER = "referrer"
    REMOTE_ADDR = "remote-addr"
    USER_AGENT = "user-agent"
    REQ = "req"
    RES = "res"

    @property
    def takes_key(self) -> bool:
        return self in (TokenKind.REQ, TokenKind.RES)
