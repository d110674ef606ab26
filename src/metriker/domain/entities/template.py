from __future__ import annotations

from dataclasses import dataclass

from metriker.domain.value_objects.enums import TokenKind


@dataclass(frozen=True, slots=True)
class LiteralSegment:
    text: str


@dataclass(frozen=True, slots=True)
class TokenRef:
    """A token occurrence in a format string.

    ``text`` is the segment exactly as written (``:res[Content-Length]``) and
    is used as the key of the resolved token map. ``key`` is the normalized
    sub-key, only set for ``req``/``res`` tokens.
    """

    kind: TokenKind
    text: str
    key: str | None = None


Segment = LiteralSegment | TokenRef


@dataclass(frozen=True, slots=True)
class FormatTemplate:
    source: str
    segments: tuple[Segment, ...]

    @property
    def tokens(self) -> tuple[TokenRef, ...]:
        return tuple(s for s in self.segments if isinstance(s, TokenRef))
