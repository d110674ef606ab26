"""Format string parsing.

A format string is split on whitespace. Each non-whitespace piece is either a
token (``:method``, ``:res[content-length]``) or literal text; whitespace runs
are kept as literals so the rendered line keeps the original spacing.
"""
from __future__ import annotations

import re
from functools import lru_cache

from metriker.domain.entities.template import (
    FormatTemplate,
    LiteralSegment,
    Segment,
    TokenRef,
)
from metriker.domain.value_objects.enums import TokenKind

_WHITESPACE = re.compile(r"(\s+)")
_TOKEN = re.compile(r":(?P<name>[\w-]{2,})(?:\[(?P<key>[^\[\]]*)\])?")


def parse_segment(piece: str) -> Segment:
    match = _TOKEN.fullmatch(piece)
    if match is None:
        return LiteralSegment(piece)

    try:
        kind = TokenKind(match["name"])
    except ValueError:
        return LiteralSegment(piece)

    if not kind.takes_key:
        return TokenRef(kind=kind, text=piece)

    key = (match["key"] or "").strip().lower()
    if not key:
        return LiteralSegment(piece)
    return TokenRef(kind=kind, text=piece, key=key)


@lru_cache(maxsize=128)
def parse_format(fmt: str) -> FormatTemplate:
    segments = tuple(
        parse_segment(piece) if not piece.isspace() else LiteralSegment(piece)
        for piece in _WHITESPACE.split(fmt)
        if piece
    )
    return FormatTemplate(source=fmt, segments=segments)
