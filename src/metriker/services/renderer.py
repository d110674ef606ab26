from __future__ import annotations

from dataclasses import dataclass, field

from metriker.application.dto.exchange import Exchange
from metriker.domain.entities.template import FormatTemplate, LiteralSegment
from metriker.services.token_resolver import resolve


@dataclass(frozen=True, slots=True)
class RenderResult:
    line: str
    tokens: dict[str, str] = field(default_factory=dict)


def render(template: FormatTemplate, exchange: Exchange) -> RenderResult:
    """Substitute every token segment in place, in one pass.

    Absent values render as an empty string. Repeated tokens resolve
    independently; the token map keeps one entry per distinct segment text.
    """
    parts: list[str] = []
    tokens: dict[str, str] = {}
    for segment in template.segments:
        if isinstance(segment, LiteralSegment):
            parts.append(segment.text)
            continue
        value = resolve(segment, exchange)
        if value is None:
            value = ""
        tokens[segment.text] = value
        parts.append(value)
    return RenderResult(line="".join(parts), tokens=tokens)
