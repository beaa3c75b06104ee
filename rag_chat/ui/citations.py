"""
Splits assistant text into plain-text and citation segments.

A citation is any ``[n]`` token; ``n`` is a 1-based position in the source
list returned with the answer. Numbers with no matching position (``[0]``,
``[7]`` with three sources) resolve to ``None`` and are rendered inert.
"""

import re
from dataclasses import dataclass
from typing import Any

CITATION_PATTERN = re.compile(r"\[(\d+)\]")


@dataclass(frozen=True)
class TextSegment:
    content: str


@dataclass(frozen=True)
class CitationSegment:
    content: str
    number: int
    source: dict[str, Any] | None

    @property
    def resolved(self) -> bool:
        return self.source is not None


Segment = TextSegment | CitationSegment


def resolve_source(number: int, sources: list[dict[str, Any]]) -> dict[str, Any] | None:
    if 1 <= number <= len(sources):
        return sources[number - 1]
    return None


def split_citations(text: str, sources: list[dict[str, Any]] | None) -> list[Segment]:
    if not sources:
        return [TextSegment(text)]

    segments: list[Segment] = []
    last = 0
    for m in CITATION_PATTERN.finditer(text):
        if m.start() > last:
            segments.append(TextSegment(text[last:m.start()]))
        number = int(m.group(1))
        segments.append(CitationSegment(m.group(0), number, resolve_source(number, sources)))
        last = m.end()

    if last < len(text):
        segments.append(TextSegment(text[last:]))
    return segments
