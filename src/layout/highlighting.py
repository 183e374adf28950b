"""Inline semantic highlighting as spans over the original text.

Spans are computed once and carried alongside the text; markup is only
injected by ``render_highlights`` at the very end, so the text itself is
never rewritten in place.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple, Union

CURRENCY = "currency"
PERCENTAGE = "percentage"
NUMBER = "number"
DURATION = "duration"

# Earlier kinds win when spans overlap ("£6,174" is currency, not a number).
HIGHLIGHT_PATTERNS: List[Tuple[str, re.Pattern]] = [
    (CURRENCY, re.compile(r"[£$€]\s?\d+(?:,\d{3})*(?:\.\d+)?(?:\s?(?:k|m|bn|million|billion)\b)?", re.IGNORECASE)),
    (PERCENTAGE, re.compile(r"\b\d+(?:\.\d+)?\s?(?:%|per ?cent\b)", re.IGNORECASE)),
    (NUMBER, re.compile(r"\b\d{1,3}(?:,\d{3})+(?:\.\d+)?\b")),
    (
        DURATION,
        re.compile(
            r"\b\d+\s+(?:working\s+)?(?:seconds?|minutes?|hours?|days?|weeks?|months?|years?)\b",
            re.IGNORECASE,
        ),
    ),
]


@dataclass(frozen=True)
class HighlightSpan:
    start: int
    end: int
    kind: str

    def to_dict(self) -> Dict[str, Union[int, str]]:
        return {"start": self.start, "end": self.end, "kind": self.kind}


def find_highlight_spans(text: str) -> List[HighlightSpan]:
    """Non-overlapping highlight spans, sorted by start offset."""
    if not text:
        return []
    taken: List[HighlightSpan] = []
    for kind, pattern in HIGHLIGHT_PATTERNS:
        for m in pattern.finditer(text):
            if any(m.start() < s.end and m.end() > s.start for s in taken):
                continue
            taken.append(HighlightSpan(m.start(), m.end(), kind))
    return sorted(taken, key=lambda s: s.start)


def render_highlights(text: str, spans: Sequence[Union[HighlightSpan, Dict]]) -> str:
    """Wrap each span of the original text in a ``hl-<kind>`` marker."""
    parts: List[str] = []
    cursor = 0
    normalized = [s if isinstance(s, HighlightSpan) else HighlightSpan(s["start"], s["end"], s["kind"]) for s in spans]
    for span in sorted(normalized, key=lambda s: s.start):
        if span.start < cursor or span.end > len(text):
            continue
        parts.append(text[cursor : span.start])
        parts.append(f'<span class="hl-{span.kind}">{text[span.start : span.end]}</span>')
        cursor = span.end
    parts.append(text[cursor:])
    return "".join(parts)
