"""Heuristic heading detection.

Pure pattern checks over a single line of text. There is no learning here;
false positives on short punchy sentences are an accepted limitation.
"""
from __future__ import annotations

import re
from typing import List

from .schemas import ContentBlock, heading, paragraph

MAX_HEADING_CHARS = 80

HEADING_PATTERNS: List[re.Pattern] = [
    re.compile(r"^why\b", re.IGNORECASE),
    re.compile(r"^how to\b", re.IGNORECASE),
    re.compile(r"^what\b", re.IGNORECASE),
    re.compile(r"^the \w+ (?:trap|problem|solution)\b", re.IGNORECASE),
    re.compile(r"(?:that works|you need)[?!:]?$", re.IGNORECASE),
]

# Only trusted where the author already separated blocks with blank lines.
STRUCTURAL_HEADING_PATTERNS: List[re.Pattern] = [
    re.compile(r"^#{1,3}\s+\S"),
    re.compile(r"^[A-Z][^.!?:]{2,60}:$"),
]

MARKDOWN_HEADING_MARKS = re.compile(r"^#{1,3}\s+")


def is_likely_heading(sentence: str) -> bool:
    text = sentence.strip()
    if not text or len(text) > MAX_HEADING_CHARS:
        return False
    if text.endswith("."):
        return False
    return any(pat.search(text) for pat in HEADING_PATTERNS)


def is_structural_heading(chunk: str) -> bool:
    """Markdown-marked or colon-terminated title lines."""
    text = chunk.strip()
    if not text or len(text) > MAX_HEADING_CHARS or "\n" in text:
        return False
    return any(pat.search(text) for pat in STRUCTURAL_HEADING_PATTERNS)


def clean_heading_text(text: str) -> str:
    return MARKDOWN_HEADING_MARKS.sub("", text.strip()).strip()


def classify_sentence(sentence: str) -> ContentBlock:
    if is_likely_heading(sentence):
        return heading(sentence.strip())
    return paragraph(sentence.strip())


def classify_chunk(chunk: str) -> ContentBlock:
    """Classify a pre-separated chunk (blank-line delimited) as heading or paragraph."""
    if is_structural_heading(chunk) or is_likely_heading(chunk):
        return heading(clean_heading_text(chunk))
    return paragraph(chunk.strip())
