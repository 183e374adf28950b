"""Sentence segmentation for continuous prose.

Abbreviation periods are swapped for a sentinel before splitting so that
"Mr. Jones" or "e.g. penalties" never produce a sentence boundary, then
restored afterwards.
"""
from __future__ import annotations

import re
from typing import List

SENTINEL = "\u2063"

MIN_SENTENCE_CHARS = 10

# Titles and Latin abbreviations. Multi-period forms (e.g., i.e.) are
# matched whole so every period inside them is protected.
ABBREVIATION_PATTERNS: List[re.Pattern] = [
    re.compile(r"\b(?:Mr|Mrs|Ms|Dr|Prof|Sr|Jr|St|Rev|Hon)\.", re.IGNORECASE),
    re.compile(r"\bvs\.", re.IGNORECASE),
    re.compile(r"\betc\.", re.IGNORECASE),
    re.compile(r"\bi\.e\.", re.IGNORECASE),
    re.compile(r"\be\.g\.", re.IGNORECASE),
    re.compile(r"\b(?:approx|cf|no|para|ref|sec)\.(?=\s*\d)", re.IGNORECASE),
    # Company suffixes: "Smith & Co. Ltd."
    re.compile(r"\b(?:Ltd|Co|Inc|Corp|Plc|LLP|Bros)\."),
]

# Sentence end: terminal punctuation, whitespace, then a capital letter or
# an opening quotation mark.
SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+(?=[A-Z\"'“‘])")


def protect_abbreviations(text: str) -> str:
    """Replace periods inside known abbreviations with the sentinel."""
    protected = text
    for pattern in ABBREVIATION_PATTERNS:
        protected = pattern.sub(lambda m: m.group(0).replace(".", SENTINEL), protected)
    return protected


def restore_abbreviations(text: str) -> str:
    return text.replace(SENTINEL, ".")


def split_into_sentences(text: str) -> List[str]:
    """
    Split prose into sentences.

    Args:
        text: Continuous text without explicit paragraph breaks

    Returns:
        Trimmed sentences in original order; fragments shorter than
        ten characters are discarded
    """
    if not text or not text.strip():
        return []

    flattened = re.sub(r"\s+", " ", text).strip()
    protected = protect_abbreviations(flattened)

    sentences: List[str] = []
    for part in SENTENCE_BOUNDARY.split(protected):
        sentence = restore_abbreviations(part).strip()
        if len(sentence) >= MIN_SENTENCE_CHARS:
            sentences.append(sentence)
    return sentences
