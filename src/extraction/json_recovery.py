"""Best-effort parsing of language-model JSON output.

This is the only place raw extractor text is inspected. Callers receive a
ParseOutcome and never see the text itself.
"""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from json_repair import repair_json

logger = logging.getLogger(__name__)

FENCE_PATTERN = re.compile(r"```(?:json|JSON)?\s*\n?")
TRAILING_COMMA = re.compile(r",\s*([}\]])")

ARRAY_KEYS = ("stats", "quotes", "lists", "processes")
OBJECT_KEYS = ("timeline",)


@dataclass(frozen=True)
class ParseOutcome:
    ok: bool
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    strategy: Optional[str] = None


def strip_code_fences(text: str) -> str:
    return FENCE_PATTERN.sub("", text).replace("```", "").strip()


def _loads_object(text: str) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as exc:
        return None, str(exc)
    if not isinstance(data, dict):
        return None, f"expected a JSON object, got {type(data).__name__}"
    return data, None


def _matching_bracket(text: str, start: int) -> Optional[int]:
    """Index of the bracket closing the one at ``start``, honouring strings."""
    opening = text[start]
    closing = "]" if opening == "[" else "}"
    depth = 0
    in_string = False
    escaped = False
    for idx in range(start, len(text)):
        ch = text[idx]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == opening:
            depth += 1
        elif ch == closing:
            depth -= 1
            if depth == 0:
                return idx
    return None


def _extract_value(text: str, key: str, opener: str) -> Optional[Any]:
    match = re.search(r'"%s"\s*:\s*%s' % (re.escape(key), re.escape(opener)), text)
    if not match:
        return None
    start = match.end() - 1
    end = _matching_bracket(text, start)
    if end is None:
        return None
    fragment = TRAILING_COMMA.sub(r"\1", text[start : end + 1])
    try:
        return json.loads(fragment)
    except ValueError:
        return None


def salvage_entities(text: str) -> Dict[str, Any]:
    """Pull whichever top-level entity arrays/objects still parse on their own."""
    recovered: Dict[str, Any] = {}
    for key in ARRAY_KEYS:
        value = _extract_value(text, key, "[")
        if isinstance(value, list):
            recovered[key] = value
    for key in OBJECT_KEYS:
        value = _extract_value(text, key, "{")
        if isinstance(value, dict):
            recovered[key] = value
    return recovered


def best_effort_parse(raw: Optional[str]) -> ParseOutcome:
    """
    Parse extractor output into a JSON object.

    Tries, in order: strict parsing of the fence-stripped text, json_repair,
    then salvaging individual entity arrays.

    Args:
        raw: Raw model output, possibly fenced or truncated

    Returns:
        ParseOutcome with ``ok`` set only when an object was recovered
    """
    if raw is None or not str(raw).strip():
        return ParseOutcome(ok=False, error="empty response")

    text = strip_code_fences(str(raw))

    data, err = _loads_object(text)
    if data is not None:
        return ParseOutcome(ok=True, data=data, strategy="strict")

    errors: List[str] = [f"strict: {err}"]
    try:
        repaired = repair_json(text)
    except Exception as exc:
        repaired = ""
        errors.append(f"repair: {exc}")
    if repaired:
        data, err = _loads_object(repaired)
        if data is not None:
            logger.info("Extractor output needed JSON repair")
            return ParseOutcome(ok=True, data=data, strategy="repaired")
        errors.append(f"repair: {err}")

    salvaged = salvage_entities(text)
    if salvaged:
        logger.warning(f"Salvaged {sorted(salvaged)} from unparsable extractor output")
        return ParseOutcome(ok=True, data=salvaged, strategy="salvaged")

    return ParseOutcome(ok=False, error="; ".join(errors))
