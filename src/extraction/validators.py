"""Validation of raw extractor output.

Each category is validated on its own; a malformed entity is dropped and a
malformed category degrades to empty. Nothing here raises.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .schemas import (
    EMPHASIS_LEVELS,
    EVENT_TYPES,
    LIST_TYPES,
    QUOTE_TYPES,
    SENTIMENTS,
    STAT_CATEGORIES,
    EntityList,
    ExtractionResult,
    ListItem,
    Process,
    ProcessStep,
    Quote,
    Stat,
    Timeline,
    TimelineEvent,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_PATTERN = re.compile(r"^(step|item)\s*\d*$", re.IGNORECASE)
STEP_PLACEHOLDER_PATTERN = re.compile(r"^(step|item|action|point)\s*\d*$", re.IGNORECASE)

MIN_QUOTE_CHARS = 10
MIN_LIST_ITEM_CHARS = 2
MIN_STEP_TITLE_CHARS = 3
MIN_PROCESS_STEPS = 2


def _text(value: Any) -> str:
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _optional_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text or None


def _choice(value: Any, allowed: Sequence[str], default: str) -> str:
    text = _text(value).lower()
    return text if text in allowed else default


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def is_placeholder(title: str, pattern: re.Pattern = PLACEHOLDER_PATTERN) -> bool:
    return bool(pattern.match(title.strip()))


class EntityValidator:
    """Filter and reshape raw extractor output into an ExtractionResult."""

    @staticmethod
    def validate_stat(raw: Any) -> Optional[Stat]:
        if not isinstance(raw, dict):
            return None
        value = _text(raw.get("value"))
        label = _text(raw.get("label"))
        if not value or not label:
            return None
        return Stat(
            value=value,
            label=label,
            prefix=_optional_text(raw.get("prefix")),
            suffix=_optional_text(raw.get("suffix")),
            context=_optional_text(raw.get("context")),
            category=_choice(raw.get("category"), STAT_CATEGORIES, "volume"),
            sentiment=_choice(raw.get("sentiment"), SENTIMENTS, "neutral"),
            source_quote=_text(raw.get("sourceQuote") or raw.get("source_quote")),
            group_id=_text(raw.get("groupId") or raw.get("group_id")) or "ungrouped",
        )

    @staticmethod
    def validate_quote(raw: Any) -> Optional[Quote]:
        if isinstance(raw, str):
            raw = {"text": raw}
        if not isinstance(raw, dict):
            return None
        text = _text(raw.get("text"))
        if len(text) <= MIN_QUOTE_CHARS:
            return None
        return Quote(
            text=text,
            attribution=_optional_text(raw.get("attribution")),
            type=_choice(raw.get("type"), QUOTE_TYPES, "callout"),
            emphasis=_choice(raw.get("emphasis"), EMPHASIS_LEVELS, "medium"),
        )

    @staticmethod
    def validate_list_item(raw: Any) -> Optional[ListItem]:
        if isinstance(raw, str):
            raw = {"title": raw}
        if not isinstance(raw, dict):
            return None
        title = _text(raw.get("title"))
        if len(title) <= MIN_LIST_ITEM_CHARS or is_placeholder(title):
            return None
        return ListItem(title=title, description=_optional_text(raw.get("description")))

    @classmethod
    def validate_list(cls, raw: Any) -> Optional[EntityList]:
        if not isinstance(raw, dict):
            return None
        items = tuple(
            item for item in (cls.validate_list_item(i) for i in _as_list(raw.get("items"))) if item
        )
        if not items:
            return None
        return EntityList(
            title=_text(raw.get("title")) or "List",
            items=items,
            type=_choice(raw.get("type"), LIST_TYPES, "bullet"),
            actionable=_text(raw.get("actionable")).lower() == "true",
        )

    @staticmethod
    def validate_timeline(raw: Any) -> Optional[Timeline]:
        if not isinstance(raw, dict):
            return None
        events: List[TimelineEvent] = []
        for event in _as_list(raw.get("events")):
            if not isinstance(event, dict):
                continue
            date = _text(event.get("date"))
            description = _text(event.get("description") or event.get("title"))
            if not date or not description:
                continue
            events.append(
                TimelineEvent(
                    date=date,
                    description=description,
                    type=_choice(event.get("type"), EVENT_TYPES, "neutral"),
                )
            )
        if not events:
            return None
        return Timeline(title=_text(raw.get("title")) or "Timeline", events=tuple(events))

    @staticmethod
    def validate_process(raw: Any) -> Optional[Process]:
        if not isinstance(raw, dict):
            return None
        steps: List[ProcessStep] = []
        for idx, step in enumerate(_as_list(raw.get("steps"))):
            if isinstance(step, str):
                step = {"title": step}
            if not isinstance(step, dict):
                continue
            title = _text(step.get("title"))
            if len(title) <= MIN_STEP_TITLE_CHARS or is_placeholder(title, STEP_PLACEHOLDER_PATTERN):
                continue
            steps.append(
                ProcessStep(
                    number=_text(step.get("number")) or f"{idx + 1:02d}",
                    title=title,
                    description=_text(step.get("description")),
                )
            )
        if len(steps) < MIN_PROCESS_STEPS:
            return None
        return Process(title=_text(raw.get("title")), steps=tuple(steps))

    @staticmethod
    def _validate_many(
        category: str,
        raw_items: Any,
        validate: Callable[[Any], Any],
    ) -> Tuple[Any, ...]:
        try:
            candidates = _as_list(raw_items)
            kept = tuple(entity for entity in (validate(item) for item in candidates) if entity)
        except Exception as exc:
            logger.warning(f"Dropping {category}: unexpected shape ({exc})")
            return ()
        dropped = len(candidates) - len(kept)
        if dropped:
            logger.debug(f"Dropped {dropped}/{len(candidates)} {category}")
        return kept

    @classmethod
    def validate(cls, raw: Any) -> ExtractionResult:
        """
        Build a validated ExtractionResult from parsed extractor JSON.

        Args:
            raw: Parsed JSON (any shape)

        Returns:
            ExtractionResult; categories that cannot be read are empty
        """
        if not isinstance(raw, dict):
            logger.warning(f"Extractor payload is {type(raw).__name__}, not an object; using empty result")
            return ExtractionResult.empty()

        try:
            timeline = cls.validate_timeline(raw.get("timeline"))
        except Exception as exc:
            logger.warning(f"Dropping timeline: unexpected shape ({exc})")
            timeline = None

        result = ExtractionResult(
            stats=cls._validate_many("stats", raw.get("stats"), cls.validate_stat),
            quotes=cls._validate_many("quotes", raw.get("quotes"), cls.validate_quote),
            lists=cls._validate_many("lists", raw.get("lists"), cls.validate_list),
            timeline=timeline,
            processes=cls._validate_many("processes", raw.get("processes"), cls.validate_process),
        )
        logger.info(f"Validated entities: {result.summary()}")
        return result


def validate_extraction(raw: Any) -> ExtractionResult:
    return EntityValidator.validate(raw)
