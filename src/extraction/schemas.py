"""Validated entity types handed from extraction to layout."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

STAT_CATEGORIES = ("volume", "percentage", "money", "time", "comparison")
SENTIMENTS = ("positive", "negative", "neutral")
QUOTE_TYPES = ("charter", "guidance", "example", "callout", "closing")
EMPHASIS_LEVELS = ("high", "medium", "low")
LIST_TYPES = ("checklist", "bullet", "numbered", "process")
EVENT_TYPES = ("action", "delay", "failure", "success", "neutral")


@dataclass(frozen=True)
class Stat:
    value: str
    label: str
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    context: Optional[str] = None
    category: str = "volume"
    sentiment: str = "neutral"
    source_quote: str = ""
    group_id: str = "ungrouped"


@dataclass(frozen=True)
class Quote:
    text: str
    attribution: Optional[str] = None
    type: str = "callout"
    emphasis: str = "medium"


@dataclass(frozen=True)
class ListItem:
    title: str
    description: Optional[str] = None


@dataclass(frozen=True)
class EntityList:
    title: str
    items: Tuple[ListItem, ...]
    type: str = "bullet"
    actionable: bool = False


@dataclass(frozen=True)
class TimelineEvent:
    date: str
    description: str
    type: str = "neutral"


@dataclass(frozen=True)
class Timeline:
    title: str
    events: Tuple[TimelineEvent, ...]


@dataclass(frozen=True)
class ProcessStep:
    number: str
    title: str
    description: str = ""


@dataclass(frozen=True)
class Process:
    title: str
    steps: Tuple[ProcessStep, ...]


@dataclass(frozen=True)
class ExtractionResult:
    stats: Tuple[Stat, ...] = ()
    quotes: Tuple[Quote, ...] = ()
    lists: Tuple[EntityList, ...] = ()
    timeline: Optional[Timeline] = None
    processes: Tuple[Process, ...] = ()

    @classmethod
    def empty(cls) -> "ExtractionResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not (self.stats or self.quotes or self.lists or self.timeline or self.processes)

    def stat_groups(self) -> Dict[str, List[Stat]]:
        """Stats bucketed by group id, preserving extraction order."""
        groups: Dict[str, List[Stat]] = {}
        for stat in self.stats:
            groups.setdefault(stat.group_id, []).append(stat)
        return groups

    def summary(self) -> str:
        return (
            f"{len(self.stats)} stats, {len(self.quotes)} quotes, {len(self.lists)} lists, "
            f"{len(self.processes)} processes, timeline={'yes' if self.timeline else 'no'}"
        )
