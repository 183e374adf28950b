"""Renderer-agnostic component descriptors and their builders.

A component is ``{"type": <tag>, "props": {...}}``. Builders here are the
only place entity dataclasses are turned into props, so the assembler and
the stat grouping pass agree on shapes.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from extraction.schemas import EntityList, Process, Quote, Stat, Timeline

from .highlighting import find_highlight_spans

HERO = "HeroGradient"
SECTION_HEADING = "SectionHeading"
TEXT_SECTION = "TextSection"
STAT_CARD = "StatCard"
STAT_ROW = "HorizontalStatRow"
STAT_CARD_GROUP = "StatCardGroup"
PROCESS_FLOW = "NumberedProcessFlow"
QUOTE_CALLOUT = "QuoteCallout"
TABLE_TIMELINE = "TableTimeline"
DONUT_CHART = "DonutChart"
CHECKLIST = "ChecklistCard"
BULLET_LIST = "BulletList"
NUMBERED_LIST = "NumberedList"

MULTI_STAT_TYPES = frozenset({STAT_ROW, STAT_CARD_GROUP})
TABLE_TYPES = frozenset({DONUT_CHART, TABLE_TIMELINE})

SENTIMENT_COLORS = {"positive": "green", "negative": "red"}
DEFAULT_COLOR = "blue"


@dataclass(frozen=True)
class Component:
    type: str
    props: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "props": self.props}

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "Component":
        props = raw.get("props")
        return cls(type=str(raw.get("type", "")), props=dict(props) if isinstance(props, Mapping) else {})


def sentiment_to_color(sentiment: Optional[str]) -> str:
    return SENTIMENT_COLORS.get(sentiment or "", DEFAULT_COLOR)


def stat_props(stat: Stat, color: Optional[str] = None) -> Dict[str, Any]:
    return {
        "metric": stat.value,
        "prefix": stat.prefix,
        "suffix": stat.suffix,
        "label": stat.label,
        "sublabel": stat.context,
        "color": color or sentiment_to_color(stat.sentiment),
    }


def normalize_stat_props(props: Mapping[str, Any]) -> Dict[str, Any]:
    """Coerce stat props from any layout source into the StatCard shape.

    Already-normalized props come back unchanged.
    """
    metric = props.get("metric", props.get("value", ""))
    return {
        "metric": "" if metric is None else str(metric),
        "prefix": props.get("prefix"),
        "suffix": props.get("suffix"),
        "label": props.get("label", ""),
        "sublabel": props.get("sublabel", props.get("context")),
        "color": props.get("color") or sentiment_to_color(props.get("sentiment")),
    }


def heading_component(text: str) -> Component:
    return Component(SECTION_HEADING, {"text": text})


def text_component(text: str) -> Component:
    spans = [span.to_dict() for span in find_highlight_spans(text)]
    return Component(TEXT_SECTION, {"content": text, "highlights": spans})


def stat_card(props: Mapping[str, Any]) -> Component:
    return Component(STAT_CARD, normalize_stat_props(props))


def stat_row(stats: Sequence[Mapping[str, Any]], group: Optional[str] = None) -> Component:
    props: Dict[str, Any] = {"stats": [normalize_stat_props(s) for s in stats]}
    if group:
        props["group"] = group
    return Component(STAT_ROW, props)


def stat_group_row(stats: Sequence[Stat], group: str, max_stats: int, color: Optional[str] = None) -> Component:
    return stat_row([stat_props(s, color) for s in stats[:max_stats]], group=group)


def process_component(process: Process) -> Component:
    return Component(
        PROCESS_FLOW,
        {
            "title": process.title,
            "steps": [
                {"number": step.number, "title": step.title, "description": step.description}
                for step in process.steps
            ],
        },
    )


def quote_component(quote: Quote) -> Component:
    return Component(
        QUOTE_CALLOUT,
        {
            "text": quote.text,
            "attribution": quote.attribution,
            "accent": "cyan" if quote.type == "charter" else "purple",
            "emphasis": quote.emphasis,
        },
    )


def timeline_component(timeline: Timeline) -> Component:
    return Component(
        TABLE_TIMELINE,
        {
            "title": timeline.title,
            "events": [
                {"date": e.date, "description": e.description, "type": e.type} for e in timeline.events
            ],
        },
    )


def checklist_component(checklist: EntityList) -> Component:
    return Component(
        CHECKLIST,
        {
            "title": checklist.title,
            "items": [
                {"number": idx, "title": item.title, "description": item.description or ""}
                for idx, item in enumerate(checklist.items, start=1)
            ],
        },
    )


def list_component(entity_list: EntityList) -> Component:
    ctype = NUMBERED_LIST if entity_list.type == "numbered" else BULLET_LIST
    return Component(
        ctype,
        {
            "title": entity_list.title,
            "items": [item.title for item in entity_list.items],
            "accent": "cyan",
        },
    )


def hero_component(title: str, excerpt: str = "") -> Component:
    return Component(HERO, {"headline": title, "subheadline": excerpt})


def to_dicts(components: Iterable[Component]) -> List[Dict[str, Any]]:
    return [c.to_dict() for c in components]
