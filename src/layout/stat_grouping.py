"""Second pass over an assembled stream: coalesce adjacent stat cards into rows.

Works on any layout that follows the component tag contract, not only on
assembler output. Already-grouped rows are never re-buffered, so running the
pass on its own output changes nothing.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence, Union

from .components import (
    MULTI_STAT_TYPES,
    STAT_CARD,
    TABLE_TYPES,
    TEXT_SECTION,
    Component,
    normalize_stat_props,
    stat_card,
    stat_row,
)

logger = logging.getLogger(__name__)

ComponentLike = Union[Component, Mapping[str, Any]]


def _as_component(item: ComponentLike) -> Component:
    return item if isinstance(item, Component) else Component.from_dict(item)


def _chunks(items: Sequence[Any], size: int) -> List[Sequence[Any]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


class StatGroupingPass:
    """Merge runs of standalone StatCard components into HorizontalStatRow components."""

    def __init__(self, max_per_row: int = 3, lookahead: int = 2) -> None:
        self.max_per_row = max_per_row
        self.lookahead = lookahead

    def _stat_ahead(self, items: Sequence[Component], idx: int) -> bool:
        window = items[idx + 1 : idx + 1 + self.lookahead]
        return any(c.type == STAT_CARD for c in window)

    def _normalize_row(self, row: Component) -> List[Component]:
        raw_stats = row.props.get("stats")
        stats = [normalize_stat_props(s) for s in raw_stats if isinstance(s, Mapping)] if isinstance(raw_stats, list) else []
        extra = {k: v for k, v in row.props.items() if k != "stats"}
        if len(stats) <= self.max_per_row:
            return [Component(row.type, {"stats": stats, **extra})]
        return [Component(row.type, {"stats": list(chunk), **extra}) for chunk in _chunks(stats, self.max_per_row)]

    def _grouped(self, stats: List[Mapping[str, Any]]) -> List[Component]:
        if len(stats) >= 2:
            return [stat_row(chunk) for chunk in _chunks(stats, self.max_per_row)]
        if len(stats) == 1:
            return [stat_card(stats[0])]
        return []

    def run(self, stream: Sequence[ComponentLike]) -> List[Component]:
        """
        Group buffered stat cards, deferring introductory text when more stats follow.

        Args:
            stream: Ordered components (Component instances or ``{type, props}`` dicts)

        Returns:
            New ordered list of Component
        """
        items = [_as_component(item) for item in stream]
        output: List[Component] = []
        stat_buffer: List[Dict[str, Any]] = []
        text_buffer: List[Component] = []

        def flush() -> None:
            output.extend(text_buffer)
            text_buffer.clear()
            output.extend(self._grouped(stat_buffer))
            stat_buffer.clear()

        for idx, item in enumerate(items):
            if item.type == STAT_CARD:
                stat_buffer.append(dict(item.props))
            elif item.type in MULTI_STAT_TYPES:
                flush()
                output.extend(self._normalize_row(item))
            elif item.type in TABLE_TYPES:
                flush()
                output.append(item)
            elif item.type == TEXT_SECTION:
                if stat_buffer and self._stat_ahead(items, idx):
                    text_buffer.append(item)
                else:
                    flush()
                    output.append(item)
            else:
                flush()
                output.append(item)

        flush()
        if len(output) != len(items):
            logger.debug(f"Stat grouping: {len(items)} components in, {len(output)} out")
        return output


def group_stats(stream: Sequence[ComponentLike], max_per_row: int = 3, lookahead: int = 2) -> List[Component]:
    return StatGroupingPass(max_per_row=max_per_row, lookahead=lookahead).run(stream)
