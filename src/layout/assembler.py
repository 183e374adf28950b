"""Layout assembly: interleave entities into the text flow at paced checkpoints.

The walk over blocks is a fold. Each step takes an immutable AssemblyState
(components emitted so far, paragraph count, and the pool of entities still
available) and returns a new one, so no "used" bookkeeping lives outside the
state value.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from extraction.schemas import EntityList, ExtractionResult, Process, Quote, Stat, Timeline
from structuring.schemas import ContentBlock

from . import components as comp
from .components import Component
from .config import CHECKLIST, MIDDLE_STATS, PROCESS, QUOTE, TIMELINE, LayoutConfig

logger = logging.getLogger(__name__)

OPENING_GROUPS = ("opening",)
MIDDLE_GROUPS = ("middle", "adjudicator")
CLOSING_GROUPS = ("closing", "success")
UNGROUPED = ("ungrouped",)

MIN_ROW_STATS = 2


@dataclass(frozen=True)
class EntityPool:
    """Entities not yet placed in the layout."""

    extraction: ExtractionResult
    used_stat_groups: FrozenSet[str] = frozenset()
    used_quotes: FrozenSet[int] = frozenset()
    used_processes: FrozenSet[int] = frozenset()
    used_lists: FrozenSet[int] = frozenset()
    timeline_used: bool = False

    def take_process(self) -> Tuple[Optional[Process], "EntityPool"]:
        for idx, process in enumerate(self.extraction.processes):
            if idx not in self.used_processes:
                return process, replace(self, used_processes=self.used_processes | {idx})
        return None, self

    def take_quote(self) -> Tuple[Optional[Quote], "EntityPool"]:
        for idx, quote in enumerate(self.extraction.quotes):
            if idx not in self.used_quotes:
                return quote, replace(self, used_quotes=self.used_quotes | {idx})
        return None, self

    def take_timeline(self) -> Tuple[Optional[Timeline], "EntityPool"]:
        if self.timeline_used or self.extraction.timeline is None:
            return None, self
        return self.extraction.timeline, replace(self, timeline_used=True)

    def take_list(self, list_type: str) -> Tuple[Optional[EntityList], "EntityPool"]:
        for idx, entity_list in enumerate(self.extraction.lists):
            if entity_list.type == list_type and idx not in self.used_lists:
                return entity_list, replace(self, used_lists=self.used_lists | {idx})
        return None, self

    def take_stat_group(self, keys: Sequence[str]) -> Tuple[Optional[Tuple[str, List[Stat]]], "EntityPool"]:
        """First group among ``keys`` with enough stats for a row.

        Taking one key retires all of ``keys`` (middle/adjudicator are
        alternatives for the same slot).
        """
        if any(key in self.used_stat_groups for key in keys):
            return None, self
        groups: Dict[str, List[Stat]] = self.extraction.stat_groups()
        for key in keys:
            stats = groups.get(key, [])
            if len(stats) >= MIN_ROW_STATS:
                return (key, stats), replace(self, used_stat_groups=self.used_stat_groups | set(keys))
        return None, self


@dataclass(frozen=True)
class AssemblyState:
    components: Tuple[Component, ...]
    paragraph_count: int
    pool: EntityPool

    def emit(self, *new: Component, pool: Optional[EntityPool] = None) -> "AssemblyState":
        return replace(self, components=self.components + new, pool=pool or self.pool)


class LayoutAssembler:
    """Walk ordered blocks and weave validated entities into the text."""

    def __init__(self, config: Optional[LayoutConfig] = None) -> None:
        self.config = config or LayoutConfig()
        self.schedule: Dict[int, List[str]] = {}
        for count, slot in self.config.checkpoints:
            self.schedule.setdefault(count, []).append(slot)

    def _stat_row(self, state: AssemblyState, keys: Sequence[str], color: Optional[str] = None) -> AssemblyState:
        taken, pool = state.pool.take_stat_group(keys)
        if taken is None:
            return state
        key, stats = taken
        row = comp.stat_group_row(stats, group=key, max_stats=self.config.max_stats_per_row, color=color)
        return state.emit(row, pool=pool)

    def _fill_slot(self, state: AssemblyState, slot: str) -> AssemblyState:
        pool = state.pool
        if slot == PROCESS:
            process, pool = pool.take_process()
            return state.emit(comp.process_component(process), pool=pool) if process else state
        if slot == QUOTE:
            quote, pool = pool.take_quote()
            return state.emit(comp.quote_component(quote), pool=pool) if quote else state
        if slot == TIMELINE:
            timeline, pool = pool.take_timeline()
            return state.emit(comp.timeline_component(timeline), pool=pool) if timeline else state
        if slot == CHECKLIST:
            checklist, pool = pool.take_list("checklist")
            return state.emit(comp.checklist_component(checklist), pool=pool) if checklist else state
        if slot == MIDDLE_STATS:
            return self._stat_row(state, MIDDLE_GROUPS)
        logger.debug(f"Ignoring unknown checkpoint slot {slot!r}")
        return state

    def step(self, state: AssemblyState, block: ContentBlock) -> AssemblyState:
        """Fold step: emit one block, then any checkpoint it completes."""
        if block.is_heading:
            return state.emit(comp.heading_component(block.text))

        state = state.emit(comp.text_component(block.text))
        state = replace(state, paragraph_count=state.paragraph_count + 1)
        for slot in self.schedule.get(state.paragraph_count, []):
            state = self._fill_slot(state, slot)
        return state

    def open(self, extraction: ExtractionResult) -> AssemblyState:
        state = AssemblyState(components=(), paragraph_count=0, pool=EntityPool(extraction))
        return self._stat_row(state, OPENING_GROUPS)

    def catch_up(self, state: AssemblyState) -> AssemblyState:
        """Append mandatory entities the checkpoints never reached."""
        timeline, pool = state.pool.take_timeline()
        if timeline:
            state = state.emit(comp.timeline_component(timeline), pool=pool)

        checklist, pool = state.pool.take_list("checklist")
        while checklist:
            state = state.emit(comp.checklist_component(checklist), pool=pool)
            checklist, pool = state.pool.take_list("checklist")

        state = self._stat_row(state, CLOSING_GROUPS, color="green")

        if self.config.include_secondary:
            state = self._secondary(state)
        return state

    def _secondary(self, state: AssemblyState) -> AssemblyState:
        state = self._stat_row(state, UNGROUPED)
        for list_type in ("bullet", "numbered"):
            entity_list, pool = state.pool.take_list(list_type)
            while entity_list:
                state = state.emit(comp.list_component(entity_list), pool=pool)
                entity_list, pool = state.pool.take_list(list_type)
        return state

    def fold(self, blocks: Sequence[ContentBlock], extraction: ExtractionResult) -> AssemblyState:
        state = reduce(self.step, blocks, self.open(extraction))
        return self.catch_up(state)

    def assemble(self, blocks: Sequence[ContentBlock], extraction: ExtractionResult) -> List[Component]:
        """
        Build the component stream for a document.

        Args:
            blocks: Ordered heading/paragraph blocks
            extraction: Validated entities for the same document

        Returns:
            Ordered list of Component
        """
        state = self.fold(blocks, extraction)
        logger.info(
            f"Assembled {len(state.components)} components from {len(blocks)} blocks "
            f"({state.paragraph_count} paragraphs)"
        )
        return list(state.components)
