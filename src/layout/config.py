"""Layout pipeline configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

PROCESS = "process"
QUOTE = "quote"
TIMELINE = "timeline"
CHECKLIST = "checklist"
MIDDLE_STATS = "middle_stats"

CHECKPOINT_SLOTS = (PROCESS, QUOTE, TIMELINE, CHECKLIST, MIDDLE_STATS)

Checkpoints = Tuple[Tuple[int, str], ...]

# Empirically chosen pacing; kept as the default schedule for compatibility.
DEFAULT_CHECKPOINTS: Checkpoints = (
    (2, PROCESS),
    (4, QUOTE),
    (6, TIMELINE),
    (8, QUOTE),
    (10, CHECKLIST),
    (12, MIDDLE_STATS),
)


def parse_checkpoints(schedule_text: str) -> Checkpoints:
    """
    Parse a schedule such as ``"2:process,4:quote,6:timeline"``.

    Raises:
        ValueError: on malformed entries, unknown slots or non-positive counts
    """
    schedule = []
    for entry in schedule_text.split(","):
        entry = entry.strip()
        if not entry:
            continue
        count_text, sep, slot = entry.partition(":")
        if not sep:
            raise ValueError(f"Checkpoint entry must look like '<count>:<slot>': {entry!r}")
        try:
            count = int(count_text)
        except ValueError:
            raise ValueError(f"Checkpoint count is not an integer: {count_text!r}") from None
        slot = slot.strip().lower()
        if count <= 0:
            raise ValueError(f"Checkpoint count must be positive: {count}")
        if slot not in CHECKPOINT_SLOTS:
            raise ValueError(f"Unknown checkpoint slot {slot!r}; expected one of {', '.join(CHECKPOINT_SLOTS)}")
        schedule.append((count, slot))
    if not schedule:
        raise ValueError("Checkpoint schedule is empty")
    return tuple(sorted(schedule, key=lambda item: item[0]))


@dataclass(frozen=True)
class LayoutConfig:
    checkpoints: Checkpoints = DEFAULT_CHECKPOINTS
    max_stats_per_row: int = 3
    lookahead: int = 2
    max_sentences_per_paragraph: int = 4
    include_secondary: bool = False
    extractor_model: str = "gpt-4o-mini"
    extractor_timeout: float = 60.0
    extractor_max_tokens: int = 8000
    extractor_temperature: float = 0.1

    @classmethod
    def from_env(cls, **overrides) -> "LayoutConfig":
        values = {}
        model: Optional[str] = os.getenv("LAYOUT_EXTRACTOR_MODEL")
        if model:
            values["extractor_model"] = model
        timeout = os.getenv("LAYOUT_EXTRACTOR_TIMEOUT")
        if timeout:
            try:
                values["extractor_timeout"] = float(timeout)
            except ValueError:
                raise ValueError(f"LAYOUT_EXTRACTOR_TIMEOUT must be a number, got {timeout!r}") from None
        checkpoints = os.getenv("LAYOUT_CHECKPOINTS")
        if checkpoints:
            values["checkpoints"] = parse_checkpoints(checkpoints)
        secondary = os.getenv("LAYOUT_INCLUDE_SECONDARY")
        if secondary:
            values["include_secondary"] = secondary.strip().lower() in ("1", "true", "yes")
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
