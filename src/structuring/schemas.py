"""Tagged block types produced by the structuring stage."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

HEADING = "heading"
PARAGRAPH = "paragraph"


@dataclass(frozen=True)
class ContentBlock:
    type: str
    text: str

    @property
    def is_heading(self) -> bool:
        return self.type == HEADING

    def to_dict(self) -> Dict[str, str]:
        return {"type": self.type, "text": self.text}


def heading(text: str) -> ContentBlock:
    return ContentBlock(type=HEADING, text=text)


def paragraph(text: str) -> ContentBlock:
    return ContentBlock(type=PARAGRAPH, text=text)
