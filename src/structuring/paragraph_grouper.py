import logging
import re
from typing import List, Optional

from .heading_classifier import is_likely_heading
from .schemas import ContentBlock, heading, paragraph

logger = logging.getLogger(__name__)

TRANSITION_WORDS = ("But", "However", "Yet", "So", "The", "This", "That", "If", "When")

TRANSITION_PATTERN = re.compile(r"^(?:%s)\b" % "|".join(TRANSITION_WORDS))


class ParagraphGrouper:
    """Batch sentences into bounded paragraphs without reordering them."""

    def __init__(self, max_sentences: int = 4) -> None:
        self.max_sentences = max_sentences

    @staticmethod
    def starts_with_transition(sentence: Optional[str]) -> bool:
        return bool(sentence) and bool(TRANSITION_PATTERN.match(sentence.strip()))

    def should_break(self, current: List[str], next_sentence: Optional[str]) -> bool:
        """Decide whether the working paragraph ends after its last sentence."""
        if len(current) >= self.max_sentences:
            return True
        last = current[-1].rstrip()
        if len(current) >= 2 and last.endswith("?"):
            return True
        if len(current) >= 3 and last.endswith(".") and self.starts_with_transition(next_sentence):
            return True
        return False

    def group_sentences(self, sentences: List[str]) -> List[ContentBlock]:
        blocks: List[ContentBlock] = []
        current: List[str] = []

        def flush() -> None:
            if current:
                blocks.append(paragraph(" ".join(current)))
                current.clear()

        for idx, sentence in enumerate(sentences):
            if is_likely_heading(sentence):
                flush()
                blocks.append(heading(sentence.strip()))
                continue

            current.append(sentence)
            next_sentence = sentences[idx + 1] if idx + 1 < len(sentences) else None
            if self.should_break(current, next_sentence):
                flush()

        flush()
        logger.debug(f"Grouped {len(sentences)} sentences into {len(blocks)} blocks")
        return blocks
