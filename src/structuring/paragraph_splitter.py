"""
Paragraph Splitter Module

Turns article text into an ordered list of heading/paragraph blocks.
Text that already carries blank-line paragraph breaks is split on them
directly; unbroken prose goes through sentence segmentation and grouping.
"""

from typing import List
import logging
import re

from .heading_classifier import classify_chunk
from .paragraph_grouper import ParagraphGrouper
from .paragraph_normalizer import ParagraphNormalizer
from .schemas import ContentBlock
from .sentence_segmenter import split_into_sentences

logger = logging.getLogger(__name__)


class ParagraphSplitter:
    """Split article text into structured blocks."""

    def __init__(self, max_sentences: int = 4):
        """
        Initialize paragraph splitter.

        Args:
            max_sentences: Sentence cap for paragraphs built from unbroken prose
        """
        # Empty line indicates paragraph boundary
        self.paragraph_boundary = re.compile(r'\n\s*\n+')
        self.grouper = ParagraphGrouper(max_sentences=max_sentences)

    def has_explicit_breaks(self, text: str) -> bool:
        return bool(self.paragraph_boundary.search(text.strip()))

    def split_into_paragraphs(self, text: str) -> List[str]:
        """
        Split text on blank lines.

        Args:
            text: Raw or semi-processed text

        Returns:
            List of paragraph strings
        """
        paragraphs = self.paragraph_boundary.split(text)
        return ParagraphNormalizer.normalize_paragraphs(paragraphs)

    def split_into_blocks(self, text: str) -> List[ContentBlock]:
        """
        Produce ordered heading/paragraph blocks for a document body.

        Args:
            text: Plain article text (HTML already stripped)

        Returns:
            List of ContentBlock in document order
        """
        if not text or not text.strip():
            return []

        if self.has_explicit_breaks(text):
            blocks = [classify_chunk(chunk) for chunk in self.split_into_paragraphs(text)]
            logger.info(f"Split text into {len(blocks)} blocks on explicit paragraph breaks")
            return blocks

        sentences = split_into_sentences(text)
        blocks = self.grouper.group_sentences(sentences)
        logger.info(f"Grouped {len(sentences)} sentences into {len(blocks)} blocks")
        return blocks
