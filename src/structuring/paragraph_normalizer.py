import re
from typing import List


class ParagraphNormalizer:
    """Normalize paragraph text without summarization or reordering."""

    @staticmethod
    def normalize(text: str) -> str:
        if not text:
            return ""

        # Replace intra-paragraph line breaks with spaces; paragraph boundaries are handled by the caller.
        cleaned = text.replace("\r", "")
        cleaned = re.sub(r"\s+\n\s+", " ", cleaned)
        cleaned = re.sub(r"\n", " ", cleaned)
        cleaned = re.sub(r"[ \t\u00a0]+", " ", cleaned).strip()
        return cleaned

    @staticmethod
    def normalize_paragraphs(paragraphs: List[str]) -> List[str]:
        normalized: List[str] = []
        for para in paragraphs:
            norm = ParagraphNormalizer.normalize(para)
            if norm:
                normalized.append(norm)
        return normalized
