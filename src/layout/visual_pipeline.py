"""Document → component stream transformation.

    content ─► ParagraphSplitter ─► blocks ─┐
    content ─► SemanticEntityExtractor ─────┴► LayoutAssembler ─► StatGroupingPass ─► components

The extractor call is the only await. Nothing raised by extraction,
validation or assembly escapes to the caller; the worst case is a
text-only layout.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from extraction.entity_extractor import SemanticEntityExtractor
from extraction.metadata_builder import build_extraction_metadata, build_layout_stats
from extraction.schemas import ExtractionResult
from structuring.paragraph_splitter import ParagraphSplitter

from .assembler import LayoutAssembler
from .components import Component, hero_component, to_dicts
from .config import LayoutConfig
from .stat_grouping import StatGroupingPass

logger = logging.getLogger(__name__)

DEFAULT_THEME = {"name": "lightpoint", "mode": "dark"}


@dataclass
class DocumentInput:
    title: str
    content: str
    excerpt: str = ""

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "DocumentInput":
        return cls(
            title=str(raw.get("title") or ""),
            content=str(raw.get("content") or ""),
            excerpt=str(raw.get("excerpt") or ""),
        )


@dataclass
class TransformResult:
    hero: Component
    components: List[Component]
    extraction: ExtractionResult
    metadata: Dict[str, Any] = field(default_factory=dict)

    def component_dicts(self) -> List[Dict[str, Any]]:
        return to_dicts(self.components)

    def layout(self, theme: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return {
            "theme": dict(theme or DEFAULT_THEME),
            "layout": [self.hero.to_dict()] + self.component_dicts(),
        }


def build_components(
    content: str,
    extraction: ExtractionResult,
    config: Optional[LayoutConfig] = None,
) -> List[Component]:
    """Synchronous core: split, assemble and group for already-validated entities."""
    config = config or LayoutConfig()
    blocks = ParagraphSplitter(max_sentences=config.max_sentences_per_paragraph).split_into_blocks(content)
    assembler = LayoutAssembler(config)
    try:
        assembled = assembler.assemble(blocks, extraction)
    except Exception:
        logger.exception("Layout assembly failed; falling back to text-only layout")
        assembled = assembler.assemble(blocks, ExtractionResult.empty())
    return StatGroupingPass(max_per_row=config.max_stats_per_row, lookahead=config.lookahead).run(assembled)


def build_extractor(config: LayoutConfig, llm_client: Any = None) -> SemanticEntityExtractor:
    return SemanticEntityExtractor(
        llm_client=llm_client,
        model=config.extractor_model,
        timeout=config.extractor_timeout,
        max_tokens=config.extractor_max_tokens,
        temperature=config.extractor_temperature,
    )


async def transform_document(
    document: DocumentInput,
    extractor: Optional[SemanticEntityExtractor] = None,
    config: Optional[LayoutConfig] = None,
) -> TransformResult:
    """
    Transform one article into a paced component stream.

    Args:
        document: Title, plain-text content and optional excerpt
        extractor: Entity extractor; None skips extraction entirely
        config: Layout configuration (defaults when omitted)

    Returns:
        TransformResult with hero, components, extraction and metadata
    """
    config = config or LayoutConfig()
    logger.info(f"Transforming document: {document.title!r}")

    extraction = ExtractionResult.empty()
    if extractor is not None:
        try:
            extraction = await extractor.extract(document.content)
        except Exception as exc:
            logger.warning(f"Entity extraction raised {exc!r}; continuing with text-only layout")
            extraction = ExtractionResult.empty()

    components = build_components(document.content, extraction, config)
    metadata = build_extraction_metadata(extraction, document.content)
    metadata["layout"] = build_layout_stats(to_dicts(components))
    logger.info(f"Transformation complete: {len(components)} components for {document.title!r}")

    return TransformResult(
        hero=hero_component(document.title, document.excerpt),
        components=components,
        extraction=extraction,
        metadata=metadata,
    )
