import asyncio
import json

from extraction.entity_extractor import SemanticEntityExtractor
from layout import components as comp
from layout.visual_pipeline import DocumentInput, transform_document

from fakes import fake_client

CONTENT = (
    "The practice waited 14 weeks for a reply from HMRC.\n\n"
    "Eventually the complaint was upheld and costs of £6,174 were refunded."
)

DOCUMENT = DocumentInput(title="How we won", content=CONTENT, excerpt="A complaint story")


class ExplodingExtractor:
    async def extract(self, content):
        raise RuntimeError("boom")


def _types(result):
    return [c.type for c in result.components]


def test_invalid_json_gives_text_only_layout():
    client, _ = fake_client(content="Sorry, I cannot help with that request today.")
    extractor = SemanticEntityExtractor(llm_client=client)
    result = asyncio.run(transform_document(DOCUMENT, extractor=extractor))
    assert _types(result) == [comp.TEXT_SECTION, comp.TEXT_SECTION]
    assert result.extraction.is_empty
    assert result.components[0].props["highlights"]


def test_without_extractor_layout_is_text_only():
    result = asyncio.run(transform_document(DOCUMENT))
    assert _types(result) == [comp.TEXT_SECTION, comp.TEXT_SECTION]
    assert result.metadata["stat_count"] == 0


def test_raising_extractor_does_not_escape():
    result = asyncio.run(transform_document(DOCUMENT, extractor=ExplodingExtractor()))
    assert _types(result) == [comp.TEXT_SECTION, comp.TEXT_SECTION]


def test_extracted_stats_open_the_layout():
    payload = {
        "stats": [
            {"value": "14", "suffix": "weeks", "label": "Wait for reply", "groupId": "opening", "sentiment": "negative"},
            {"value": "6,174", "prefix": "£", "label": "Costs refunded", "groupId": "opening", "sentiment": "positive"},
        ]
    }
    client, _ = fake_client(content=json.dumps(payload))
    extractor = SemanticEntityExtractor(llm_client=client)
    result = asyncio.run(transform_document(DOCUMENT, extractor=extractor))
    assert _types(result)[0] == comp.STAT_ROW
    colors = [s["color"] for s in result.components[0].props["stats"]]
    assert colors == ["red", "green"]
    assert result.metadata["stat_count"] == 2
    assert result.metadata["layout"]["per_type"][comp.STAT_ROW] == 1


def test_layout_starts_with_hero():
    result = asyncio.run(transform_document(DOCUMENT))
    layout = result.layout()
    assert layout["layout"][0] == {
        "type": comp.HERO,
        "props": {"headline": "How we won", "subheadline": "A complaint story"},
    }
    assert len(layout["layout"]) == len(result.components) + 1
    assert "theme" in layout


def test_empty_document():
    result = asyncio.run(transform_document(DocumentInput(title="Empty", content="")))
    assert result.components == []
    assert result.metadata["total_words"] == 0
