import pytest

from structuring.heading_classifier import classify_chunk, classify_sentence, is_likely_heading
from structuring.schemas import HEADING, PARAGRAPH


@pytest.mark.parametrize(
    "text",
    [
        "Why most complaints fail",
        "How to claim professional costs",
        "What the Charter actually says",
        "The delay trap",
        "The evidence problem",
        "A complaint letter that works",
        "The three documents you need",
    ],
)
def test_heading_patterns(text):
    assert is_likely_heading(text)


@pytest.mark.parametrize(
    "text",
    [
        "Why this matters.",
        "The adjudicator upheld the complaint",
        "Most practices give up after the first response",
        "Why " + "very " * 20 + "long headings are not headings",
        "",
    ],
)
def test_non_headings(text):
    assert not is_likely_heading(text)


def test_classify_sentence_returns_tagged_block():
    assert classify_sentence("Why most complaints fail").type == HEADING
    assert classify_sentence("HMRC replied after nine weeks.").type == PARAGRAPH


def test_classify_chunk_strips_markdown_marks():
    block = classify_chunk("## Next steps for your practice")
    assert block.type == HEADING
    assert block.text == "Next steps for your practice"


def test_classify_chunk_colon_title():
    assert classify_chunk("Key evidence to gather:").type == HEADING
    assert classify_chunk("Send the letter by recorded delivery. Keep a copy.").type == PARAGRAPH
