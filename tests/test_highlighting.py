import re

from layout.components import text_component
from layout.highlighting import find_highlight_spans, render_highlights

TEXT = "HMRC took 14 weeks to refund £6,174, while 98% of 92,000 complaints were settled in 3 months."


def test_spans_cover_each_kind_without_overlap():
    spans = find_highlight_spans(TEXT)
    found = [(TEXT[s.start : s.end], s.kind) for s in spans]
    assert found == [
        ("14 weeks", "duration"),
        ("£6,174", "currency"),
        ("98%", "percentage"),
        ("92,000", "number"),
        ("3 months", "duration"),
    ]
    for a, b in zip(spans, spans[1:]):
        assert a.end <= b.start


def test_render_wraps_original_text_once():
    spans = find_highlight_spans(TEXT)
    rendered = render_highlights(TEXT, spans)
    assert '<span class="hl-currency">£6,174</span>' in rendered
    assert re.sub(r"</?span[^>]*>", "", rendered) == TEXT
    assert rendered.count("<span") == len(spans)


def test_text_component_carries_spans_not_markup():
    component = text_component(TEXT)
    assert component.props["content"] == TEXT
    assert component.props["highlights"][0] == {"start": 10, "end": 18, "kind": "duration"}


def test_plain_text_has_no_spans():
    assert find_highlight_spans("No figures in this sentence at all.") == []
    assert render_highlights("Plain.", []) == "Plain."
