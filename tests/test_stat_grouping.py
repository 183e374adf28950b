import math

import pytest

from layout import components as comp
from layout.components import to_dicts
from layout.stat_grouping import StatGroupingPass, group_stats


def card(label, value="1"):
    return {"type": comp.STAT_CARD, "props": {"metric": value, "label": label}}


def text(content):
    return {"type": comp.TEXT_SECTION, "props": {"content": content, "highlights": []}}


def other(ctype="SectionHeading"):
    return {"type": ctype, "props": {"text": ctype}}


def _row_labels(component):
    return [s["label"] for s in component.props["stats"]]


@pytest.mark.parametrize("k", range(2, 11))
def test_adjacent_cards_become_ceil_k_over_three_rows(k):
    labels = [f"S{i}" for i in range(k)]
    out = group_stats([text("Intro.")] + [card(l) for l in labels] + [other()])
    rows = [c for c in out if c.type == comp.STAT_ROW]
    assert len(rows) == math.ceil(k / 3)
    assert all(len(r.props["stats"]) <= 3 for r in rows)
    assert [l for r in rows for l in _row_labels(r)] == labels
    assert not any(c.type == comp.STAT_CARD for c in out)


def test_single_card_stays_standalone():
    out = group_stats([card("Alone", "7"), other()])
    assert [c.type for c in out] == [comp.STAT_CARD, "SectionHeading"]
    assert out[0].props["metric"] == "7"


def test_text_between_stats_is_deferred_ahead_of_the_row():
    out = group_stats([card("A"), text("Intro to B."), card("B"), other()])
    assert [c.type for c in out] == [comp.TEXT_SECTION, comp.STAT_ROW, "SectionHeading"]
    assert _row_labels(out[1]) == ["A", "B"]


def test_text_is_deferred_when_stat_is_two_ahead():
    out = group_stats([card("A"), text("One."), text("Two."), card("B")])
    assert [c.type for c in out] == [comp.TEXT_SECTION, comp.TEXT_SECTION, comp.STAT_ROW]
    assert [c.props["content"] for c in out[:2]] == ["One.", "Two."]


def test_text_without_following_stat_flushes_first():
    out = group_stats([card("A"), text("Later."), text("Much later."), text("Far."), card("B")])
    assert [c.type for c in out] == [
        comp.STAT_CARD, comp.TEXT_SECTION, comp.TEXT_SECTION, comp.TEXT_SECTION, comp.STAT_CARD,
    ]


def test_existing_row_forces_flush_and_passes_through():
    row = {"type": comp.STAT_ROW, "props": {"stats": [{"metric": "1", "label": "X"}, {"value": 2, "label": "Y"}], "group": "middle"}}
    out = group_stats([card("A"), row, card("B")])
    assert [c.type for c in out] == [comp.STAT_CARD, comp.STAT_ROW, comp.STAT_CARD]
    assert out[1].props["group"] == "middle"
    assert out[1].props["stats"][1]["metric"] == "2"


def test_oversized_row_is_split():
    stats = [{"metric": str(i), "label": f"S{i}"} for i in range(5)]
    out = group_stats([{"type": comp.STAT_CARD_GROUP, "props": {"stats": stats}}])
    assert [c.type for c in out] == [comp.STAT_CARD_GROUP, comp.STAT_CARD_GROUP]
    assert [len(c.props["stats"]) for c in out] == [3, 2]


def test_table_components_flush_buffers():
    out = group_stats([card("A"), card("B"), {"type": comp.DONUT_CHART, "props": {"segments": []}}, card("C")])
    assert [c.type for c in out] == [comp.STAT_ROW, comp.DONUT_CHART, comp.STAT_CARD]


def test_foreign_stat_props_are_normalized():
    out = group_stats([{"type": comp.STAT_CARD, "props": {"value": 42, "label": "Answers", "context": "per week", "sentiment": "positive"}}])
    assert out[0].props == {
        "metric": "42",
        "prefix": None,
        "suffix": None,
        "label": "Answers",
        "sublabel": "per week",
        "color": "green",
    }


STREAMS = [
    [card("A"), text("t1"), card("B"), card("C"), card("D"), other()],
    [text("a"), card("A"), text("b"), text("c"), text("d"), card("B")],
    [card(f"S{i}") for i in range(7)],
    [card("A"), {"type": comp.STAT_ROW, "props": {"stats": [{"value": i, "label": str(i)} for i in range(4)]}}, text("x")],
    [other(comp.TABLE_TIMELINE), card("A"), text("y"), other(), card("B"), card("C")],
    [],
]


@pytest.mark.parametrize("stream", STREAMS)
def test_second_run_is_a_no_op(stream):
    grouping = StatGroupingPass()
    once = to_dicts(grouping.run(stream))
    twice = to_dicts(grouping.run(once))
    assert once == twice
