from extraction.json_recovery import best_effort_parse, salvage_entities, strip_code_fences


def test_strips_code_fences():
    raw = '```json\n{"stats": [], "quotes": []}\n```'
    assert strip_code_fences(raw) == '{"stats": [], "quotes": []}'
    outcome = best_effort_parse(raw)
    assert outcome.ok
    assert outcome.strategy == "strict"
    assert outcome.data == {"stats": [], "quotes": []}


def test_repairs_trailing_commas():
    outcome = best_effort_parse('{"stats": [{"value": "1", "label": "One"},],}')
    assert outcome.ok
    assert outcome.strategy == "repaired"
    assert outcome.data["stats"][0]["label"] == "One"


def test_plain_prose_fails():
    outcome = best_effort_parse("I'm sorry, I can't help with that request.")
    assert not outcome.ok
    assert outcome.data is None
    assert outcome.error


def test_empty_and_non_object_fail():
    assert not best_effort_parse("").ok
    assert not best_effort_parse(None).ok
    assert not best_effort_parse("[1, 2, 3]").ok


def test_salvage_pulls_individual_arrays():
    text = (
        'noise "stats": [{"value": "5", "label": "Weeks"},] more noise '
        '"quotes": [{"text": "a ] bracket inside a string"}] '
        '"timeline": {"title": "T", "events": []} "lists": [ {"title": "cut off'
    )
    salvaged = salvage_entities(text)
    assert salvaged["stats"] == [{"value": "5", "label": "Weeks"}]
    assert salvaged["quotes"][0]["text"] == "a ] bracket inside a string"
    assert salvaged["timeline"] == {"title": "T", "events": []}
    assert "lists" not in salvaged
