from structuring.sentence_segmenter import split_into_sentences


def test_splits_on_terminal_punctuation_before_capital():
    text = "HMRC lost the file twice. The client waited six months! Was that reasonable?"
    assert split_into_sentences(text) == [
        "HMRC lost the file twice.",
        "The client waited six months!",
        "Was that reasonable?",
    ]


def test_titles_are_not_sentence_boundaries():
    text = "Mr. Patel filed the complaint in March. Dr. Evans reviewed it the following week."
    sentences = split_into_sentences(text)
    assert sentences == [
        "Mr. Patel filed the complaint in March.",
        "Dr. Evans reviewed it the following week.",
    ]


def test_latin_abbreviations_are_protected():
    text = (
        "Keep evidence, e.g. Letters and call logs from the helpline. "
        "Quote the guidance, i.e. CRG5275 on professional costs. Then submit it."
    )
    sentences = split_into_sentences(text)
    assert sentences[0] == "Keep evidence, e.g. Letters and call logs from the helpline."
    assert sentences[1] == "Quote the guidance, i.e. CRG5275 on professional costs."
    assert sentences[2] == "Then submit it."


def test_no_sentence_ends_inside_a_protected_abbreviation():
    text = (
        "We wrote to Mr. Hughes about the delay. He passed it to Dr. Shah vs. Mrs. Lee for review. "
        "Costs such as postage, etc. Were also claimed by the practice. "
        "Use plain examples, e.g. Dates and amounts, i.e. Facts the adjudicator can check."
    )
    for sentence in split_into_sentences(text):
        for abbr in ("Mr.", "Dr.", "vs.", "Mrs.", "etc.", "e.g.", "i.e."):
            assert not sentence.endswith(abbr)
    joined = " ".join(split_into_sentences(text))
    assert "e.g. Dates" in joined
    assert "i.e. Facts" in joined


def test_quotation_mark_starts_a_new_sentence():
    text = 'The officer replied late. "We will respond within 15 working days," the letter said.'
    sentences = split_into_sentences(text)
    assert len(sentences) == 2
    assert sentences[1].startswith('"We will respond')


def test_short_fragments_are_discarded():
    assert split_into_sentences("Yes. No. This sentence is definitely long enough.") == [
        "This sentence is definitely long enough."
    ]


def test_empty_text():
    assert split_into_sentences("") == []
    assert split_into_sentences("   \n ") == []
