"""
Tests for markup segmentation and word tokenization.
"""

from xenolexia.translation import (
    count_words,
    extract_plain_text,
    iter_text_segments,
    iter_tokens,
    tokenize,
)


def test_segments_skip_tags_and_keep_offsets():
    markup = "<p>Hello <b>big</b> world</p>"
    segments = list(iter_text_segments(markup))

    assert [s.text for s in segments] == ["Hello ", "big", " world"]
    for segment in segments:
        assert markup[segment.start:segment.end] == segment.text


def test_empty_segments_are_skipped():
    assert list(iter_text_segments("<p></p><br/>")) == []
    assert list(iter_text_segments("")) == []


def test_unclosed_tag_is_literal_text():
    markup = "a dog < a cat"
    segments = list(iter_text_segments(markup))
    assert len(segments) == 1
    assert segments[0].text == markup
    assert [t.text for t in iter_tokens(segments[0].text)] == ["a", "dog", "a", "cat"]


def test_stray_lt_before_real_tag():
    markup = "x < y <b>dog</b>"
    assert [s.text for s in iter_text_segments(markup)] == ["x < y ", "dog"]


def test_internal_apostrophe_is_one_token():
    tokens = list(iter_tokens("I don't know, 'tis rock'n'roll'"))
    assert [t.text for t in tokens] == ["I", "don't", "know", "tis", "rock'n'roll"]


def test_typographic_apostrophe():
    assert [t.text for t in iter_tokens("it’s fine")] == ["it’s", "fine"]


def test_digits_and_punctuation_yield_no_tokens():
    assert list(iter_tokens("123 -- 4.5 !!")) == []


def test_token_offsets_are_segment_local():
    text = "  The house."
    for token in iter_tokens(text):
        assert text[token.start_offset:token.end_offset] == token.text


def test_non_latin_scripts_and_combining_marks():
    greek = "Το σπίτι είναι μεγάλο"
    assert [t.text for t in iter_tokens(greek)] == ["Το", "σπίτι", "είναι", "μεγάλο"]

    decomposed = "cafe\u0301 ok"
    tokens = list(iter_tokens(decomposed))
    assert tokens[0].text == "cafe\u0301"
    assert tokens[0].end_offset == 5


def test_character_references_are_not_words():
    markup = "<p>Tom &amp; Jerry&#39;s &#x27;cat&#x27;</p>"
    assert [t.text for _, t in tokenize(markup)] == ["Tom", "Jerry", "s", "cat"]


def test_tokenize_is_restartable():
    markup = "<p>one two</p><p>three</p>"
    first = [(s.start, t.text) for s, t in tokenize(markup)]
    second = [(s.start, t.text) for s, t in tokenize(markup)]
    assert first == second
    assert count_words(markup) == 3


def test_extract_plain_text():
    assert extract_plain_text("<h1>Title</h1><p>Body <i>text</i>.</p>") == "TitleBody text."
