"""
Tokenizer - text segments and word tokens from markup.

Segments are the runs of content between tags; tokens are word runs inside a
segment. Word characters are classified with unicodedata rather than an
ASCII regex so non-Latin scripts tokenize the same way Latin ones do:
- letters (category L*) start and continue a word
- combining marks (category M*) continue a word
- an apostrophe (' or U+2019) belongs to a word only between two word characters

Character references such as &amp; are opaque and never yield tokens.
Offsets are code-point indices into the Python string.
"""

from __future__ import annotations

import re
import unicodedata
from typing import Iterator

from xenolexia.translation.types import TextSegment, Token

TAG_PATTERN = re.compile(r"<[^<>]*>")
ENTITY_PATTERN = re.compile(r"&(?:#[0-9]+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
APOSTROPHES = frozenset("'’")


def is_letter(ch: str) -> bool:
    return unicodedata.category(ch).startswith("L")


def is_word_continuation(ch: str) -> bool:
    category = unicodedata.category(ch)
    return category.startswith("L") or category.startswith("M")


def iter_text_segments(markup: str) -> Iterator[TextSegment]:
    """
    Yield non-empty text runs outside <tags>, in document order.

    An unmatched '<' is kept as literal text.
    """
    last_index = 0
    for match in TAG_PATTERN.finditer(markup):
        if match.start() > last_index:
            yield TextSegment(markup[last_index:match.start()], last_index)
        last_index = match.end()

    if last_index < len(markup):
        yield TextSegment(markup[last_index:], last_index)


def iter_tokens(text: str) -> Iterator[Token]:
    """Yield word tokens of one segment with segment-local offsets."""
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if ch == "&":
            entity = ENTITY_PATTERN.match(text, i)
            if entity:
                i = entity.end()
                continue

        if not is_letter(ch):
            i += 1
            continue

        start = i
        i += 1
        while i < n:
            if is_word_continuation(text[i]):
                i += 1
            elif text[i] in APOSTROPHES and i + 1 < n and is_letter(text[i + 1]):
                i += 2
            else:
                break
        yield Token(text[start:i], start, i)


def tokenize(markup: str) -> Iterator[tuple[TextSegment, Token]]:
    """Yield (segment, token) pairs over a whole markup document."""
    for segment in iter_text_segments(markup):
        for token in iter_tokens(segment.text):
            yield segment, token


def extract_plain_text(markup: str) -> str:
    """Markup with all tags removed."""
    return "".join(segment.text for segment in iter_text_segments(markup))


def count_words(markup: str) -> int:
    return sum(1 for _ in tokenize(markup))
