"""
Substitution Renderer - splices foreign-word markers into the document.

Each selected word is replaced by a marker element:

    <span class="foreign-word" data-original="Houses" data-source="house"
          data-position="120">Σπίτι</span>

(on one line). data-original is the word as it appeared in the text,
data-source the dictionary's canonical form, data-position the marker's start
offset in the final document.

Marker positions are planned left to right, since each depends on the
length change of every marker before it. The splices are then applied right
to left so that no splice moves text that has not been processed yet.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Iterator, Sequence

from xenolexia.errors import InvalidRangeError
from xenolexia.translation.types import CandidateMatch, SubstitutionRecord

MARKER_CLASS = "foreign-word"
MARKER_PATTERN = re.compile(
    r'<span class="foreign-word" data-original="(?P<original>[^"]*)" '
    r'data-source="(?P<source>[^"]*)" data-position="(?P<position>\d+)">'
    r'(?P<word>[^<]*)</span>'
)


@dataclass(frozen=True)
class MarkerMatch:
    start: int
    end: int
    original: str
    source_word: str
    word: str
    position: int


def preserve_case(original: str, replacement: str) -> str:
    """
    Carry the original word's casing over to its replacement.

    HOUSE -> fully uppercase, House -> first letter capitalized,
    house (or an uncased script) -> replacement unchanged.
    """
    if not original or not replacement:
        return replacement
    if original.isupper():
        return replacement.upper()
    if original[0].isupper():
        return replacement[0].upper() + replacement[1:]
    return replacement


def build_marker(word: str, original: str, source_word: str, position: int) -> str:
    return (
        f'<span class="{MARKER_CLASS}" '
        f'data-original="{html.escape(original, quote=True)}" '
        f'data-source="{html.escape(source_word, quote=True)}" '
        f'data-position="{position}">'
        f'{html.escape(word, quote=False)}</span>'
    )


def _validate(document: str, selections: Sequence[CandidateMatch]) -> list[CandidateMatch]:
    ordered = sorted(selections, key=lambda s: s.start)
    previous_end = 0
    for selection in ordered:
        if selection.entry is None:
            raise InvalidRangeError(f"Selection '{selection.original_word}' has no dictionary entry")
        if not (0 <= selection.start < selection.end <= len(document)):
            raise InvalidRangeError(
                f"Range [{selection.start}, {selection.end}) outside document of length {len(document)}"
            )
        if selection.start < previous_end:
            raise InvalidRangeError(
                f"Range [{selection.start}, {selection.end}) overlaps a previous selection"
            )
        if document[selection.start:selection.end] != selection.original_word:
            raise InvalidRangeError(
                f"Range [{selection.start}, {selection.end}) does not hold '{selection.original_word}'"
            )
        previous_end = selection.end
    return ordered


def render_substitutions(
    document: str,
    selections: Sequence[CandidateMatch],
) -> tuple[str, list[SubstitutionRecord]]:
    """
    Replace the selected words with markers.

    Args:
        document: Original markup
        selections: Candidates to replace (document offsets, any order)

    Returns:
        Tuple of (processed_document, records in document order)

    Raises:
        InvalidRangeError: a selection does not fit the document or overlaps another
    """
    ordered = _validate(document, selections)

    planned: list[tuple[CandidateMatch, str]] = []
    records: list[SubstitutionRecord] = []
    delta = 0
    for selection in ordered:
        word = preserve_case(selection.original_word, selection.entry.target_word)
        final_start = selection.start + delta
        marker = build_marker(word, selection.original_word, selection.entry.source_word, final_start)

        planned.append((selection, marker))
        records.append(
            SubstitutionRecord(
                original_word=selection.original_word,
                substituted_word=word,
                start_offset=final_start,
                end_offset=final_start + len(marker),
                entry=selection.entry,
            )
        )
        delta += len(marker) - (selection.end - selection.start)

    pieces: list[str] = []
    cursor = 0
    for selection, marker in planned:
        pieces.append(document[cursor:selection.start])
        pieces.append(marker)
        cursor = selection.end
    pieces.append(document[cursor:])

    return "".join(pieces), records


def iter_markers(processed: str) -> Iterator[MarkerMatch]:
    """Parse markers back out of a processed document."""
    for match in MARKER_PATTERN.finditer(processed):
        yield MarkerMatch(
            start=match.start(),
            end=match.end(),
            original=html.unescape(match.group("original")),
            source_word=html.unescape(match.group("source")),
            word=html.unescape(match.group("word")),
            position=int(match.group("position")),
        )


def strip_markers(processed: str) -> str:
    """Put the original words back, undoing render_substitutions."""
    return MARKER_PATTERN.sub(lambda m: html.unescape(m.group("original")), processed)
