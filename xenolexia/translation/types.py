"""
Shared types for the substitution pipeline.

All offsets are Python string indices (Unicode code points).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from xenolexia.schemas import DictionaryEntry


@dataclass(frozen=True)
class TextSegment:
    """A run of markup content outside any tag."""
    text: str
    start: int  # Offset in the original markup

    @property
    def end(self) -> int:
        return self.start + len(self.text)


@dataclass(frozen=True)
class Token:
    """A maximal run of word characters, offsets relative to its segment."""
    text: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class CandidateMatch:
    """A token resolved against the dictionary (entry is None if not eligible)."""
    token: Token
    entry: Optional[DictionaryEntry]
    segment_start: int = 0

    @property
    def original_word(self) -> str:
        return self.token.text

    @property
    def start(self) -> int:
        """Start offset in the document."""
        return self.segment_start + self.token.start_offset

    @property
    def end(self) -> int:
        return self.segment_start + self.token.end_offset


@dataclass(frozen=True)
class SubstitutionRecord:
    """
    One realized substitution.

    [start_offset, end_offset) spans the inserted marker in the final document.
    """
    original_word: str
    substituted_word: str
    start_offset: int
    end_offset: int
    entry: DictionaryEntry


@dataclass(frozen=True)
class ProcessingStats:
    total_words: int = 0
    eligible_words: int = 0
    replaced_words: int = 0
    processing_time_ms: float = 0.0


@dataclass(frozen=True)
class ProcessedText:
    """Result of one pipeline run."""
    content: str
    substitutions: list[SubstitutionRecord] = field(default_factory=list)
    stats: ProcessingStats = field(default_factory=ProcessingStats)
    dictionary_available: bool = True
