"""
Pydantic models for dictionary data and translation options.

These models define the structure of word-list rows (bundled JSON, CSV or
MongoDB documents) and the immutable dictionary entries built from them.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Language(str, Enum):
    """Supported ISO-639-1 language codes."""
    ENGLISH = "en"
    GREEK = "el"
    SPANISH = "es"
    FRENCH = "fr"
    GERMAN = "de"
    ITALIAN = "it"
    PORTUGUESE = "pt"
    RUSSIAN = "ru"
    JAPANESE = "ja"
    CHINESE = "zh"
    KOREAN = "ko"
    ARABIC = "ar"


class PartOfSpeech(str, Enum):
    """Part of speech categories."""
    NOUN = "noun"
    VERB = "verb"
    ADJECTIVE = "adjective"
    ADVERB = "adverb"
    PRONOUN = "pronoun"
    PREPOSITION = "preposition"
    CONJUNCTION = "conjunction"
    INTERJECTION = "interjection"
    ARTICLE = "article"
    OTHER = "other"


class CEFRLevel(str, Enum):
    """Common European Framework of Reference for Languages levels."""
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"


class ProficiencyLevel(str, Enum):
    """
    Learner proficiency tiers.

    Totally ordered: beginner < intermediate < advanced.
    """
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    @classmethod
    def from_cefr(cls, level: CEFRLevel | str) -> "ProficiencyLevel":
        return _CEFR_TO_PROFICIENCY[CEFRLevel(level)]

    @classmethod
    def from_frequency_rank(cls, rank: int) -> "ProficiencyLevel":
        """Map a word-frequency rank (1 = most common) to a level band."""
        for level in reversed(_LEVEL_ORDER):
            if rank >= PROFICIENCY_RANKS[level][0]:
                return level
        return cls.BEGINNER


_LEVEL_ORDER = (
    ProficiencyLevel.BEGINNER,
    ProficiencyLevel.INTERMEDIATE,
    ProficiencyLevel.ADVANCED,
)

_CEFR_TO_PROFICIENCY = {
    CEFRLevel.A1: ProficiencyLevel.BEGINNER,
    CEFRLevel.A2: ProficiencyLevel.BEGINNER,
    CEFRLevel.B1: ProficiencyLevel.INTERMEDIATE,
    CEFRLevel.B2: ProficiencyLevel.INTERMEDIATE,
    CEFRLevel.C1: ProficiencyLevel.ADVANCED,
    CEFRLevel.C2: ProficiencyLevel.ADVANCED,
}

# Frequency-rank bands per level (inclusive start, inclusive end or None)
PROFICIENCY_RANKS: dict[ProficiencyLevel, tuple[int, Optional[int]]] = {
    ProficiencyLevel.BEGINNER: (1, 500),
    ProficiencyLevel.INTERMEDIATE: (501, 2000),
    ProficiencyLevel.ADVANCED: (2001, None),
}


def is_within_level(word_level: ProficiencyLevel, max_level: ProficiencyLevel) -> bool:
    """True if a word at word_level is visible to a learner at max_level."""
    return ProficiencyLevel(word_level).rank <= ProficiencyLevel(max_level).rank


def _normalize_forms(forms) -> frozenset[str]:
    if forms is None:
        return frozenset()
    if isinstance(forms, str):
        forms = forms.split("|")
    return frozenset(f.strip().lower() for f in forms if f and f.strip())


# ---- Dictionary Entries ----

class DictionaryEntry(BaseModel):
    """
    A single word translation for one language pair.

    Immutable once loaded. The canonical source word is stored lowercase and
    never appears among its own variants.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    source_word: str = Field(..., min_length=1, description="Canonical (dictionary) form")
    target_word: str = Field(..., min_length=1, description="Translation shown in the text")
    source_language: Language
    target_language: Language
    proficiency_level: ProficiencyLevel
    frequency_rank: int = Field(..., ge=1, description="Lower = more common")
    part_of_speech: PartOfSpeech = PartOfSpeech.OTHER
    variants: frozenset[str] = Field(default_factory=frozenset, description="Plurals, conjugations")
    pronunciation: Optional[str] = None

    @field_validator("source_word")
    @classmethod
    def _lowercase_source(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("variants", mode="before")
    @classmethod
    def _normalize_variants(cls, value, info: ValidationInfo):
        forms = _normalize_forms(value)
        return forms - {info.data.get("source_word")}


# ---- Word-List Rows ----

class WordListRow(BaseModel):
    """
    One row of an external word list (bundled JSON, CSV or MongoDB).

    Level may be given directly, as a CEFR code, or derived from the rank.
    """
    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    pos: PartOfSpeech = PartOfSpeech.OTHER
    level: Optional[ProficiencyLevel] = None
    cefr: Optional[CEFRLevel] = None
    rank: Optional[int] = Field(default=None, ge=1)
    variants: frozenset[str] = Field(default_factory=frozenset)
    pronunciation: Optional[str] = None

    @field_validator("variants", mode="before")
    @classmethod
    def _normalize_variants(cls, value):
        return _normalize_forms(value)

    def resolved_level(self) -> ProficiencyLevel:
        if self.level is not None:
            return self.level
        if self.cefr is not None:
            return ProficiencyLevel.from_cefr(self.cefr)
        if self.rank is not None:
            return ProficiencyLevel.from_frequency_rank(self.rank)
        raise ValueError(f"Word list row '{self.source}' has no level, cefr or rank")

    def to_entry(
        self,
        entry_id: str,
        source_language: Language | str,
        target_language: Language | str,
        default_rank: int,
    ) -> DictionaryEntry:
        return DictionaryEntry(
            id=entry_id,
            source_word=self.source,
            target_word=self.target.strip(),
            source_language=source_language,
            target_language=target_language,
            proficiency_level=self.resolved_level(),
            frequency_rank=self.rank if self.rank is not None else default_rank,
            part_of_speech=self.pos,
            variants=self.variants,
            pronunciation=self.pronunciation,
        )


# ---- Translation Options ----

class TranslationOptions(BaseModel):
    """User-configured settings for one substitution pass."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    source_language: Language = Language.ENGLISH
    target_language: Language = Language.GREEK
    proficiency_level: ProficiencyLevel = ProficiencyLevel.BEGINNER
    density: float = Field(default=0.3, ge=0.0, le=1.0, description="Fraction of eligible words replaced")
    exclude_words: frozenset[str] = Field(default_factory=frozenset)

    @field_validator("exclude_words", mode="before")
    @classmethod
    def _normalize_excludes(cls, value):
        return _normalize_forms(value)
