"""
Dictionary Index - word lookups for one language pair.

The index holds two maps built once at load time:
- canonical lowercase source word -> DictionaryEntry
- lowercase variant form -> canonical source word

Lookups are two dict probes, never a scan over variants.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional

from xenolexia.errors import UnsupportedLanguagePairError
from xenolexia.lexicon.sources import BundledWordListSource, WordListSource
from xenolexia.schemas import (
    DictionaryEntry,
    Language,
    ProficiencyLevel,
    is_within_level,
)

logger = logging.getLogger(__name__)


class DictionaryIndex:
    """Read-only word index for a single (source, target) language pair."""

    def __init__(
        self,
        source_language: Language | str,
        target_language: Language | str,
        entries: Iterable[DictionaryEntry],
    ):
        self.source_language = Language(source_language)
        self.target_language = Language(target_language)
        self._words: dict[str, DictionaryEntry] = {}
        self._variants: dict[str, str] = {}

        for entry in entries:
            if entry.source_word in self._words:
                logger.warning(
                    "Duplicate dictionary entry for '%s' (%s -> %s); keeping the later one",
                    entry.source_word, self.source_language.value, self.target_language.value,
                )
            self._words[entry.source_word] = entry
            for variant in entry.variants:
                self._variants[variant] = entry.source_word

        logger.debug(
            "Built dictionary index %s -> %s: %d words, %d variants",
            self.source_language.value, self.target_language.value,
            len(self._words), len(self._variants),
        )

    @classmethod
    def from_entries(cls, source_language, target_language, entries) -> "DictionaryIndex":
        return cls(source_language, target_language, entries)

    @classmethod
    def load(
        cls,
        source_language: Language | str,
        target_language: Language | str,
        source: Optional[WordListSource] = None,
    ) -> "DictionaryIndex":
        """
        Load the word list for a language pair.

        Raises:
            UnsupportedLanguagePairError: if the source has no data for the pair
        """
        source = source or BundledWordListSource()
        entries = source.load_entries(source_language, target_language)
        if not entries:
            raise UnsupportedLanguagePairError(source_language, target_language)
        return cls(source_language, target_language, entries)

    # ---- Lookups ----

    def lookup(self, word: str) -> Optional[DictionaryEntry]:
        """Find an entry by canonical form or variant, ignoring proficiency."""
        normalized = word.lower()

        entry = self._words.get(normalized)
        if entry is None:
            canonical = self._variants.get(normalized)
            if canonical is not None:
                entry = self._words.get(canonical)
        return entry

    def resolve(self, word: str, max_level: ProficiencyLevel | str) -> Optional[DictionaryEntry]:
        """
        Resolve a token to an entry visible at max_level.

        Returns None when the word is unknown or above the learner's level.
        """
        entry = self.lookup(word)
        if entry is not None and is_within_level(entry.proficiency_level, max_level):
            return entry
        return None

    def get_words_by_level(self, level: ProficiencyLevel | str) -> list[DictionaryEntry]:
        """All entries at exactly this level, most frequent first."""
        level = ProficiencyLevel(level)
        words = [e for e in self._words.values() if e.proficiency_level == level]
        words.sort(key=lambda e: e.frequency_rank)
        return words

    def entries(self) -> list[DictionaryEntry]:
        return list(self._words.values())

    def __len__(self) -> int:
        return len(self._words)

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and self.lookup(word) is not None

    def __repr__(self):
        return (
            f"<DictionaryIndex({self.source_language.value}->{self.target_language.value}, "
            f"{len(self._words)} words)>"
        )


class DictionaryRegistry:
    """
    Construct-once cache of dictionary indexes keyed by language pair.

    Each pair is built at most once, even under concurrent first use. Pairs
    the source does not support are remembered and re-raised without asking
    the source again.
    """

    def __init__(self, source: Optional[WordListSource] = None):
        self.source = source or BundledWordListSource()
        self._indexes: dict[tuple[str, str], DictionaryIndex] = {}
        self._unsupported: set[tuple[str, str]] = set()
        self._pair_locks: dict[tuple[str, str], threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, key: tuple[str, str]) -> threading.Lock:
        with self._guard:
            lock = self._pair_locks.get(key)
            if lock is None:
                lock = self._pair_locks[key] = threading.Lock()
            return lock

    def get(self, source_language: Language | str, target_language: Language | str) -> DictionaryIndex:
        """
        Return the index for a pair, building it on first use.

        Raises:
            UnsupportedLanguagePairError: if no data exists for the pair
        """
        key = (str(getattr(source_language, "value", source_language)),
               str(getattr(target_language, "value", target_language)))

        index = self._indexes.get(key)
        if index is not None:
            return index
        if key in self._unsupported:
            raise UnsupportedLanguagePairError(*key)

        with self._lock_for(key):
            index = self._indexes.get(key)
            if index is not None:
                return index
            if key in self._unsupported:
                raise UnsupportedLanguagePairError(*key)
            try:
                index = DictionaryIndex.load(key[0], key[1], source=self.source)
            except UnsupportedLanguagePairError:
                self._unsupported.add(key)
                raise
            self._indexes[key] = index
            return index

    def is_loaded(self, source_language, target_language) -> bool:
        key = (str(getattr(source_language, "value", source_language)),
               str(getattr(target_language, "value", target_language)))
        return key in self._indexes

    def clear(self) -> None:
        """Drop cached indexes. Indexes already handed out stay valid."""
        with self._guard:
            self._indexes = {}
            self._unsupported = set()


# Process-wide registry over bundled data, created on first use
_default_registry: Optional[DictionaryRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> DictionaryRegistry:
    global _default_registry

    if _default_registry is not None:
        return _default_registry

    with _default_registry_lock:
        if _default_registry is None:
            _default_registry = DictionaryRegistry()
    return _default_registry
