"""
Translation Engine - runs the lexical substitution pipeline over a document.

Pipeline:
1. Tokenize the markup (text segments -> word tokens)
2. Resolve every token against the dictionary at the learner's level
3. Select a density-bounded random subset of the eligible words
4. Render markers in one pass and collect substitution records

An unsupported language pair is a configuration state, not an error: the
document comes back unchanged with dictionary_available=False.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Iterable, Optional

from xenolexia.errors import UnsupportedLanguagePairError
from xenolexia.lexicon import DictionaryIndex, DictionaryRegistry, get_default_registry
from xenolexia.schemas import TranslationOptions
from xenolexia.translation.renderer import render_substitutions
from xenolexia.translation.selector import select_substitutions
from xenolexia.translation.tokenizer import tokenize
from xenolexia.translation.types import CandidateMatch, ProcessedText, ProcessingStats

logger = logging.getLogger(__name__)


class TranslationEngine:
    """
    Processes documents for one set of translation options.

    The dictionary index comes from the registry (cached per language pair);
    the engine itself holds no per-document state, so one engine can process
    many chapters, and independent engines can run in parallel.
    """

    def __init__(
        self,
        options: Optional[TranslationOptions] = None,
        registry: Optional[DictionaryRegistry] = None,
        rng: Optional[random.Random] = None,
    ):
        self.options = options or TranslationOptions()
        self.registry = registry or get_default_registry()
        self.rng = rng
        self._index: Optional[DictionaryIndex] = None
        self._index_loaded = False

    @property
    def index(self) -> Optional[DictionaryIndex]:
        """Dictionary for the current pair, or None if the pair is unsupported."""
        if not self._index_loaded:
            try:
                self._index = self.registry.get(
                    self.options.source_language, self.options.target_language
                )
            except UnsupportedLanguagePairError as e:
                logger.warning("%s; documents will be returned unchanged", e)
                self._index = None
            self._index_loaded = True
        return self._index

    def update_options(self, **changes) -> TranslationOptions:
        """
        Replace some options. The dictionary is re-resolved only when the
        language pair changes.
        """
        updated = TranslationOptions.model_validate({**self.options.model_dump(), **changes})
        pair_changed = (
            updated.source_language != self.options.source_language
            or updated.target_language != self.options.target_language
        )
        self.options = updated
        if pair_changed:
            self._index = None
            self._index_loaded = False
        return updated

    def find_matches(self, document: str) -> list[CandidateMatch]:
        """Resolve every token of the document (entry None when not eligible)."""
        index = self.index
        level = self.options.proficiency_level
        matches = []
        for segment, token in tokenize(document):
            entry = index.resolve(token.text, level) if index is not None else None
            matches.append(CandidateMatch(token=token, entry=entry, segment_start=segment.start))
        return matches

    def process_content(self, document: str) -> ProcessedText:
        """
        Substitute words in a document.

        Returns:
            ProcessedText with the processed markup, substitution records in
            document order, and processing statistics
        """
        start_time = time.perf_counter()

        matches = self.find_matches(document)
        eligible_words = sum(1 for m in matches if m.entry is not None)

        selected = select_substitutions(
            matches,
            density=self.options.density,
            exclude_words=self.options.exclude_words,
            rng=self.rng,
        )
        content, records = render_substitutions(document, selected)

        stats = ProcessingStats(
            total_words=len(matches),
            eligible_words=eligible_words,
            replaced_words=len(records),
            processing_time_ms=(time.perf_counter() - start_time) * 1000.0,
        )
        logger.debug(
            "Processed document: %d words, %d eligible, %d replaced in %.1f ms",
            stats.total_words, stats.eligible_words, stats.replaced_words, stats.processing_time_ms,
        )

        return ProcessedText(
            content=content,
            substitutions=records,
            stats=stats,
            dictionary_available=self.index is not None,
        )

    def process_chapters(self, chapters: Iterable[str]) -> list[ProcessedText]:
        return [self.process_content(chapter) for chapter in chapters]


def process_content(
    document: str,
    options: Optional[TranslationOptions] = None,
    registry: Optional[DictionaryRegistry] = None,
    rng: Optional[random.Random] = None,
) -> ProcessedText:
    """Run the pipeline once with a throwaway engine."""
    return TranslationEngine(options, registry=registry, rng=rng).process_content(document)
