"""
Vocabulary Deck - the learner's saved words.

In-memory collection keyed by card id. Durable storage belongs to the
caller; the deck only creates cards and routes reviews through the
scheduler.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterator, Optional

from xenolexia.srs.card import VocabularyCard, as_utc
from xenolexia.srs.scheduler import due_for_review, review
from xenolexia.translation.types import SubstitutionRecord

logger = logging.getLogger(__name__)

_NEVER = datetime.min.replace(tzinfo=timezone.utc)


class VocabularyDeck:

    def __init__(self, cards: Optional[list[VocabularyCard]] = None):
        self._cards: dict[str, VocabularyCard] = {}
        for card in cards or []:
            self.add_card(card)

    def add_card(self, card: VocabularyCard) -> VocabularyCard:
        if card.id in self._cards:
            raise ValueError(f"Card {card.id} is already in the deck")
        self._cards[card.id] = card
        return card

    def add_from_substitution(
        self,
        record: SubstitutionRecord,
        context_sentence: Optional[str] = None,
        book_id: Optional[str] = None,
        book_title: Optional[str] = None,
    ) -> VocabularyCard:
        """
        Save a substituted word as a new card.

        If the same word pair is already saved, the existing card is returned
        unchanged.
        """
        entry = record.entry
        existing = self.find(entry.source_word, entry.target_word)
        if existing is not None:
            return existing

        card = VocabularyCard(
            source_word=entry.source_word,
            target_word=entry.target_word,
            source_language=entry.source_language,
            target_language=entry.target_language,
            context_sentence=context_sentence,
            book_id=book_id,
            book_title=book_title,
        )
        logger.debug("Saved '%s' -> '%s' as card %s", card.source_word, card.target_word, card.id)
        return self.add_card(card)

    def get(self, card_id: str) -> Optional[VocabularyCard]:
        return self._cards.get(card_id)

    def remove(self, card_id: str) -> Optional[VocabularyCard]:
        return self._cards.pop(card_id, None)

    def find(self, source_word: str, target_word: str) -> Optional[VocabularyCard]:
        source_word = source_word.lower()
        for card in self._cards.values():
            if card.source_word.lower() == source_word and card.target_word == target_word:
                return card
        return None

    def cards(self) -> list[VocabularyCard]:
        return list(self._cards.values())

    def get_due_for_review(self, now: Optional[datetime] = None) -> list[VocabularyCard]:
        """Due cards, never-reviewed first, then least recently reviewed."""
        if now is None:
            now = datetime.now(timezone.utc)
        now = as_utc(now)
        due = [card for card in self._cards.values() if due_for_review(card, now)]
        due.sort(key=lambda c: as_utc(c.last_reviewed_at) or _NEVER)
        return due

    def record_review(
        self,
        card_id: str,
        quality: int,
        timestamp: Optional[datetime] = None,
    ) -> VocabularyCard:
        """
        Review a card by id.

        Raises:
            KeyError: if the card is not in the deck
            InvalidQualityError: if quality is outside [0, 5]
        """
        card = self._cards[card_id]
        return review(card, quality, timestamp)

    def __len__(self) -> int:
        return len(self._cards)

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def __iter__(self) -> Iterator[VocabularyCard]:
        return iter(list(self._cards.values()))
