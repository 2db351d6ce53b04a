"""
Vocabulary Card - review state for one saved word.

A card is created when the learner saves a substituted word and is mutated
only by the scheduler afterwards.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from xenolexia.schemas import Language
from xenolexia.srs.constants import INITIAL_EASE_FACTOR, MIN_EASE_FACTOR


class VocabularyStatus(str, Enum):
    """
    Learning status, derived from interval and review count.

    LEARNING and REVIEW are the same scheduling bucket; the scheduler
    produces LEARNING.
    """
    NEW = "new"
    LEARNING = "learning"
    REVIEW = "review"
    LEARNED = "learned"


def generate_card_id() -> str:
    return str(uuid.uuid4())


def as_utc(moment: Optional[datetime]) -> Optional[datetime]:
    """
    Return an aware UTC datetime. Naive values are taken to be UTC already
    (pymongo hands them back that way by default).
    """
    if moment is None:
        return None
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


@dataclass
class VocabularyCard:
    """
    SM-2 state for a single saved word.
    """
    source_word: str
    target_word: str
    source_language: Language
    target_language: Language

    id: str = field(default_factory=generate_card_id)
    context_sentence: Optional[str] = None
    book_id: Optional[str] = None
    book_title: Optional[str] = None
    added_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # SM-2 parameters
    ease_factor: float = INITIAL_EASE_FACTOR
    interval: int = 0  # Days until next review
    review_count: int = 0  # Consecutive correct reviews
    status: VocabularyStatus = VocabularyStatus.NEW
    last_reviewed_at: Optional[datetime] = None

    def __post_init__(self):
        """Reject states the scheduler can never produce."""
        self.source_language = Language(self.source_language)
        self.target_language = Language(self.target_language)
        self.status = VocabularyStatus(self.status)
        self.added_at = as_utc(self.added_at)
        self.last_reviewed_at = as_utc(self.last_reviewed_at)
        if self.ease_factor < MIN_EASE_FACTOR:
            raise ValueError(f"ease_factor must be >= {MIN_EASE_FACTOR}, got {self.ease_factor}")
        if not isinstance(self.interval, int) or self.interval < 0:
            raise ValueError(f"interval must be a non-negative integer, got {self.interval!r}")
        if self.review_count < 0:
            raise ValueError(f"review_count must be >= 0, got {self.review_count}")
