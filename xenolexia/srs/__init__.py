"""
SRS - SM-2 spaced repetition for saved vocabulary.

Quick start:
    from xenolexia import srs

    card = srs.VocabularyCard("house", "σπίτι", "en", "el")
    srs.review(card, srs.ReviewQuality.PERFECT)   # interval 1, review_count 1
    srs.due_for_review(card)                      # False until tomorrow
"""

# Core scheduler API (algorithm logic)
from xenolexia.srs.scheduler import (
    derive_status,
    due_for_review,
    next_interval,
    next_review_at,
    review,
    update_ease_factor,
    validate_quality,
)

# Cards and deck
from xenolexia.srs.card import VocabularyCard, VocabularyStatus, as_utc, generate_card_id
from xenolexia.srs.deck import VocabularyDeck

# Constants and parameters
from xenolexia.srs.constants import (
    ReviewQuality,
    PASSING_QUALITY,
    INITIAL_EASE_FACTOR,
    MIN_EASE_FACTOR,
    FIRST_INTERVAL,
    SECOND_INTERVAL,
    FAILED_INTERVAL,
    LEARNED_INTERVAL_DAYS,
)


__all__ = [
    # Core algorithm
    "review",
    "due_for_review",
    "derive_status",
    "next_interval",
    "next_review_at",
    "update_ease_factor",
    "validate_quality",

    # Cards
    "VocabularyCard",
    "VocabularyStatus",
    "VocabularyDeck",
    "as_utc",
    "generate_card_id",

    # Enums
    "ReviewQuality",

    # Parameters
    "PASSING_QUALITY",
    "INITIAL_EASE_FACTOR",
    "MIN_EASE_FACTOR",
    "FIRST_INTERVAL",
    "SECOND_INTERVAL",
    "FAILED_INTERVAL",
    "LEARNED_INTERVAL_DAYS",
]
