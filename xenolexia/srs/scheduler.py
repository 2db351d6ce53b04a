"""
Scheduler - SM-2 Algorithm Logic

Pure SM-2 scheduling and state updates (no storage calls).

Main workflow:
1. Load card (caller's responsibility)
2. Validate the review quality
3. Update interval and consecutive-correct count
4. Update ease factor (always, correct or not)
5. Derive status and stamp the review time

Concurrent reviews of the same card must be serialized by the caller; the
update is not commutative.
"""

from __future__ import annotations

import math
import numbers
from datetime import datetime, timedelta, timezone
from typing import Optional

from xenolexia.errors import InvalidQualityError
from xenolexia.srs.card import VocabularyCard, VocabularyStatus, as_utc
from xenolexia.srs.constants import (
    FAILED_INTERVAL,
    FIRST_INTERVAL,
    LEARNED_INTERVAL_DAYS,
    MAX_QUALITY,
    MIN_EASE_FACTOR,
    MIN_QUALITY,
    PASSING_QUALITY,
    SECOND_INTERVAL,
)


def validate_quality(quality) -> int:
    """
    Check a review quality score.

    Raises:
        InvalidQualityError: if quality is not an integer in [0, 5]
    """
    if isinstance(quality, bool) or not isinstance(quality, numbers.Integral):
        raise InvalidQualityError(f"Review quality must be an integer, got {quality!r}")
    if not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidQualityError(
            f"Review quality must be between {MIN_QUALITY} and {MAX_QUALITY}, got {quality}"
        )
    return int(quality)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def update_ease_factor(ease_factor: float, quality: int) -> float:
    """
    SM-2 ease update, floored at MIN_EASE_FACTOR.

    Formula:
        EF' = max(1.3, EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)))
    """
    miss = MAX_QUALITY - quality
    return max(MIN_EASE_FACTOR, ease_factor + (0.1 - miss * (0.08 + miss * 0.02)))


def next_interval(interval: int, review_count: int, ease_factor: float) -> int:
    """Interval after a correct review, given the state before it."""
    if review_count == 0:
        return FIRST_INTERVAL
    if review_count == 1:
        return SECOND_INTERVAL
    return _round_half_up(interval * ease_factor)


def derive_status(interval: int, review_count: int) -> VocabularyStatus:
    """learned at >= 21 days, new with no consecutive correct reviews, else learning."""
    if interval >= LEARNED_INTERVAL_DAYS:
        return VocabularyStatus.LEARNED
    if review_count == 0:
        return VocabularyStatus.NEW
    return VocabularyStatus.LEARNING


def review(
    card: VocabularyCard,
    quality: int,
    timestamp: Optional[datetime] = None
) -> VocabularyCard:
    """
    Apply one review to a card and return it.

    The card is modified in place. Quality is validated before anything
    changes, so a rejected review leaves the card untouched.

    Args:
        card: Card to update
        quality: Recall quality 0-5 (>= 3 is correct)
        timestamp: Review time (defaults to now, UTC)

    Returns:
        The updated card

    Raises:
        InvalidQualityError: if quality is outside [0, 5]
    """
    quality = validate_quality(quality)
    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    timestamp = as_utc(timestamp)

    if quality >= PASSING_QUALITY:
        card.interval = next_interval(card.interval, card.review_count, card.ease_factor)
        card.review_count += 1
    else:
        card.review_count = 0
        card.interval = FAILED_INTERVAL

    # Applied for every review, correct or not
    card.ease_factor = update_ease_factor(card.ease_factor, quality)

    card.status = derive_status(card.interval, card.review_count)
    card.last_reviewed_at = timestamp
    return card


def next_review_at(card: VocabularyCard) -> Optional[datetime]:
    """When the card becomes due, or None if it was never reviewed."""
    if card.last_reviewed_at is None:
        return None
    return as_utc(card.last_reviewed_at) + timedelta(days=card.interval)


def due_for_review(card: VocabularyCard, now: Optional[datetime] = None) -> bool:
    """
    True if the card should be reviewed at `now`.

    Learned cards are never due; never-reviewed cards always are.
    """
    if card.status == VocabularyStatus.LEARNED:
        return False
    if card.last_reviewed_at is None:
        return True
    if now is None:
        now = datetime.now(timezone.utc)
    return as_utc(now) >= next_review_at(card)
