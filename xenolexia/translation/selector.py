"""
Substitution Selector - density-based choice of words to replace.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Iterable, Optional, Sequence

from xenolexia.translation.types import CandidateMatch

logger = logging.getLogger(__name__)


def eligible_matches(
    candidates: Iterable[CandidateMatch],
    exclude_words: Iterable[str] = (),
) -> list[CandidateMatch]:
    """Candidates with an entry whose lowercase word is not excluded."""
    excluded = {w.lower() for w in exclude_words}
    return [
        c for c in candidates
        if c.entry is not None and c.original_word.lower() not in excluded
    ]


def target_count(eligible_count: int, density: float) -> int:
    """floor(eligible_count * density), with density clamped to [0, 1]."""
    if eligible_count <= 0 or density <= 0:
        return 0
    if density >= 1:
        return eligible_count
    return math.floor(eligible_count * density)


def select_substitutions(
    candidates: Sequence[CandidateMatch],
    density: float,
    exclude_words: Iterable[str] = (),
    rng: Optional[random.Random] = None,
) -> list[CandidateMatch]:
    """
    Pick floor(len(eligible) * density) eligible candidates uniformly at random.

    The eligible set is shuffled (Fisher-Yates via Random.shuffle) and a prefix
    taken. Pass a seeded rng for reproducible selections; the default is the
    process-level generator.

    Returns:
        The selection, sorted by document offset
    """
    shuffle = rng.shuffle if rng is not None else random.shuffle
    eligible = eligible_matches(candidates, exclude_words)
    count = target_count(len(eligible), density)
    if count == 0:
        return []

    shuffled = list(eligible)
    shuffle(shuffled)
    selected = sorted(shuffled[:count], key=lambda c: c.start)

    logger.debug("Selected %d of %d eligible words (density %.2f)", count, len(eligible), density)
    return selected
