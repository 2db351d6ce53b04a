"""
SM-2 Constants and Parameters

All configurable parameters for the SM-2 scheduler in one place.
"""

from enum import IntEnum


# ---- Review Quality ----

class ReviewQuality(IntEnum):
    """Learner's self-graded recall quality (SM-2 scale)."""
    BLACKOUT = 0             # Complete failure to recall
    INCORRECT = 1            # Wrong, but recognized once shown
    INCORRECT_FAMILIAR = 2   # Wrong, but the answer felt easy once shown
    CORRECT_DIFFICULT = 3    # Correct with serious difficulty
    CORRECT_HESITANT = 4     # Correct after hesitation
    PERFECT = 5              # Instant, effortless recall


MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3  # quality >= this counts as correct recall


# ---- Ease Factor ----

INITIAL_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3


# ---- Intervals (days) ----

FIRST_INTERVAL = 1          # After the first correct review
SECOND_INTERVAL = 6         # After the second consecutive correct review
FAILED_INTERVAL = 1         # After an incorrect review
LEARNED_INTERVAL_DAYS = 21  # Interval at which a card counts as learned
