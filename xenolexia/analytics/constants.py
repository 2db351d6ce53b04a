"""
Constants for analytics dashboards.
"""

from __future__ import annotations

from typing import Final


STATUS_ORDER: Final[list[str]] = ["new", "learning", "review", "learned"]

STATUS_LABELS: Final[dict[str, str]] = {
    "new": "New",
    "learning": "Learning",
    "review": "Review",
    "learned": "Learned",
}

CARD_COLUMNS: Final[list[str]] = [
    "card_id",
    "status",
    "ease_factor",
    "interval",
    "next_review_at",
    "due_now",
]

DEFAULT_FORECAST_DAYS: Final[int] = 30
