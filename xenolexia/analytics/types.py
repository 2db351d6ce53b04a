"""
Types for analytics dashboards.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class DeckDashboardData:
    """
    Precomputed metrics and series for a vocabulary deck.
    """
    total_cards: int
    status_counts: dict[str, int]
    due_now: int
    average_ease: float
    due_forecast_daily: pd.Series


@dataclass(frozen=True)
class ProcessingSummary:
    """
    Totals over many pipeline runs (e.g. every chapter of a book).
    """
    documents: int
    total_words: int
    eligible_words: int
    replaced_words: int
    replacement_ratio: float
    processing_time_ms: float
