"""
Service layer to assemble deck dashboards and pipeline summaries.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable, Optional

import pandas as pd

from xenolexia.analytics.constants import DEFAULT_FORECAST_DAYS
from xenolexia.analytics.metrics import (
    cards_to_frame,
    compute_average_ease,
    compute_due_forecast,
    compute_status_counts,
)
from xenolexia.analytics.types import DeckDashboardData, ProcessingSummary
from xenolexia.srs import VocabularyCard, as_utc
from xenolexia.translation.types import ProcessingStats


def build_deck_dashboard(
    cards: Iterable[VocabularyCard],
    now: Optional[datetime] = None,
    horizon_days: int = DEFAULT_FORECAST_DAYS,
) -> DeckDashboardData:
    """
    Build all KPI values and series needed by a vocabulary overview.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    now = as_utc(now)

    cards_df = cards_to_frame(list(cards), now)
    due_now = int(cards_df["due_now"].sum()) if not cards_df.empty else 0

    return DeckDashboardData(
        total_cards=len(cards_df),
        status_counts=compute_status_counts(cards_df),
        due_now=due_now,
        average_ease=compute_average_ease(cards_df),
        due_forecast_daily=compute_due_forecast(cards_df, now, horizon_days),
    )


def summarize_processing(stats: Iterable[ProcessingStats]) -> ProcessingSummary:
    """
    Aggregate the statistics of many pipeline runs.
    """
    df = pd.DataFrame(
        [
            {
                "total_words": s.total_words,
                "eligible_words": s.eligible_words,
                "replaced_words": s.replaced_words,
                "processing_time_ms": s.processing_time_ms,
            }
            for s in stats
        ],
        columns=["total_words", "eligible_words", "replaced_words", "processing_time_ms"],
    )
    if df.empty:
        return ProcessingSummary(0, 0, 0, 0, 0.0, 0.0)

    totals = df.sum()
    total_words = int(totals["total_words"])
    replaced = int(totals["replaced_words"])
    return ProcessingSummary(
        documents=len(df),
        total_words=total_words,
        eligible_words=int(totals["eligible_words"]),
        replaced_words=replaced,
        replacement_ratio=(replaced / total_words) if total_words else 0.0,
        processing_time_ms=float(totals["processing_time_ms"]),
    )
