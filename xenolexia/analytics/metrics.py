"""
Metric computations for analytics dashboards.
"""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from xenolexia.analytics.constants import CARD_COLUMNS, STATUS_ORDER
from xenolexia.srs import VocabularyCard, due_for_review, next_review_at


def _utc_day(moment: datetime) -> pd.Timestamp:
    ts = pd.Timestamp(moment)
    ts = ts.tz_convert("UTC") if ts.tzinfo is not None else ts.tz_localize("UTC")
    return ts.floor("D")


def cards_to_frame(cards: list[VocabularyCard], now: datetime) -> pd.DataFrame:
    """
    One row per card with its scheduling state at `now`.
    """
    if not cards:
        return pd.DataFrame(columns=CARD_COLUMNS)

    rows = [
        {
            "card_id": card.id,
            "status": card.status.value,
            "ease_factor": card.ease_factor,
            "interval": card.interval,
            "next_review_at": next_review_at(card),
            "due_now": due_for_review(card, now),
        }
        for card in cards
    ]
    df = pd.DataFrame(rows, columns=CARD_COLUMNS)
    df["next_review_at"] = pd.to_datetime(df["next_review_at"], utc=True)
    return df


def compute_status_counts(cards_df: pd.DataFrame) -> dict[str, int]:
    """
    Count cards per status, including zero counts.
    """
    counts = cards_df["status"].value_counts() if not cards_df.empty else pd.Series(dtype="int64")
    return {status: int(counts.get(status, 0)) for status in STATUS_ORDER}


def compute_average_ease(cards_df: pd.DataFrame) -> float:
    if cards_df.empty:
        return 0.0
    return float(cards_df["ease_factor"].mean())


def compute_due_forecast(
    cards_df: pd.DataFrame,
    now: datetime,
    horizon_days: int
) -> pd.Series:
    """
    Number of cards becoming due on each of the next horizon_days days.

    Day 0 also counts everything already overdue and never-reviewed cards.
    Learned cards are excluded.
    """
    start = _utc_day(now)
    day_index = pd.date_range(start=start, periods=max(horizon_days, 0), freq="D")
    if cards_df.empty or horizon_days <= 0:
        return pd.Series(0, index=day_index, dtype="int64")

    active = cards_df[cards_df["status"] != "learned"]
    offsets = (active["next_review_at"] - start) // pd.Timedelta(days=1)
    offsets = offsets.fillna(0).clip(lower=0).astype("int64")
    counts = offsets.value_counts().reindex(range(horizon_days), fill_value=0)
    return pd.Series(counts.to_numpy(), index=day_index, dtype="int64")
