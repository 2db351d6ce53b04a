"""
Analytics package exports.
"""

from xenolexia.analytics.constants import STATUS_LABELS
from xenolexia.analytics.service import build_deck_dashboard, summarize_processing
from xenolexia.analytics.types import DeckDashboardData, ProcessingSummary

__all__ = [
    "STATUS_LABELS",
    "build_deck_dashboard",
    "summarize_processing",
    "DeckDashboardData",
    "ProcessingSummary",
]
