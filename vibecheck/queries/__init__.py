"""Record analytics package."""

from vibecheck.queries.analytics import (
    RecordAnalytics,
    compute_daily_breakdown,
    compute_net_happiness,
    compute_net_spending,
    compute_spending_split,
)

__all__ = [
    "RecordAnalytics",
    "compute_daily_breakdown",
    "compute_net_happiness",
    "compute_net_spending",
    "compute_spending_split",
]
