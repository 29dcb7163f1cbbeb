"""
Record Analytics

Derived views over what the store returns: today's happiness and net
spending for the dashboard, the "stupidity tax" split and the per-day
spending/mood series for the charts.

Every figure is computed from real stored records through the storage
interface; nothing is cached between calls, so a view refreshed after a
"records changed" notification always reflects the file.
"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from vibecheck.models.analytics import DailySummary, SpendingSplit
from vibecheck.models.record import (
    DEFAULT_MOOD_SCORE,
    Record,
    RecordKind,
    quantize_amount,
)
from vibecheck.services.storage import RecordStorageInterface


ZERO = Decimal("0.00")


# =============================================================================
# PURE CALCULATIONS
# =============================================================================

def compute_net_happiness(records: Iterable[Record], day: date) -> int:
    """Sum of mood scores of the records on ``day``."""
    return sum(r.mood_score for r in records if r.day == day)


def compute_net_spending(records: Iterable[Record], day: date) -> Decimal:
    """Income minus expenses on ``day``."""
    total = sum((r.signed_amount for r in records if r.day == day), ZERO)
    return quantize_amount(total)


def compute_spending_split(records: Iterable[Record]) -> Optional[SpendingSplit]:
    """
    Split expenses into regretted and worthwhile spending.

    Returns None when there are no expenses to split.
    """
    expenses = [r for r in records if r.kind == RecordKind.EXPENSE]
    total = sum((r.amount for r in expenses), ZERO)
    if total <= 0:
        return None

    stupidity_tax = sum(
        (r.amount for r in expenses if r.mood_score < DEFAULT_MOOD_SCORE),
        ZERO,
    )
    return SpendingSplit(
        total=quantize_amount(total),
        stupidity_tax=quantize_amount(stupidity_tax),
        good_vibes=quantize_amount(total - stupidity_tax),
    )


def compute_daily_breakdown(records: Iterable[Record]) -> list[DailySummary]:
    """One summary per calendar day that has records, oldest day first."""
    by_day: dict[date, list[Record]] = defaultdict(list)
    for record in records:
        by_day[record.day].append(record)

    summaries = []
    for day in sorted(by_day):
        day_records = by_day[day]
        spending = sum(
            (r.amount for r in day_records if r.kind == RecordKind.EXPENSE),
            ZERO,
        )
        average_mood = sum(r.mood_score for r in day_records) / len(day_records)
        summaries.append(
            DailySummary(
                day=day,
                total_spending=quantize_amount(spending),
                average_mood=average_mood,
                record_count=len(day_records),
            )
        )
    return summaries


# =============================================================================
# STORAGE-BACKED VIEWS
# =============================================================================

class RecordAnalytics:
    """
    Computes dashboard and chart figures from stored records.

    Only reads through the storage interface; never writes.
    """

    def __init__(self, storage: RecordStorageInterface, recent_limit: int = 10):
        self._storage = storage
        self._recent_limit = recent_limit

    async def recent(self, limit: Optional[int] = None) -> list[Record]:
        """Latest records, newest first. Defaults to the configured limit."""
        if limit is None:
            limit = self._recent_limit
        return await self._storage.read_last_records(limit)

    async def net_happiness(self, day: Optional[date] = None) -> int:
        records = await self._storage.read_all_records()
        return compute_net_happiness(records, day or date.today())

    async def net_spending(self, day: Optional[date] = None) -> Decimal:
        records = await self._storage.read_all_records()
        return compute_net_spending(records, day or date.today())

    async def spending_split(self) -> Optional[SpendingSplit]:
        records = await self._storage.read_all_records()
        return compute_spending_split(records)

    async def daily_breakdown(self) -> list[DailySummary]:
        records = await self._storage.read_all_records()
        return compute_daily_breakdown(records)
