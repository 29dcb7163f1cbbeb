"""
Analytics Result Models

Derived views computed from records. Nothing here is persisted.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SpendingSplit(BaseModel):
    """
    Expenses split by how the user felt about them.

    ``stupidity_tax`` is spending tagged with a mood scoring below neutral,
    ``good_vibes`` is everything else.
    """
    model_config = ConfigDict(frozen=True)

    total: Decimal = Field(..., gt=0)
    stupidity_tax: Decimal
    good_vibes: Decimal

    @property
    def stupidity_share(self) -> float:
        return float(self.stupidity_tax / self.total)

    @property
    def good_vibes_share(self) -> float:
        return float(self.good_vibes / self.total)


class DailySummary(BaseModel):
    """Spending and average mood for one calendar day."""
    model_config = ConfigDict(frozen=True)

    day: date
    total_spending: Decimal = Decimal("0.00")
    average_mood: float = Field(default=0.0, ge=0.0, le=5.0)
    record_count: int = Field(default=0, ge=0)
