"""
Core Data Models for VibeCheck

A Record is one persisted money movement: when it happened, whether
money went out or came in, how much, a free-form note and a mood tag.

Records are immutable values. The records file is the only place they
live; these models are what the store hands back after parsing it.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_EVEN, Decimal, InvalidOperation
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
CENTS = Decimal("0.01")

# Score assumed for tags that are not one of the known moods
DEFAULT_MOOD_SCORE = 3


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class RecordKind(str, Enum):
    """
    Direction of a record.

    The values are the literal tokens written to the records file.
    """
    EXPENSE = "支出"
    INCOME = "收入"

    @property
    def token(self) -> str:
        return self.value


class Mood(str, Enum):
    """
    How the user felt about a transaction.

    Only the emoji is persisted; label and score are looked up from it.
    """
    REGRETLESS_JOY = "regretless_joy"
    IMPULSE_TAX = "impulse_tax"
    REVENGE_SPENDING = "revenge_spending"
    SAD = "sad"
    NEUTRAL = "neutral"
    HAPPY = "happy"

    @property
    def emoji(self) -> str:
        return _MOOD_EMOJI[self]

    @property
    def label(self) -> str:
        return _MOOD_LABELS[self]

    @property
    def score(self) -> int:
        """Happiness score from 1 (regret) to 5 (pure joy)."""
        return _MOOD_SCORES[self]

    @classmethod
    def from_emoji(cls, tag: str) -> Optional["Mood"]:
        for mood in cls:
            if mood.emoji == tag:
                return mood
        return None


_MOOD_EMOJI = {
    Mood.REGRETLESS_JOY: "\U0001F973",    # 🥳
    Mood.IMPULSE_TAX: "\U0001F921",       # 🤡
    Mood.REVENGE_SPENDING: "\U0001F624",  # 😤
    Mood.SAD: "\U0001F622",               # 😢
    Mood.NEUTRAL: "\U0001F610",           # 😐
    Mood.HAPPY: "\U0001F600",             # 😀
}

_MOOD_LABELS = {
    Mood.REGRETLESS_JOY: "Regretless Joy",
    Mood.IMPULSE_TAX: "Impulse Tax",
    Mood.REVENGE_SPENDING: "Revenge Spending",
    Mood.SAD: "Sad Spending",
    Mood.NEUTRAL: "Meh",
    Mood.HAPPY: "Happy",
}

_MOOD_SCORES = {
    Mood.REGRETLESS_JOY: 5,
    Mood.HAPPY: 4,
    Mood.NEUTRAL: 3,
    Mood.IMPULSE_TAX: 2,
    Mood.REVENGE_SPENDING: 1,
    Mood.SAD: 1,
}


def mood_score(tag: str) -> int:
    """Score for a persisted mood tag, neutral when the tag is unknown."""
    mood = Mood.from_emoji(tag)
    return mood.score if mood else DEFAULT_MOOD_SCORE


def normalize_timestamp(value: datetime) -> datetime:
    """
    Bring a datetime to what the file can represent.

    Aware datetimes are converted to local time and made naive;
    sub-second precision is dropped.
    """
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value.replace(microsecond=0)


def format_timestamp(value: datetime) -> str:
    """Zero-padded ``yyyy-MM-dd HH:mm:ss``, also for years before 1000."""
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )


def quantize_amount(value: Decimal) -> Decimal:
    """Round to exactly two fraction digits (half-even)."""
    return value.quantize(CENTS, rounding=ROUND_HALF_EVEN)


# =============================================================================
# RECORD
# =============================================================================

class Record(BaseModel):
    """
    One persisted transaction.

    Two records are indistinguishable only when every displayed field
    matches, see ``identity``.
    """
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(
        ...,
        description="Local time of the transaction, second precision"
    )
    kind: RecordKind = Field(
        ...,
        description="Expense or income"
    )
    amount: Decimal = Field(
        ...,
        description="Amount with exactly two fraction digits"
    )
    note: str = Field(
        default="",
        description="Free-form note"
    )
    mood_tag: str = Field(
        default="",
        description="Single emoji mood tag"
    )

    @field_validator('timestamp')
    @classmethod
    def validate_timestamp(cls, v: datetime) -> datetime:
        return normalize_timestamp(v)

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: Decimal) -> Decimal:
        """Amounts must be finite; they are stored with two decimals."""
        if not v.is_finite():
            raise ValueError(f"Amount must be a finite number, got {v}")
        try:
            return quantize_amount(v)
        except InvalidOperation:
            raise ValueError(f"Amount is out of range: {v}")

    @property
    def timestamp_string(self) -> str:
        return format_timestamp(self.timestamp)

    @property
    def amount_string(self) -> str:
        return f"{self.amount:.2f}"

    @property
    def day(self) -> date:
        return self.timestamp.date()

    @property
    def mood(self) -> Optional[Mood]:
        return Mood.from_emoji(self.mood_tag)

    @property
    def mood_score(self) -> int:
        return mood_score(self.mood_tag)

    @property
    def signed_amount(self) -> Decimal:
        """Negative for expenses, positive for income."""
        if self.kind == RecordKind.EXPENSE:
            return -self.amount
        return self.amount

    @property
    def identity(self) -> tuple[str, str, str, str, str]:
        return (
            self.timestamp_string,
            self.kind.token,
            self.amount_string,
            self.note,
            self.mood_tag,
        )
