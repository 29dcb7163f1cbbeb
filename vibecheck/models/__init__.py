"""
Data Models Package

Pydantic models for records, moods and the analytics derived from them.
"""

from vibecheck.models.record import (
    DEFAULT_MOOD_SCORE,
    TIMESTAMP_FORMAT,
    Mood,
    Record,
    RecordKind,
    format_timestamp,
    mood_score,
    normalize_timestamp,
    quantize_amount,
)
from vibecheck.models.analytics import (
    DailySummary,
    SpendingSplit,
)

__all__ = [
    # Record models
    "DEFAULT_MOOD_SCORE",
    "TIMESTAMP_FORMAT",
    "Mood",
    "Record",
    "RecordKind",
    "format_timestamp",
    "mood_score",
    "normalize_timestamp",
    "quantize_amount",
    # Analytics models
    "DailySummary",
    "SpendingSplit",
]
