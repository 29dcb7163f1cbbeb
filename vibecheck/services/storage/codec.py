"""
Record Line Codec

Turns a Record into one line of the records file and back.

Line layout (five fields, pipe separated, newline terminated):

    2024-01-01 10:00:00|支出|12.50|lunch with Sam|🥳

Everything here is pure: no I/O, no state, safe to call from any thread.

Parsing never raises. A line that does not fit the layout yields None and
the reader simply skips it, so one corrupt line cannot hide the rest of
the history.
"""

import re
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Optional

import regex
from pydantic import ValidationError

from vibecheck.models.record import (
    TIMESTAMP_FORMAT,
    Record,
    RecordKind,
    format_timestamp,
    quantize_amount,
)


DELIMITER = "|"
DELIMITER_SUBSTITUTE = "/"
FIELD_COUNT = 5

HEADER_FIELDS = ("时间", "类型", "价格", "备注", "心情")
HEADER_LINE = DELIMITER.join(HEADER_FIELDS)

_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$")
_AMOUNT_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_LINE_BREAKS_RE = re.compile(r"\r\n|\r|\n")
_GRAPHEME_RE = regex.compile(r"\X")

_KINDS_BY_TOKEN = {kind.token: kind for kind in RecordKind}


# =============================================================================
# FIELD FORMATTING
# =============================================================================

def parse_timestamp(text: str) -> Optional[datetime]:
    """Parse ``yyyy-MM-dd HH:mm:ss``; anything looser is rejected."""
    if not _TIMESTAMP_RE.match(text):
        return None
    try:
        return datetime.strptime(text, TIMESTAMP_FORMAT)
    except ValueError:
        return None


def format_amount(value: Decimal) -> str:
    """Two fraction digits, ``.`` as decimal point, no grouping."""
    return f"{quantize_amount(value):.2f}"


def parse_amount(text: str) -> Optional[Decimal]:
    """
    Parse a plain decimal literal.

    Thousands-separator commas are tolerated. Exponents, NaN and
    Infinity are not.
    """
    normalized = text.replace(",", "")
    if not _AMOUNT_RE.match(normalized):
        return None
    try:
        return Decimal(normalized)
    except InvalidOperation:
        return None


def parse_kind(text: str) -> Optional[RecordKind]:
    return _KINDS_BY_TOKEN.get(text)


def sanitize_note(note: str) -> str:
    """
    Make a note safe to store in a single field.

    Line breaks become spaces, the delimiter becomes ``/`` and
    surrounding whitespace is trimmed.
    """
    cleaned = _LINE_BREAKS_RE.sub(" ", note)
    cleaned = cleaned.replace(DELIMITER, DELIMITER_SUBSTITUTE)
    return cleaned.strip()


def first_glyph(text: str) -> str:
    """First user-perceived character (extended grapheme cluster) of text."""
    match = _GRAPHEME_RE.match(text)
    return match.group(0) if match else ""


def sanitize_mood_tag(tag: str) -> str:
    return first_glyph(sanitize_note(tag))


# =============================================================================
# LINES
# =============================================================================

def serialize(record: Record) -> str:
    """Render a record as one newline-terminated line."""
    fields = (
        format_timestamp(record.timestamp),
        record.kind.token,
        format_amount(record.amount),
        sanitize_note(record.note),
        sanitize_mood_tag(record.mood_tag),
    )
    return DELIMITER.join(fields) + "\n"


def parse(line: str) -> Optional[Record]:
    """
    Parse one line of the records file.

    Returns None for anything that is not a well-formed record line.
    Fields beyond the fifth are ignored; note and mood tag are taken
    verbatim.
    """
    parts = line.rstrip("\r\n").split(DELIMITER)
    if len(parts) < FIELD_COUNT:
        return None

    timestamp = parse_timestamp(parts[0])
    if timestamp is None:
        return None

    kind = parse_kind(parts[1])
    if kind is None:
        return None

    amount = parse_amount(parts[2])
    if amount is None:
        return None

    try:
        return Record(
            timestamp=timestamp,
            kind=kind,
            amount=amount,
            note=parts[3],
            mood_tag=parts[4],
        )
    except ValidationError:
        return None
