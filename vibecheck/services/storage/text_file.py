"""
Flat Text File Storage Implementation

All records live in a single UTF-8 text file: a fixed header line
followed by one pipe-delimited line per record (see ``codec``).

Writes never modify the records file in place. Append builds the full
new content in a temporary file next to it and then swaps it in with
``os.replace``, so the file on disk is always either the old version or
the new one. Reset is the exception: it truncates the file directly.

Every operation that touches the file runs in a worker thread while
holding the store's lock, one at a time, in the order callers reached
the lock. Callers never need to coordinate among themselves.

TRADEOFFS:
- The whole file is rewritten on every append (fine for a personal ledger)
- No OS-level locking: only one process may own the file
"""

import asyncio
import contextlib
import os
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional, TypeVar, Union
from uuid import uuid4

from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from vibecheck.audit.logger import AuditLogger, describe_error
from vibecheck.config import StoreSettings, get_settings
from vibecheck.models.record import Mood, Record, RecordKind
from vibecheck.services.storage import codec
from vibecheck.services.storage.events import RecordsChangedNotifier
from vibecheck.services.storage.interface import (
    DirectoryAccessError,
    DirectoryCreateError,
    FileCreateError,
    FileReadError,
    FileWriteError,
    InvalidAmountError,
    InvalidKindError,
    InvalidRecordError,
    RecordStorageInterface,
)


T = TypeVar("T")

_KINDS_BY_NAME = {kind.name.lower(): kind for kind in RecordKind}


def coerce_kind(kind: Union[RecordKind, str]) -> RecordKind:
    """Accept a RecordKind, its file token or its name ("expense")."""
    if isinstance(kind, RecordKind):
        return kind
    if isinstance(kind, str):
        parsed = codec.parse_kind(kind) or _KINDS_BY_NAME.get(kind.strip().lower())
        if parsed is not None:
            return parsed
    raise InvalidKindError(
        f"Kind must be one of {[k.token for k in RecordKind]}, got {kind!r}"
    )


def coerce_amount(amount: Union[Decimal, int, float, str]) -> Decimal:
    """Accept anything that reads as a finite decimal number."""
    value: Optional[Decimal] = None
    if isinstance(amount, bool):
        value = None
    elif isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, int):
        value = Decimal(amount)
    elif isinstance(amount, float):
        value = Decimal(repr(amount))
    elif isinstance(amount, str):
        value = codec.parse_amount(amount.strip())

    if value is None or not value.is_finite():
        raise InvalidAmountError(f"Amount is not a valid number: {amount!r}")
    return value


class TextFileRecordStorage(RecordStorageInterface):
    """
    Record storage backed by one pipe-delimited text file.

    Create one instance per file and share it; the lock that serializes
    file access lives on the instance.
    """

    def __init__(
        self,
        settings: Optional[StoreSettings] = None,
        notifier: Optional[RecordsChangedNotifier] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._settings = settings or get_settings().store
        self._notifier = notifier or RecordsChangedNotifier()
        self._audit = audit_logger or AuditLogger()
        self._lock = threading.Lock()

    @property
    def folder_path(self) -> Path:
        return self._settings.folder_path

    @property
    def file_path(self) -> Path:
        return self._settings.file_path

    @property
    def notifier(self) -> RecordsChangedNotifier:
        return self._notifier

    # ---------- serialization ----------

    async def _run_serialized(self, func: Callable[..., T], *args) -> T:
        """Run ``func`` in a worker thread once the file lock is free."""
        return await asyncio.to_thread(self._serialized, func, *args)

    def _serialized(self, func: Callable[..., T], *args) -> T:
        with self._lock:
            return func(*args)

    # ---------- public operations ----------

    async def ensure_exists(self) -> None:
        """Create the folder and a header-only file if they are missing."""
        await self._run_serialized(self._ensure_exists)

    async def append(
        self,
        timestamp: datetime,
        kind: Union[RecordKind, str],
        amount: Union[Decimal, int, float, str],
        note: str,
        mood_tag: Union[Mood, str],
    ) -> Record:
        """Append one record and notify subscribers."""
        record = self._build_record(timestamp, kind, amount, note, mood_tag)

        await self.ensure_exists()
        await self._run_serialized(self._append_line, codec.serialize(record))

        self._audit.log_record_appended(
            kind=record.kind.name,
            amount=record.amount_string,
            mood_tag=record.mood_tag,
        )
        self._notifier.notify()
        return record

    async def read_last_records(self, limit: int) -> list[Record]:
        """Most recent records, newest first."""
        await self.ensure_exists()
        if limit <= 0:
            return []

        lines = await self._run_serialized(self._read_data_lines)
        records = self._parse_lines(lines[-limit:], "read_last_records", limit)
        records.reverse()
        return records

    async def read_all_records(self) -> list[Record]:
        """Every record, oldest first."""
        await self.ensure_exists()
        lines = await self._run_serialized(self._read_data_lines)
        return self._parse_lines(lines, "read_all_records")

    async def reset(self) -> None:
        """Truncate the file back to the header line."""
        await self.ensure_exists()
        await self._run_serialized(self._truncate)

        self._audit.log_records_reset()
        self._notifier.notify()

    # ---------- record building ----------

    def _build_record(
        self,
        timestamp: datetime,
        kind: Union[RecordKind, str],
        amount: Union[Decimal, int, float, str],
        note: str,
        mood_tag: Union[Mood, str],
    ) -> Record:
        if isinstance(mood_tag, Mood):
            mood_tag = mood_tag.emoji

        try:
            return Record(
                timestamp=timestamp,
                kind=coerce_kind(kind),
                amount=coerce_amount(amount),
                note=codec.sanitize_note(note or ""),
                mood_tag=codec.sanitize_mood_tag(mood_tag or ""),
            )
        except ValidationError as e:
            raise InvalidRecordError(f"Invalid record: {e}", underlying=e) from e

    def _parse_lines(
        self,
        lines: list[str],
        operation: str,
        limit: Optional[int] = None,
    ) -> list[Record]:
        records = []
        for line in lines:
            record = codec.parse(line)
            if record is not None:
                records.append(record)

        self._audit.log_records_read(
            operation=operation,
            returned=len(records),
            skipped=len(lines) - len(records),
            limit=limit,
        )
        return records

    # ---------- file access (lock held) ----------

    def _ensure_exists(self) -> None:
        folder = self.folder_path
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._audit.log_storage_error("create_directory", e)
            raise DirectoryCreateError(
                f"Cannot create records folder: {describe_error(e)}",
                underlying=e,
            ) from e

        if not os.access(folder, os.R_OK | os.W_OK | os.X_OK):
            error = PermissionError("records folder is not readable and writable")
            self._audit.log_storage_error("access_directory", error)
            raise DirectoryAccessError(
                "Cannot access records folder",
                underlying=error,
            )

        if self.file_path.exists():
            return

        try:
            self._write_atomically(codec.HEADER_LINE + "\n")
        except OSError as e:
            self._audit.log_storage_error("create_file", e)
            raise FileCreateError(
                f"Cannot create records file: {describe_error(e)}",
                underlying=e,
            ) from e
        self._audit.log_file_created()

    def _read_text(self) -> str:
        # newline="" keeps line endings untouched; lines split on "\n" only
        with self.file_path.open("r", encoding="utf-8", newline="") as f:
            return f.read()

    def _read_data_lines(self) -> list[str]:
        """Non-blank lines after the header."""
        try:
            content = self._read_text()
        except (OSError, UnicodeDecodeError) as e:
            self._audit.log_storage_error("read", e)
            raise FileReadError(
                f"Cannot read records file: {describe_error(e)}",
                underlying=e,
            ) from e

        lines = [line.rstrip("\r") for line in content.split("\n")]
        return [line for line in lines if line][1:]

    def _read_for_append(self) -> str:
        """
        Current content to append to.

        An unreadable file counts as empty unless strict reads are
        configured. Content without a header gets one.
        """
        try:
            existing = self._read_text()
        except (OSError, UnicodeDecodeError) as e:
            if self._settings.strict_append_reads:
                self._audit.log_storage_error("read_before_append", e)
                raise FileReadError(
                    f"Cannot read records file before append: {describe_error(e)}",
                    underlying=e,
                ) from e
            self._audit.log_append_read_fallback(e)
            existing = ""

        if not existing.strip():
            return codec.HEADER_LINE + "\n"
        if not existing.endswith("\n"):
            existing += "\n"
        return existing

    def _append_line(self, line: str) -> None:
        content = self._read_for_append() + line
        try:
            self._write_atomically(content)
        except OSError as e:
            self._audit.log_storage_error("append", e)
            raise FileWriteError(
                f"Cannot write records file: {describe_error(e)}",
                underlying=e,
            ) from e

    def _truncate(self) -> None:
        try:
            with self.file_path.open("w", encoding="utf-8", newline="") as f:
                f.write(codec.HEADER_LINE + "\n")
        except OSError as e:
            self._audit.log_storage_error("reset", e)
            raise FileWriteError(
                f"Cannot reset records file: {describe_error(e)}",
                underlying=e,
            ) from e

    def _write_atomically(self, content: str) -> None:
        """Write content to a temp file beside the target, then swap it in."""
        temp = self.folder_path / f".tmp_{uuid4().hex}.txt"
        try:
            with temp.open("w", encoding="utf-8", newline="") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            self._replace(temp, self.file_path)
        except OSError:
            with contextlib.suppress(OSError):
                temp.unlink(missing_ok=True)
            raise

    def _replace(self, source: Path, target: Path) -> None:
        """os.replace, retried while another handle briefly holds the target."""
        for attempt in Retrying(
            stop=stop_after_attempt(self._settings.replace_retry_attempts),
            wait=wait_fixed(self._settings.replace_retry_wait_seconds),
            retry=retry_if_exception_type(PermissionError),
            reraise=True,
        ):
            with attempt:
                os.replace(source, target)
