"""
Abstract Storage Interface

The record store is defined as an abstract interface so that business
logic (analytics, UI collaborators) only depends on these five
operations. The flat text file is the one implementation; an in-memory
store for tests or a different backend can be swapped in later.

The interface is intentionally small: records are only ever appended,
read back (all or the most recent N) or wiped as a whole.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Optional, Union

from vibecheck.models.record import Mood, Record, RecordKind


class RecordStorageInterface(ABC):
    """
    Abstract interface for record storage operations.

    Every implementation must serialize access to its backing data so
    callers never have to coordinate with each other.
    """

    @abstractmethod
    async def ensure_exists(self) -> None:
        """
        Make sure the backing storage exists.

        Idempotent; existing content is left alone.

        Raises:
            DirectoryError: If the storage location cannot be used
            FileCreateError: If the empty store cannot be created
        """
        pass

    @abstractmethod
    async def append(
        self,
        timestamp: datetime,
        kind: Union[RecordKind, str],
        amount: Union[Decimal, int, float, str],
        note: str,
        mood_tag: Union[Mood, str],
    ) -> Record:
        """
        Append one record.

        Args:
            timestamp: When the transaction happened
            kind: Expense or income
            amount: Amount, stored with two fraction digits
            note: Free-form note (sanitized before storage)
            mood_tag: Mood or mood emoji (truncated to one glyph)

        Returns:
            The record as it was stored

        Raises:
            InvalidRecordError: If kind or amount cannot be understood
            FileWriteError: If the record could not be persisted
        """
        pass

    @abstractmethod
    async def read_last_records(self, limit: int) -> list[Record]:
        """
        Get the most recently appended records.

        Args:
            limit: Maximum number of records; <= 0 returns nothing

        Returns:
            Records newest first
        """
        pass

    @abstractmethod
    async def read_all_records(self) -> list[Record]:
        """
        Get every stored record.

        Returns:
            Records in append order (oldest first)
        """
        pass

    @abstractmethod
    async def reset(self) -> None:
        """
        Delete every record.

        Raises:
            FileWriteError: If the store could not be truncated
        """
        pass


class StorageError(Exception):
    """
    Base exception for storage operations.

    ``underlying`` holds the exception that caused the failure, if any.
    """

    def __init__(self, message: str, underlying: Optional[BaseException] = None):
        super().__init__(message)
        self.underlying = underlying


class DirectoryError(StorageError):
    """The storage directory cannot be used."""
    pass


class DirectoryAccessError(DirectoryError):
    """The storage directory cannot be located or accessed."""
    pass


class DirectoryCreateError(DirectoryError):
    """The storage directory could not be created."""
    pass


class FileCreateError(StorageError):
    """The initial records file could not be written."""
    pass


class FileReadError(StorageError):
    """The records file could not be read."""
    pass


class FileWriteError(StorageError):
    """The records file could not be written."""
    pass


WriteError = FileWriteError


class InvalidRecordError(StorageError):
    """Input to append cannot be turned into a record."""
    pass


class InvalidAmountError(InvalidRecordError):
    """The amount is not a valid decimal number."""
    pass


class InvalidKindError(InvalidRecordError):
    """The kind is neither expense nor income."""
    pass
