"""Services package."""

from vibecheck.services.storage import (
    DirectoryAccessError,
    DirectoryCreateError,
    DirectoryError,
    FileCreateError,
    FileReadError,
    FileWriteError,
    InvalidAmountError,
    InvalidKindError,
    InvalidRecordError,
    RecordsChangedNotifier,
    RecordStorageInterface,
    StorageError,
    TextFileRecordStorage,
    WriteError,
)

__all__ = [
    # Storage services
    "DirectoryAccessError",
    "DirectoryCreateError",
    "DirectoryError",
    "FileCreateError",
    "FileReadError",
    "FileWriteError",
    "InvalidAmountError",
    "InvalidKindError",
    "InvalidRecordError",
    "RecordsChangedNotifier",
    "RecordStorageInterface",
    "StorageError",
    "TextFileRecordStorage",
    "WriteError",
]
