"""
Storage Services Package

Provides the abstract record storage interface and its flat text file
implementation, plus the line codec and change notifier it is built on.
"""

from vibecheck.services.storage.interface import (
    DirectoryAccessError,
    DirectoryCreateError,
    DirectoryError,
    FileCreateError,
    FileReadError,
    FileWriteError,
    InvalidAmountError,
    InvalidKindError,
    InvalidRecordError,
    RecordStorageInterface,
    StorageError,
    WriteError,
)
from vibecheck.services.storage.events import RecordsChangedNotifier
from vibecheck.services.storage.text_file import TextFileRecordStorage

__all__ = [
    # Interface
    "RecordStorageInterface",
    # Exceptions
    "DirectoryAccessError",
    "DirectoryCreateError",
    "DirectoryError",
    "FileCreateError",
    "FileReadError",
    "FileWriteError",
    "InvalidAmountError",
    "InvalidKindError",
    "InvalidRecordError",
    "StorageError",
    "WriteError",
    # Text file implementation
    "RecordsChangedNotifier",
    "TextFileRecordStorage",
]
