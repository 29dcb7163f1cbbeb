"""Shared fixtures: every test gets its own records folder under tmp_path."""

import pytest

from vibecheck.config import StoreSettings
from vibecheck.services.storage import RecordsChangedNotifier, TextFileRecordStorage


@pytest.fixture
def store_settings(tmp_path):
    return StoreSettings(
        documents_dir=tmp_path,
        replace_retry_wait_seconds=0,
    )


@pytest.fixture
def notifier():
    return RecordsChangedNotifier()


@pytest.fixture
def store(store_settings, notifier):
    return TextFileRecordStorage(settings=store_settings, notifier=notifier)
