"""Tests for configuration and application wiring."""

import pytest
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from pydantic import ValidationError

from vibecheck.config import (
    LoggingSettings,
    Settings,
    StoreSettings,
    get_settings,
    validate_all_settings,
)
from vibecheck.models import RecordKind
from vibecheck.orchestrator import create_app_components
from vibecheck.queries import RecordAnalytics
from vibecheck.services.storage import RecordsChangedNotifier, TextFileRecordStorage


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestStoreSettings:
    """Tests for record file location settings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("VIBECHECK_STORE_DOCUMENTS_DIR", raising=False)
        settings = StoreSettings()
        assert settings.documents_dir == Path.home() / "Documents"
        assert settings.file_path == Path.home() / "Documents" / "MyAccounting" / "accounting_records.txt"
        assert settings.strict_append_reads is False

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """Test settings are read from VIBECHECK_STORE_* variables."""
        monkeypatch.setenv("VIBECHECK_STORE_DOCUMENTS_DIR", str(tmp_path))
        monkeypatch.setenv("VIBECHECK_STORE_FILE_NAME", "ledger.txt")
        monkeypatch.setenv("VIBECHECK_STORE_STRICT_APPEND_READS", "true")
        settings = StoreSettings()
        assert settings.file_path == tmp_path / "MyAccounting" / "ledger.txt"
        assert settings.strict_append_reads is True

    @pytest.mark.parametrize("name", ["..", "a/b", "a\\b", ""])
    def test_names_must_be_plain(self, name):
        with pytest.raises(ValidationError):
            StoreSettings(file_name=name)

    def test_retry_attempts_bounds(self):
        with pytest.raises(ValidationError):
            StoreSettings(replace_retry_attempts=0)


class TestLoggingSettings:
    """Tests for logging settings."""

    def test_level_is_normalized(self):
        assert LoggingSettings(level=" debug ").level == "DEBUG"

    def test_unknown_level_rejected(self):
        with pytest.raises(ValidationError):
            LoggingSettings(level="CHATTY")

    def test_console_output_from_environment(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_LOG_JSON_OUTPUT", "false")
        assert LoggingSettings().json_output is False


class TestSettingsContainer:
    """Tests for the root settings container."""

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()

    def test_validate_all_settings(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_LOG_LEVEL", "INFO")
        results = validate_all_settings()
        assert results["store"] is True
        assert results["logging"] is True
        assert results["app"] is True

    def test_validate_all_settings_reports_errors(self, monkeypatch):
        monkeypatch.setenv("VIBECHECK_LOG_LEVEL", "CHATTY")
        results = validate_all_settings()
        assert results["logging"] is False
        assert "logging_error" in results


class TestAppComponents:
    """Tests for the application factory."""

    @pytest.mark.asyncio
    async def test_components_share_one_store(self, monkeypatch, tmp_path):
        """Test the factory wires one store, its notifier and analytics."""
        monkeypatch.setenv("VIBECHECK_STORE_DOCUMENTS_DIR", str(tmp_path))
        monkeypatch.setenv("VIBECHECK_LOG_JSON_OUTPUT", "false")

        storage, analytics, notifier = create_app_components(Settings())

        assert isinstance(storage, TextFileRecordStorage)
        assert isinstance(analytics, RecordAnalytics)
        assert isinstance(notifier, RecordsChangedNotifier)
        assert storage.notifier is notifier
        assert storage.file_path == tmp_path / "MyAccounting" / "accounting_records.txt"

        calls = []
        notifier.subscribe(lambda: calls.append("changed"))
        await storage.reset()
        await notifier.drain()
        assert calls == ["changed"]
        assert await analytics.recent() == []

    @pytest.mark.asyncio
    async def test_recent_records_limit_reaches_analytics(self, monkeypatch, tmp_path):
        """Test RECENT_RECORDS_LIMIT sets how many recent records are shown."""
        monkeypatch.setenv("VIBECHECK_STORE_DOCUMENTS_DIR", str(tmp_path))
        monkeypatch.setenv("VIBECHECK_LOG_JSON_OUTPUT", "false")
        monkeypatch.setenv("RECENT_RECORDS_LIMIT", "2")

        storage, analytics, _ = create_app_components(Settings())
        for note in ("a", "b", "c"):
            await storage.append(datetime(2024, 1, 1, 10), RecordKind.EXPENSE, Decimal("1"), note, "🥳")

        assert [r.note for r in await analytics.recent()] == ["c", "b"]
        assert len(await analytics.recent(3)) == 3
