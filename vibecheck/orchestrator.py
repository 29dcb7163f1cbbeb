"""
Application Wiring for VibeCheck

The entry point builds exactly one record store and passes it to every
collaborator that needs it (analytics, UI screens). There is no module
level singleton: whoever holds the store got it from here.
"""

from typing import Optional

from vibecheck.audit import AuditLogger, configure_logging
from vibecheck.config import Settings, get_settings
from vibecheck.queries import RecordAnalytics
from vibecheck.services.storage import (
    RecordsChangedNotifier,
    TextFileRecordStorage,
)


def create_app_components(
    settings: Optional[Settings] = None,
) -> tuple[TextFileRecordStorage, RecordAnalytics, RecordsChangedNotifier]:
    """
    Factory function to create all application components.

    Args:
        settings: Settings to build from. Defaults to the cached
                  environment settings.

    Returns:
        (storage, analytics, notifier)

    UI collaborators subscribe to the notifier to refresh their views
    after appends and resets.
    """
    settings = settings or get_settings()

    configure_logging(settings.logging)

    notifier = RecordsChangedNotifier()
    storage = TextFileRecordStorage(
        settings=settings.store,
        notifier=notifier,
        audit_logger=AuditLogger(),
    )
    analytics = RecordAnalytics(
        storage,
        recent_limit=settings.app.recent_records_limit,
    )

    return storage, analytics, notifier
