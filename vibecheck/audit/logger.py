"""
Audit Logger

Every mutation of the records file and every storage failure is logged
as a structured event, so the history of what happened to the ledger can
be reconstructed from the logs.

The audit logger never raises and never logs note text or file paths;
events carry kinds, amounts, counts and error descriptions only.
"""

import logging
import sys
from typing import Optional

import structlog

from vibecheck.config import LoggingSettings, get_settings


def describe_error(error: BaseException) -> str:
    """Error text without the file name an OSError would include."""
    if isinstance(error, OSError) and error.strerror:
        return f"{error.strerror} (errno {error.errno})"
    return str(error)


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Call once from the application entry point.
    """
    settings = settings or get_settings().logging

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.level),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """Structured log of record store activity."""

    def __init__(self, logger_name: str = "vibecheck.audit"):
        self._logger = structlog.get_logger(logger_name)

    def log_file_created(self) -> None:
        self._logger.info("records_file_created")

    def log_record_appended(
        self,
        kind: str,
        amount: str,
        mood_tag: str,
    ) -> None:
        self._logger.info(
            "record_appended",
            kind=kind,
            amount=amount,
            mood_tag=mood_tag,
        )

    def log_records_reset(self) -> None:
        self._logger.info("records_reset")

    def log_records_read(
        self,
        operation: str,
        returned: int,
        skipped: int,
        limit: Optional[int] = None,
    ) -> None:
        """Log a read; ``skipped`` counts malformed lines that were dropped."""
        log = self._logger.warning if skipped else self._logger.debug
        log(
            "records_read",
            operation=operation,
            returned=returned,
            skipped=skipped,
            limit=limit,
        )

    def log_append_read_fallback(self, error: BaseException) -> None:
        """The existing file could not be read and was treated as empty."""
        self._logger.warning(
            "append_read_fallback",
            error_type=type(error).__name__,
            error=describe_error(error),
        )

    def log_storage_error(
        self,
        operation: str,
        error: BaseException,
    ) -> None:
        self._logger.error(
            "storage_operation_failed",
            operation=operation,
            error_type=type(error).__name__,
            error=describe_error(error),
        )
