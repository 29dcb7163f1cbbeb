"""Audit logging package."""

from vibecheck.audit.logger import AuditLogger, configure_logging

__all__ = ["AuditLogger", "configure_logging"]
