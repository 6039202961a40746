# logging_config.py

import logging
import structlog
import sys
from typing import Any, Dict
from flask import has_request_context, request, g


def add_request_context(logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add Flask request context to log entries"""
    if has_request_context():
        event_dict["request_id"] = getattr(g, 'request_id', None)
        event_dict["remote_addr"] = request.remote_addr
        event_dict["method"] = request.method
        event_dict["path"] = request.path
    return event_dict


def setup_logging(app_name: str = "studio-migration", log_level: str = "INFO") -> None:
    """
    Configure structured logging for production use

    Args:
        app_name: Application name for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_request_context,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    logging.getLogger(app_name).setLevel(level)

    # Reduce noise from third-party libraries
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """
    Get a structured logger instance

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog instance
    """
    return structlog.get_logger(name or __name__)


class ImportAuditLogger:
    """Audit trail for member migration runs"""

    def __init__(self):
        self.logger = get_logger("migration.audit")

    def log_import_started(self, studio_id: str, total_rows: int, mapped_targets: list):
        """Log the start of an executor run"""
        self.logger.info(
            "Member import started",
            studio_id=studio_id,
            total_rows=total_rows,
            mapped_targets=mapped_targets,
            event_type="import_started"
        )

    def log_row_failed(self, studio_id: str, row: int, email: str, error: str):
        """Log a single row that could not be imported"""
        self.logger.warning(
            "Member import row failed",
            studio_id=studio_id,
            row=row,
            email=email,
            error=error,
            event_type="import_row_failed"
        )

    def log_import_completed(self, studio_id: str, created: int, skipped: int, failed: int, duration_ms: float):
        """Log the totals of a finished executor run"""
        self.logger.info(
            "Member import completed",
            studio_id=studio_id,
            created=created,
            skipped=skipped,
            failed=failed,
            duration_ms=duration_ms,
            event_type="import_completed"
        )


# Global logger instance
import_audit_logger = ImportAuditLogger()
