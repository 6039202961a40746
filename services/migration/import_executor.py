"""
Import Executor - create-or-skip of members from validated CSV rows
"""

import logging
from typing import Optional, Sequence

from logging_config import ImportAuditLogger, import_audit_logger
from repositories.membership_repository import MembershipRepository
from repositories.user_repository import UserRepository
from services.enums import RowOutcome, TargetField
from services.migration.models import (
    ColumnMapping, ImportResult, ImportRowError, Row, find_column
)
from utils.datetime_utils import utc_now, duration_ms

logger = logging.getLogger(__name__)

DEFAULT_ERROR_LIMIT = 50


class MissingEmailMappingError(ValueError):
    """Raised when an import is requested without an email column mapping"""
    pass


class ImportExecutor:
    """
    Imports rows as studio members.

    Each row is its own unit of work: it is committed on success and rolled
    back on failure, so one bad row never blocks the rest of the batch.
    Re-running the same file only produces skips because existing accounts
    and memberships are looked up before anything is inserted.
    """

    def __init__(self,
                 user_repository: UserRepository,
                 membership_repository: MembershipRepository,
                 error_limit: int = DEFAULT_ERROR_LIMIT,
                 audit_logger: Optional[ImportAuditLogger] = None):
        """
        Initialize the executor with its stores.

        Args:
            user_repository: Identity store (lookup and create by email)
            membership_repository: Membership store, also owns the transaction
            error_limit: Maximum number of row errors kept in the result
            audit_logger: Structured audit logger for import events
        """
        self.user_repository = user_repository
        self.membership_repository = membership_repository
        self.error_limit = error_limit
        self.audit_logger = audit_logger or import_audit_logger

    def execute(self, rows: Sequence[Row], columns: Sequence[ColumnMapping],
                studio_id: str) -> ImportResult:
        """
        Import every row, strictly in order.

        Args:
            rows: Parsed CSV rows
            columns: Active column mapping (must contain an email mapping)
            studio_id: Studio the members are imported into

        Returns:
            ImportResult with created/skipped/failed counts

        Raises:
            MissingEmailMappingError: If no column is mapped to email
        """
        email_column = find_column(columns, TargetField.EMAIL)
        if email_column is None:
            raise MissingEmailMappingError('Email column mapping is required')

        name_column = find_column(columns, TargetField.NAME)
        last_name_column = find_column(columns, TargetField.LAST_NAME)
        phone_column = find_column(columns, TargetField.PHONE)

        started_at = utc_now()
        result = ImportResult(total_processed=len(rows))
        self.audit_logger.log_import_started(
            studio_id, len(rows), [column.target.value for column in columns]
        )

        for index, row in enumerate(rows, start=1):
            email = _cell(row, email_column).lower()
            if not email:
                self._record_failure(result, studio_id, index, '', 'Missing email')
                continue

            try:
                outcome = self._import_row(
                    studio_id,
                    email=email,
                    name=_display_name(row, name_column, last_name_column),
                    phone=_cell(row, phone_column) or None,
                )
                self.membership_repository.commit()
            except Exception as e:
                self._rollback_row(index)
                self._record_failure(result, studio_id, index, email, str(e) or e.__class__.__name__)
                continue

            if outcome == RowOutcome.CREATED:
                result.created += 1
            else:
                result.skipped += 1

        self.audit_logger.log_import_completed(
            studio_id, result.created, result.skipped, result.failed, duration_ms(started_at)
        )
        return result

    def _import_row(self, studio_id: str, email: str, name: str, phone: Optional[str]) -> RowOutcome:
        """Reuse or create the account, then create the membership unless it exists."""
        user = self.user_repository.find_by_email(email)
        if user is None:
            user = self.user_repository.create_identity(
                email=email,
                name=name or email.split('@')[0],
                phone=phone,
            )
        else:
            logger.debug(f"Reusing existing account {user.id} for {email}")

        if self.membership_repository.find_membership(user.id, studio_id) is not None:
            return RowOutcome.SKIPPED

        self.membership_repository.create_membership(user.id, studio_id)
        return RowOutcome.CREATED

    def _rollback_row(self, row: int) -> None:
        # A failed rollback must not stop the remaining rows
        try:
            self.membership_repository.rollback()
        except Exception as e:
            logger.error(f"Rollback after row {row} failed: {e}")

    def _record_failure(self, result: ImportResult, studio_id: str, row: int, email: str, error: str) -> None:
        result.failed += 1
        if len(result.errors) < self.error_limit:
            result.errors.append(ImportRowError(row=row, email=email, error=error))
        self.audit_logger.log_row_failed(studio_id, row, email, error)


def _cell(row: Row, column: Optional[ColumnMapping]) -> str:
    if column is None:
        return ''
    return (row.get(column.source) or '').strip()


def _display_name(row: Row, name_column: Optional[ColumnMapping],
                  last_name_column: Optional[ColumnMapping]) -> str:
    # A last name alone is acceptable; "name is required" is the validator's job
    name = _cell(row, name_column)
    last_name = _cell(row, last_name_column)
    if last_name:
        return f"{name} {last_name}" if name else last_name
    return name
