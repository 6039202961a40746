"""
Migration Service - CSV member migration for studios
Ties parsing, column detection, validation and the import executor together
"""

import logging
from typing import Any, Dict, List, Optional

from services.common.result import Result
from services.migration.column_mapper import ColumnMapper
from services.migration.csv_parser import parse_csv
from services.migration.import_executor import ImportExecutor, MissingEmailMappingError
from services.migration.models import (
    ColumnMapping, ImportResult, InvalidColumnMappingError, Preview
)
from services.migration.row_validator import DEFAULT_SAMPLE_SIZE, generate_preview

logger = logging.getLogger(__name__)

BAD_REQUEST = 'BAD_REQUEST'


class MigrationService:
    """
    Request-level entry points for the member migration tool.

    Request-shape problems come back as ``Result.failure`` with code
    BAD_REQUEST; per-row problems never fail the request.
    """

    def __init__(self,
                 column_mapper: ColumnMapper,
                 import_executor: ImportExecutor,
                 sample_size: int = DEFAULT_SAMPLE_SIZE):
        """
        Initialize Migration Service with its collaborators.

        Args:
            column_mapper: Mapper built from the configured rule table
            import_executor: Executor bound to the identity/membership stores
            sample_size: Number of rows shown in a preview sample
        """
        self.column_mapper = column_mapper
        self.import_executor = import_executor
        self.sample_size = sample_size

    def upload(self, csv_text: Optional[str]) -> Result[Preview]:
        """Parse a freshly uploaded CSV and preview it with auto-detected columns."""
        if not _has_content(csv_text):
            return Result.failure('CSV content is required', code=BAD_REQUEST)

        rows = parse_csv(csv_text)
        if not rows:
            return Result.failure('CSV must contain at least one data row', code=BAD_REQUEST)

        columns = self.column_mapper.auto_detect(list(rows[0].keys()))
        logger.info(f"Auto-detected {len(columns)} column(s) for {len(rows)} row(s)")
        return Result.success(generate_preview(rows, columns, self.sample_size))

    def preview(self, csv_text: Optional[str], columns_payload: Any) -> Result[Preview]:
        """Preview a CSV with a column mapping chosen by staff."""
        if not _has_content(csv_text):
            return Result.failure('CSV content is required', code=BAD_REQUEST)

        columns = self._parse_columns(columns_payload)
        if columns.is_failure:
            return columns

        rows = parse_csv(csv_text)
        if not rows:
            return Result.failure('CSV must contain at least one data row', code=BAD_REQUEST)

        return Result.success(generate_preview(rows, columns.data, self.sample_size))

    def execute(self, studio_id: str, csv_text: Optional[str], columns_payload: Any) -> Result[ImportResult]:
        """
        Import the CSV into a studio using the confirmed column mapping.

        Args:
            studio_id: Target studio
            csv_text: Raw CSV text
            columns_payload: JSON list of {source, target, required}

        Returns:
            Result wrapping the ImportResult, or a BAD_REQUEST failure
        """
        if not _has_content(csv_text):
            return Result.failure('CSV content is required', code=BAD_REQUEST)

        columns = self._parse_columns(columns_payload)
        if columns.is_failure:
            return columns

        rows = parse_csv(csv_text)
        try:
            result = self.import_executor.execute(rows, columns.data, studio_id)
        except MissingEmailMappingError as e:
            return Result.failure(str(e), code=BAD_REQUEST)

        logger.info(
            f"Studio {studio_id} import finished: {result.created} created, "
            f"{result.skipped} skipped, {result.failed} failed"
        )
        return Result.success(result)

    def get_status(self, studio_id: str) -> Result[Dict[str, Any]]:
        """Imports run inline with the request, so there is never a job in flight."""
        return Result.success({'status': 'idle', 'lastImport': None})

    def _parse_columns(self, columns_payload: Any) -> Result[List[ColumnMapping]]:
        if not isinstance(columns_payload, list):
            return Result.failure('columns array is required', code=BAD_REQUEST)

        try:
            return Result.success([ColumnMapping.from_dict(entry) for entry in columns_payload])
        except InvalidColumnMappingError as e:
            return Result.failure(str(e), code=BAD_REQUEST)


def _has_content(csv_text: Any) -> bool:
    return isinstance(csv_text, str) and bool(csv_text.strip())
