"""
Row validation and import preview.

Validation never raises: violations are collected as strings so staff can
see every problem with a row at once.
"""

import re
from typing import Sequence

from services.enums import TargetField
from services.migration.models import ColumnMapping, Preview, Row, ValidatedRow

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PHONE_PATTERN = re.compile(r'^[+]?[\d\s\-().]{7,20}$', re.ASCII)

DEFAULT_SAMPLE_SIZE = 5


def validate_row(row: Row, columns: Sequence[ColumnMapping]) -> ValidatedRow:
    """
    Check one row against the active column mapping.

    Required columns must be non-blank. Blank optional columns are always
    fine. Non-blank email and phone values must look like an email address
    and a phone number. Every mapping is checked, so a row can collect
    several violations.
    """
    errors = []

    for column in columns:
        value = (row.get(column.source) or '').strip()

        if not value:
            if column.required:
                errors.append(f"{column.target.value} is required")
            continue

        if column.target == TargetField.EMAIL and not EMAIL_PATTERN.match(value):
            errors.append('Invalid email format')

        if column.target == TargetField.PHONE and not PHONE_PATTERN.match(value):
            errors.append('Invalid phone format')

    return ValidatedRow(data=row, valid=not errors, errors=tuple(errors))


def generate_preview(rows: Sequence[Row], columns: Sequence[ColumnMapping],
                     sample_size: int = DEFAULT_SAMPLE_SIZE) -> Preview:
    """
    Validate every row and summarise the result.

    Counts cover all rows; the sample is the first ``sample_size`` validated
    rows in file order, valid or not.
    """
    validated = [validate_row(row, columns) for row in rows]
    valid_rows = sum(1 for row in validated if row.valid)

    return Preview(
        total_rows=len(validated),
        valid_rows=valid_rows,
        invalid_rows=len(validated) - valid_rows,
        columns=tuple(columns),
        sample_rows=tuple(validated[:sample_size]),
    )
