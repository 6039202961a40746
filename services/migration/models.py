"""
Value types shared by the member migration pipeline.

Everything here is immutable once built. ``to_dict`` produces the camelCase
JSON shape the dashboard consumes.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from services.enums import TargetField

# One parsed CSV data line: source column name -> raw string value
Row = Mapping[str, str]


def freeze_row(values: Dict[str, str]) -> Row:
    """Wrap a freshly parsed row so later stages cannot mutate it."""
    return MappingProxyType(values)


class InvalidColumnMappingError(ValueError):
    """Raised when a caller-supplied column mapping entry cannot be used"""
    pass


@dataclass(frozen=True)
class ColumnMapping:
    """Binding of one source CSV column to one target field"""
    source: str
    target: TargetField
    required: bool = False

    @classmethod
    def from_dict(cls, payload: Any) -> 'ColumnMapping':
        """
        Build a mapping from its JSON form.

        Args:
            payload: {"source": str, "target": str, "required": bool}

        Raises:
            InvalidColumnMappingError: If the entry is malformed or the
                target is not a known field
        """
        if not isinstance(payload, dict):
            raise InvalidColumnMappingError('Each column mapping must be an object')

        source = payload.get('source')
        if not isinstance(source, str) or not source:
            raise InvalidColumnMappingError('Column mapping source must be a non-empty string')

        target = payload.get('target')
        try:
            target_field = TargetField(target)
        except ValueError:
            raise InvalidColumnMappingError(f"Unknown target field: {target}")

        return cls(source=source, target=target_field, required=bool(payload.get('required', False)))

    def to_dict(self) -> Dict[str, Any]:
        return {'source': self.source, 'target': self.target.value, 'required': self.required}


def find_column(columns: Sequence[ColumnMapping], target: TargetField) -> Optional[ColumnMapping]:
    """First mapping bound to ``target``, or None."""
    return next((column for column in columns if column.target == target), None)


@dataclass(frozen=True)
class ValidatedRow:
    """A row plus its validity and the violations found"""
    data: Row
    valid: bool
    errors: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {'data': dict(self.data), 'valid': self.valid, 'errors': list(self.errors)}


@dataclass(frozen=True)
class Preview:
    """Validity summary plus an ordered sample, shown before committing an import"""
    total_rows: int
    valid_rows: int
    invalid_rows: int
    columns: Tuple[ColumnMapping, ...]
    sample_rows: Tuple[ValidatedRow, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalRows': self.total_rows,
            'validRows': self.valid_rows,
            'invalidRows': self.invalid_rows,
            'columns': [column.to_dict() for column in self.columns],
            'sampleRows': [row.to_dict() for row in self.sample_rows],
        }


@dataclass(frozen=True)
class ImportRowError:
    """One failed row of an import run (row is 1-based)"""
    row: int
    email: str
    error: str

    def to_dict(self) -> Dict[str, Any]:
        return {'row': self.row, 'email': self.email, 'error': self.error}


@dataclass
class ImportResult:
    """Totals of one executor run; errors holds at most the configured cap"""
    total_processed: int = 0
    created: int = 0
    skipped: int = 0
    failed: int = 0
    errors: List[ImportRowError] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalProcessed': self.total_processed,
            'created': self.created,
            'skipped': self.skipped,
            'failed': self.failed,
            'errors': [error.to_dict() for error in self.errors],
        }
