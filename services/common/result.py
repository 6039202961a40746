"""
Result Pattern Implementation
Lets services report success or an expected failure without raising
"""

from typing import TypeVar, Generic, Optional, Any, Dict
from dataclasses import dataclass

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """
    A generic Result class for service method returns.

    Encapsulates either a successful result with data or a failure with error
    information. Request-shape problems (empty CSV, missing column mapping)
    come back as failures; unexpected exceptions still propagate.

    Examples:
        result = migration_service.upload(csv_text)
        if result.is_success:
            preview = result.data

        result = Result.failure("CSV content is required", code="BAD_REQUEST")
        if result.is_failure:
            return jsonify(result.error_payload()), 400
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            data: The successful result data
            metadata: Optional metadata about the operation

        Returns:
            A Result instance representing success
        """
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def failure(cls,
                error: str,
                code: Optional[str] = None,
                metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            error: Error message describing the failure
            code: Optional error code for programmatic handling
            metadata: Optional metadata about the failure

        Returns:
            A Result instance representing failure
        """
        return cls(success=False, error=error, error_code=code, metadata=metadata)

    @property
    def is_success(self) -> bool:
        """Check if the result represents a success."""
        return self.success

    @property
    def is_failure(self) -> bool:
        """Check if the result represents a failure."""
        return not self.success

    def error_payload(self) -> Dict[str, Any]:
        """JSON error body for a failure: {"error": {"code", "message"}}."""
        payload = {'code': self.error_code or 'ERROR', 'message': self.error}
        if self.metadata:
            payload['details'] = self.metadata
        return {'error': payload}

    def __repr__(self) -> str:
        """String representation of the Result."""
        if self.is_success:
            return f"Result.success(data={self.data!r})"
        return f"Result.failure(error={self.error!r}, code={self.error_code!r})"
