"""
Tests for the Result returned by MigrationService
"""

from services.common.result import Result


class TestResultPattern:
    """Success and failure construction"""

    def test_success_carries_preview_data(self):
        result = Result.success({"totalRows": 2})

        assert result.is_success is True
        assert result.is_failure is False
        assert result.data == {"totalRows": 2}
        assert result.error is None
        assert result.error_code is None

    def test_failure_carries_code(self):
        result = Result.failure("columns array is required", code="BAD_REQUEST")

        assert result.is_failure is True
        assert result.data is None
        assert result.error == "columns array is required"
        assert result.error_code == "BAD_REQUEST"

    def test_repr_names_the_outcome(self):
        assert repr(Result.success(3)) == "Result.success(data=3)"
        assert repr(Result.failure("bad", code="BAD_REQUEST")) == \
            "Result.failure(error='bad', code='BAD_REQUEST')"


class TestErrorPayload:
    """JSON error body built from failures"""

    def test_bad_request_payload(self):
        result = Result.failure("CSV content is required", code="BAD_REQUEST")

        assert result.error_payload() == {
            "error": {"code": "BAD_REQUEST", "message": "CSV content is required"}
        }

    def test_payload_without_code_uses_generic_code(self):
        result = Result.failure("Something broke")

        assert result.error_payload()["error"]["code"] == "ERROR"

    def test_payload_includes_metadata_as_details(self):
        result = Result.failure("Bad column", code="BAD_REQUEST", metadata={"index": 2})

        assert result.error_payload()["error"]["details"] == {"index": 2}
