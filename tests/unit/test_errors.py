# =============================================================================
# tests/unit/test_errors.py
# Unit Tests for the error hierarchy and handlers
# =============================================================================

import pytest

from substock_core.errors import (
    DataIngestionError,
    ErrorContext,
    RequisitionError,
    StoreError,
    SubStockError,
    error_boundary,
    safe_execute,
)


class TestExceptions:

    def test_codes_and_details(self):
        error = StoreError("Could not read", table="transactions", operation="read")

        assert isinstance(error, SubStockError)
        assert error.to_dict() == {
            "error_type": "StoreError",
            "code": "STORE_001",
            "message": "Could not read",
            "details": {"table": "transactions", "operation": "read"},
            "recoverable": True,
        }

    def test_str_includes_code(self):
        assert str(DataIngestionError("bad file")).startswith("[DATA_002] bad file")

    def test_requisition_details(self):
        error = RequisitionError("nope", doc_id="REQ-20240101-001", multiplier=2)
        assert error.details == {"doc_id": "REQ-20240101-001", "multiplier": 2}


class TestHandlers:

    def test_safe_execute_returns_default_on_error(self):
        def fail():
            raise StoreError("down")

        assert safe_execute(fail, default=False) is False
        assert safe_execute(lambda x: x * 2, 4) == 8

    def test_safe_execute_reraise(self):
        with pytest.raises(ValueError):
            safe_execute(int, "x", reraise=True)

    def test_error_context_suppresses_and_flags(self):
        with ErrorContext("Deleting row") as op:
            raise StoreError("rejected")
        assert op.failed

    def test_error_context_success(self):
        with ErrorContext("Nothing to do") as op:
            pass
        assert not op.failed

    def test_error_context_non_recoverable_propagates(self):
        with pytest.raises(RuntimeError):
            with ErrorContext("Critical", recoverable=False):
                raise RuntimeError("boom")

    def test_error_boundary(self):
        @error_boundary(default_return="fallback")
        def render():
            raise KeyError("missing")

        assert render() == "fallback"
