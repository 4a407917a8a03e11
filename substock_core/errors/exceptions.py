# =============================================================================
# substock_core/errors/exceptions.py
# Custom Exception Hierarchy for SubStock RH
# =============================================================================

from typing import Optional, Dict, Any


class SubStockError(Exception):
    """
    Base exception for all SubStock RH errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code (e.g., "DATA_002")
        details: Additional context as a dictionary
        recoverable: Whether the error can be recovered from
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        recoverable: bool = True,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "SS_000"
        self.details = details or {}
        self.recoverable = recoverable

    def __str__(self) -> str:
        base = f"[{self.code}] {self.message}"
        if self.details:
            base += f" | Details: {self.details}"
        return base

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "recoverable": self.recoverable,
        }


# =============================================================================
# DATA LAYER EXCEPTIONS
# =============================================================================

class DataIngestionError(SubStockError):
    """Raised when a CSV upload cannot be read"""

    def __init__(
        self,
        message: str,
        source: Optional[str] = None,
        file_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if source:
            details["source"] = source
        if file_type:
            details["file_type"] = file_type

        super().__init__(
            message=message,
            code="DATA_002",
            details=details,
            **kwargs,
        )


class StoreError(SubStockError):
    """Raised when the realtime store rejects a read or write"""

    def __init__(
        self,
        message: str,
        table: Optional[str] = None,
        operation: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if table:
            details["table"] = table
        if operation:
            details["operation"] = operation

        super().__init__(
            message=message,
            code="STORE_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# REQUISITION EXCEPTIONS
# =============================================================================

class RequisitionError(SubStockError):
    """Raised on invalid use of a requisition session"""

    def __init__(
        self,
        message: str,
        doc_id: Optional[str] = None,
        multiplier: Optional[Any] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if doc_id:
            details["doc_id"] = doc_id
        if multiplier is not None:
            details["multiplier"] = multiplier

        super().__init__(
            message=message,
            code="REQ_001",
            details=details,
            **kwargs,
        )


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(SubStockError):
    """Raised when configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        expected_type: Optional[str] = None,
        **kwargs,
    ):
        details = kwargs.pop("details", {})
        if config_key:
            details["config_key"] = config_key
        if expected_type:
            details["expected_type"] = expected_type

        super().__init__(
            message=message,
            code="CONFIG_001",
            details=details,
            recoverable=False,
            **kwargs,
        )
