# =============================================================================
# substock_core/errors/__init__.py
# Centralized Error Handling for SubStock RH
# =============================================================================

from .exceptions import (
    SubStockError,
    DataIngestionError,
    StoreError,
    RequisitionError,
    ConfigurationError,
)

from .handlers import (
    handle_error,
    safe_execute,
    ErrorContext,
    error_boundary,
)

__all__ = [
    # Exceptions
    "SubStockError",
    "DataIngestionError",
    "StoreError",
    "RequisitionError",
    "ConfigurationError",
    # Handlers
    "handle_error",
    "safe_execute",
    "ErrorContext",
    "error_boundary",
]
