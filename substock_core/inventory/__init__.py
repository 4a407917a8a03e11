# =============================================================================
# substock_core/inventory/__init__.py
# Inventory derivation pipeline: ledger -> lots -> requisition
# =============================================================================

from .models import (
    LedgerRecord,
    ConfigSnapshot,
    Requester,
    InventoryItem,
    RequisitionItem,
    MovementKind,
    StockStatus,
    ExpiryStatus,
)
from .aggregator import aggregate_ledger, compute_inventory
from .classifier import classify_stock, classify_expiry, classify_item, days_to_expire
from .forecaster import build_requisition, weekly_rate, needs_order
from .editor import (
    RequisitionEditor,
    RequisitionDocument,
    coerce_quantity,
    generate_document_id,
)
from .summary import (
    ALL_CABINETS,
    InventorySummary,
    summarize_inventory,
    filter_inventory,
    drug_choices,
)

__all__ = [
    # Data contracts
    "LedgerRecord",
    "ConfigSnapshot",
    "Requester",
    "InventoryItem",
    "RequisitionItem",
    "MovementKind",
    "StockStatus",
    "ExpiryStatus",
    # Derivation
    "aggregate_ledger",
    "compute_inventory",
    "classify_stock",
    "classify_expiry",
    "classify_item",
    "days_to_expire",
    # Requisition
    "build_requisition",
    "weekly_rate",
    "needs_order",
    "RequisitionEditor",
    "RequisitionDocument",
    "coerce_quantity",
    "generate_document_id",
    # Dashboard
    "ALL_CABINETS",
    "InventorySummary",
    "summarize_inventory",
    "filter_inventory",
    "drug_choices",
]
