# =============================================================================
# substock_core/services/__init__.py
# Service Layer for SubStock RH
# Separates business logic from UI presentation
# =============================================================================
"""
Service Layer for SubStock RH

Usage Example:
-------------
    from substock_core.inventory import compute_inventory
    from substock_core.services import InventoryService, RequisitionService

    inventory = compute_inventory(records, config)
    summary = InventoryService().summarize(inventory)

    requisitions = RequisitionService()
    editor = requisitions.start_session(inventory).data
    editor.apply_suggestion(1.5)
    result = requisitions.finalize(editor, "Nurse A")
    if result.success:
        print(result.data.doc_id)
"""

from .base_service import BaseService, ServiceResult
from .inventory_service import InventoryService
from .requisition_service import RequisitionService
from .ledger_import_service import LedgerImportService

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Inventory
    "InventoryService",
    "RequisitionService",
    "LedgerImportService",
]
