# =============================================================================
# substock_core/services/inventory_service.py
# Inventory Service - derived stock state for the dashboard pages
# =============================================================================

from __future__ import annotations
from typing import List, Sequence

import pandas as pd

from substock_core.inventory import (
    InventoryItem,
    summarize_inventory,
)
from .base_service import BaseService

INVENTORY_COLUMNS = {
    "code": "Code",
    "name": "Name",
    "cabinet": "Cabinet",
    "min_stock": "Min",
    "lot_no": "Lot",
    "exp_date": "Expiry",
    "days_to_expire": "Days Left",
    "balance": "Balance",
    "status": "Status",
    "exp_status": "Expiry Status",
}


class InventoryService(BaseService):
    """
    Service for derived inventory operations.

    Usage:
        service = InventoryService()
        summary = service.summarize(live.inventory)
        frame = service.to_frame(live.inventory)
    """

    def summarize(self, items: Sequence[InventoryItem]):
        return summarize_inventory(items)

    @staticmethod
    def to_frame(items: List[InventoryItem]) -> pd.DataFrame:
        """Display frame for the inventory table."""
        if not items:
            return pd.DataFrame(columns=list(INVENTORY_COLUMNS.values()))
        df = pd.DataFrame([item.to_dict() for item in items])
        return df[list(INVENTORY_COLUMNS)].rename(columns=INVENTORY_COLUMNS)
