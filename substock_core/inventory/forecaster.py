# =============================================================================
# substock_core/inventory/forecaster.py
# Weekly usage rate and suggested reorder quantities
# =============================================================================
"""
Requisition forecast.

The weekly rate divides the whole dispensed history of a lot by a fixed
four-week window; the ledger is not filtered by date. Suggestions are only
produced for lines at or below their minimum stock.
"""

from __future__ import annotations
import math
from dataclasses import asdict
from typing import Iterable, List

from substock_core.config import LOOKBACK_WEEKS
from .models import InventoryItem, RequisitionItem


def weekly_rate(total_out: float) -> float:
    return abs(total_out) / LOOKBACK_WEEKS


def suggested_base(rate: float, multiplier: float) -> int:
    return math.ceil(rate * multiplier)


def needs_order(item: InventoryItem) -> bool:
    # Same predicate as LOW/EMPTY in classify_stock
    return item.balance <= item.min_stock


def suggest_quantity(item: InventoryItem, rate: float, multiplier: float) -> int:
    if not needs_order(item):
        return 0
    # Fractional balances round the shortfall up to whole units
    return math.ceil(max(0, suggested_base(rate, multiplier) - item.balance))


def forecast_item(item: InventoryItem) -> RequisitionItem:
    rate = weekly_rate(item.total_out)
    return RequisitionItem(
        **asdict(item),
        usage_rate_per_week=round(rate, 2),
        suggested_1_2=suggest_quantity(item, rate, 1.2),
        suggested_1_5=suggest_quantity(item, rate, 1.5),
        manual_order=0,
        is_selected=needs_order(item),
    )


def build_requisition(inventory: Iterable[InventoryItem]) -> List[RequisitionItem]:
    """One draft line per inventory entry, in inventory order."""
    return [forecast_item(item) for item in inventory]
