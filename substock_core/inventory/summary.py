# =============================================================================
# substock_core/inventory/summary.py
# Dashboard figures and list filtering over derived inventory
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from substock_core.config import DEFAULT_CABINET
from .models import ExpiryStatus, InventoryItem, StockStatus

ALL_CABINETS = "ALL"


@dataclass
class InventorySummary:
    """Container for the dashboard KPI cards and charts."""

    total_items: int = 0
    total_value: float = 0.0
    low_count: int = 0
    empty_count: int = 0
    near_expiry_count: int = 0
    expired_count: int = 0

    status_counts: Dict[str, int] = field(default_factory=dict)
    value_by_cabinet: Dict[str, float] = field(default_factory=dict)


def summarize_inventory(items: Sequence[InventoryItem]) -> InventorySummary:
    status_counts = {status.value: 0 for status in StockStatus}
    value_by_cabinet: Dict[str, float] = {}

    for item in items:
        status_counts[item.status.value] += 1
        cabinet = item.cabinet or DEFAULT_CABINET
        value_by_cabinet[cabinet] = value_by_cabinet.get(cabinet, 0.0) + item.stock_value

    return InventorySummary(
        total_items=len(items),
        total_value=sum(item.stock_value for item in items),
        low_count=status_counts[StockStatus.LOW.value],
        empty_count=status_counts[StockStatus.EMPTY.value],
        near_expiry_count=sum(1 for i in items if i.exp_status == ExpiryStatus.NEAR),
        expired_count=sum(1 for i in items if i.exp_status == ExpiryStatus.EXPIRED),
        status_counts=status_counts,
        value_by_cabinet=value_by_cabinet,
    )


def filter_inventory(
    items: Iterable[InventoryItem],
    search: str = "",
    cabinet: str = ALL_CABINETS,
) -> List[InventoryItem]:
    """Case-insensitive match on name or code, optionally within one cabinet."""
    needle = (search or "").strip().lower()
    return [
        item for item in items
        if (needle in item.name.lower() or needle in item.code.lower())
        and (cabinet == ALL_CABINETS or item.cabinet == cabinet)
    ]


def drug_choices(items: Iterable[InventoryItem]) -> List[Tuple[str, str]]:
    """Unique (code, name) pairs sorted by name, first-seen name per code."""
    names: Dict[str, str] = {}
    for item in items:
        names.setdefault(item.code, item.name)
    return sorted(names.items(), key=lambda pair: pair[1].lower())
