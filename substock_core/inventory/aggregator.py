# =============================================================================
# substock_core/inventory/aggregator.py
# Fold the transaction ledger into per-lot inventory state
# =============================================================================

from __future__ import annotations
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from .classifier import classify_item
from .models import ConfigSnapshot, InventoryItem, LedgerRecord


def aggregate_ledger(
    records: Iterable[LedgerRecord],
    config: ConfigSnapshot,
) -> List[InventoryItem]:
    """
    Group records by (code, lot) and accumulate their movements.

    The first record seen for a key supplies name, pack, price and expiry;
    later records in the group only add to the totals. Entries come back in
    ledger discovery order.
    """
    entries: Dict[Tuple[str, str], InventoryItem] = {}

    for record in records:
        key = (record.code, record.lot_no)
        item = entries.get(key)
        if item is None:
            item = InventoryItem(
                code=record.code,
                name=record.name,
                pack=record.pack,
                lot_no=record.lot_no,
                exp_date=record.exp_date,
                price=record.price,
                min_stock=config.min_stock_for(record.code),
                cabinet=config.cabinet_for(record.code),
            )
            entries[key] = item

        if record.amount > 0:
            item.total_in += record.amount
        else:
            item.total_out += record.amount
        item.balance = item.total_in + item.total_out

        # ISO dates compare chronologically as strings
        if record.date > item.last_update:
            item.last_update = record.date

    return list(entries.values())


def compute_inventory(
    records: Iterable[LedgerRecord],
    config: ConfigSnapshot,
    now: Optional[datetime] = None,
) -> List[InventoryItem]:
    """Full recompute: aggregate the ledger, then classify every entry."""
    now = now or datetime.now()
    return [classify_item(item, now) for item in aggregate_ledger(records, config)]
