# =============================================================================
# substock_core/data/ledger_service.py
# Supabase Service for the Drug Transaction Ledger
# =============================================================================
"""
Ledger Service for Supabase Integration

Reads and writes drug movements stored in Supabase.
Table: transactions

Schema:
    - id: UUID (auto-generated)
    - dispno: text (document / dispense number)
    - date: date (YYYY-MM-DD)
    - department: text
    - code: text (drug code)
    - name: text
    - amount: numeric (positive = received, negative = dispensed)
    - pack: text
    - price: numeric
    - lot_no: text
    - barcode: text
    - exp_date: text
    - timestamp: bigint (epoch ms)
    - type: text ('IN' / 'OUT')
"""

from __future__ import annotations
from typing import Iterable, List, Optional

import pandas as pd

from substock_core.config import SubStockConfig
from substock_core.inventory import LedgerRecord
from substock_core.logging import get_logger

from .supabase_client import SupabaseService

logger = get_logger(__name__)

TEXT_COLUMNS = ["dispno", "date", "department", "code", "name", "pack", "lot_no", "barcode", "exp_date", "type"]
NUMERIC_COLUMNS = ["amount", "price", "timestamp"]

# Upload time, then insertion sequence; every row of one upload shares a timestamp
LEDGER_ORDER = ("timestamp", "seq")


def clean_ledger_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Clean and format raw transaction rows.

    Numeric columns are coerced with missing values as 0; text columns are
    stripped with missing values left blank for LedgerRecord.from_dict to
    default.
    """
    if df.empty:
        return df

    df = df.copy()

    for col in NUMERIC_COLUMNS:
        if col in df.columns:
            df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0)
        else:
            df[col] = 0

    for col in TEXT_COLUMNS:
        if col in df.columns:
            df[col] = df[col].fillna("").astype(str).str.strip()
        else:
            df[col] = ""

    # Dates arrive as timestamps from some imports; keep the ISO day only
    df["date"] = df["date"].str.slice(0, 10)

    return df


class LedgerService:
    """
    Service class for ledger data operations.
    """

    def __init__(self, config: Optional[SubStockConfig] = None, client=None):
        config = config or SubStockConfig()
        self.store = SupabaseService(config.transactions_table, client=client)

    def fetch_records(self) -> List[LedgerRecord]:
        """Fetch the whole ledger as sanitised records."""
        rows = self.store.fetch_all(order_by=LEDGER_ORDER)
        if not rows:
            return []

        df = clean_ledger_frame(pd.DataFrame(rows))
        records = [LedgerRecord.from_dict(row) for row in df.to_dict(orient="records")]
        logger.info(f"Fetched {len(records)} ledger records")
        return records

    def push_records(self, records: Iterable[LedgerRecord]) -> int:
        """
        Insert new movements.

        Returns:
            Number of rows written
        """
        rows = [record.to_dict() for record in records]
        if not rows:
            return 0
        self.store.insert_many(rows)
        logger.info(f"Inserted {len(rows)} ledger records")
        return len(rows)

    def delete_record(self, record_id: str) -> None:
        self.store.delete({"id": record_id})
        logger.info(f"Deleted ledger record {record_id}")
