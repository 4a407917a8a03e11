# =============================================================================
# substock_core/data/ingest.py
# CSV upload of receipts / dispensings into ledger records
# =============================================================================

from __future__ import annotations
import csv
import io
from datetime import datetime
from typing import Iterable, List, Optional, Union

import pandas as pd

from substock_core.errors import DataIngestionError
from substock_core.inventory import LedgerRecord, MovementKind
from substock_core.logging import get_logger

logger = get_logger(__name__)

# Positional layout of the hospital export (first line is a header)
CSV_COLUMNS = [
    "dispno", "date", "department", "code", "name", "amount",
    "pack", "price", "lot_no", "barcode", "exp_date",
]
MIN_FIELDS = 5

TEXT_DEFAULTS = {
    "dispno": "-",
    "department": "-",
    "code": "",
    "name": "Unknown",
    "pack": "1",
    "lot_no": "-",
    "barcode": "-",
    "exp_date": "-",
}

ENCODINGS = ("utf-8-sig", "cp874")


def decode_upload(data: Union[bytes, str]) -> str:
    """Decode uploaded bytes, trying UTF-8 then Thai Windows encoding."""
    if isinstance(data, str):
        return data
    for encoding in ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise DataIngestionError(
        "Could not decode the uploaded file",
        file_type="csv",
        details={"tried": list(ENCODINGS)},
    )


def _csv_frame(text: str) -> pd.DataFrame:
    rows = list(csv.reader(io.StringIO(text)))[1:]
    kept = [
        (row + [""] * len(CSV_COLUMNS))[:len(CSV_COLUMNS)]
        for row in rows
        if any(cell.strip() for cell in row) and len(row) >= MIN_FIELDS
    ]
    dropped = sum(1 for row in rows if any(c.strip() for c in row)) - len(kept)
    if dropped:
        logger.warning(f"Dropped {dropped} short CSV rows")
    return pd.DataFrame(kept, columns=CSV_COLUMNS, dtype=str)


def parse_ledger_csv(
    text: str,
    kind: MovementKind,
    now: Optional[datetime] = None,
) -> List[LedgerRecord]:
    """
    Turn an uploaded CSV into ledger records.

    Blank and short rows are dropped. The upload mode decides the sign of
    every amount: IN rows are stored positive, OUT rows negative.
    """
    now = now or datetime.now()
    df = _csv_frame(text)
    if df.empty:
        return []

    df = df.apply(lambda col: col.str.strip())
    for col, default in TEXT_DEFAULTS.items():
        df[col] = df[col].replace("", default)
    df["date"] = df["date"].replace("", now.date().isoformat())

    amounts = pd.to_numeric(df["amount"], errors="coerce").fillna(0).abs()
    df["amount"] = amounts if kind == MovementKind.IN else -amounts
    df["price"] = pd.to_numeric(df["price"], errors="coerce").fillna(0)

    timestamp = int(now.timestamp() * 1000)
    records = [
        LedgerRecord(
            code=row["code"],
            lot_no=row["lot_no"],
            amount=float(row["amount"]),
            date=row["date"],
            name=row["name"],
            pack=row["pack"],
            price=float(row["price"]),
            exp_date=row["exp_date"],
            dispno=row["dispno"],
            department=row["department"],
            barcode=row["barcode"],
            timestamp=timestamp,
            kind=kind,
        )
        for row in df.to_dict(orient="records")
    ]
    logger.info(f"Parsed {len(records)} {kind.value} rows from CSV")
    return records


def sort_transactions(records: Iterable[LedgerRecord]) -> List[LedgerRecord]:
    """Newest first, for the history table."""
    return sorted(records, key=lambda r: r.timestamp, reverse=True)


def records_to_frame(records: Iterable[LedgerRecord]) -> pd.DataFrame:
    """Display frame for the transaction history."""
    return pd.DataFrame(
        [
            {
                "Date": r.date,
                "Document": r.dispno,
                "Code": r.code,
                "Name": r.name,
                "Amount": r.amount,
                "Lot": r.lot_no,
                "Expiry": r.exp_date,
                "Type": r.kind.value,
            }
            for r in records
        ],
        columns=["Date", "Document", "Code", "Name", "Amount", "Lot", "Expiry", "Type"],
    )
