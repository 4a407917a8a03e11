# =============================================================================
# substock_core/inventory/models.py
# Data contracts for the inventory derivation pipeline
# =============================================================================
"""
Typed records flowing through the pipeline.

    LedgerRecord + ConfigSnapshot -> InventoryItem -> RequisitionItem

Store rows are loose dictionaries; ``LedgerRecord.from_dict`` and
``ConfigSnapshot.from_rows`` are the only places where missing or malformed
fields are defaulted, so everything downstream is fully populated.
"""

from __future__ import annotations
import math
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from substock_core.config import DEFAULT_CABINET


class MovementKind(str, Enum):
    """Direction tag of a ledger movement (informational only)."""
    IN = "IN"
    OUT = "OUT"


class StockStatus(str, Enum):
    NORMAL = "NORMAL"
    LOW = "LOW"
    EMPTY = "EMPTY"


class ExpiryStatus(str, Enum):
    OK = "OK"
    NEAR = "NEAR"
    EXPIRED = "EXPIRED"


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, float) and math.isnan(value):
        return default
    text = str(value).strip()
    return text if text else default


def _number(value: Any, default: float = 0.0) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


# =============================================================================
# LEDGER
# =============================================================================

@dataclass(frozen=True)
class LedgerRecord:
    """
    One inward or outward movement of a drug lot.

    The sign of ``amount`` is authoritative for balance math; ``kind`` is
    kept only for display.
    """
    code: str
    lot_no: str
    amount: float
    date: str = ""
    name: str = "Unknown"
    pack: str = "1"
    price: float = 0.0
    exp_date: str = "-"
    dispno: str = "-"
    department: str = "-"
    barcode: str = "-"
    timestamp: int = 0
    kind: MovementKind = MovementKind.IN
    id: Optional[str] = None

    @classmethod
    def from_dict(cls, row: Mapping[str, Any]) -> LedgerRecord:
        """Sanitise a store row into a fully populated record."""
        amount = _number(row.get("amount"))
        raw_kind = _text(row.get("type", row.get("kind")), "").upper()
        if raw_kind in (MovementKind.IN.value, MovementKind.OUT.value):
            kind = MovementKind(raw_kind)
        else:
            kind = MovementKind.IN if amount > 0 else MovementKind.OUT

        record_id = row.get("id")
        return cls(
            id=None if record_id is None else str(record_id),
            code=_text(row.get("code"), ""),
            lot_no=_text(row.get("lot_no"), "-"),
            amount=amount,
            date=_text(row.get("date"), ""),
            name=_text(row.get("name"), "Unknown"),
            pack=_text(row.get("pack"), "1"),
            price=_number(row.get("price")),
            exp_date=_text(row.get("exp_date"), "-"),
            dispno=_text(row.get("dispno"), "-"),
            department=_text(row.get("department"), "-"),
            barcode=_text(row.get("barcode"), "-"),
            timestamp=int(_number(row.get("timestamp"))),
            kind=kind,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Row shape written to the transactions table (without id)."""
        return {
            "dispno": self.dispno,
            "date": self.date,
            "department": self.department,
            "code": self.code,
            "name": self.name,
            "amount": self.amount,
            "pack": self.pack,
            "price": self.price,
            "lot_no": self.lot_no,
            "barcode": self.barcode,
            "exp_date": self.exp_date,
            "timestamp": self.timestamp,
            "type": self.kind.value,
        }


# =============================================================================
# CONFIGURATION
# =============================================================================

@dataclass(frozen=True)
class Requester:
    id: str
    name: str


@dataclass(frozen=True)
class ConfigSnapshot:
    """Latest per-drug thresholds, cabinet labels and requester list."""
    min_stock: Mapping[str, int] = field(default_factory=dict)
    cabinets: Mapping[str, str] = field(default_factory=dict)
    requesters: Tuple[Requester, ...] = ()

    def min_stock_for(self, code: str) -> int:
        return self.min_stock.get(code, 0) or 0

    def cabinet_for(self, code: str) -> str:
        return self.cabinets.get(code) or DEFAULT_CABINET

    @classmethod
    def from_rows(
        cls,
        drug_rows: Iterable[Mapping[str, Any]] = (),
        requester_rows: Iterable[Mapping[str, Any]] = (),
    ) -> ConfigSnapshot:
        """
        Build a snapshot from store rows.

        drug_rows carry ``code``, ``min_stock`` and ``cabinet``; negative or
        non-numeric thresholds become 0 and blank cabinets are left unset.
        """
        min_stock: Dict[str, int] = {}
        cabinets: Dict[str, str] = {}
        for row in drug_rows:
            code = _text(row.get("code"), "")
            if not code:
                continue
            min_stock[code] = max(0, int(_number(row.get("min_stock"))))
            cabinet = _text(row.get("cabinet"), "")
            if cabinet:
                cabinets[code] = cabinet

        requesters = tuple(
            Requester(id=str(row.get("id")), name=_text(row.get("name"), ""))
            for row in requester_rows
            if _text(row.get("name"), "")
        )
        return cls(min_stock=min_stock, cabinets=cabinets, requesters=requesters)


# =============================================================================
# DERIVED STATE
# =============================================================================

@dataclass
class InventoryItem:
    """
    Derived state of one (drug code, lot) pair.

    ``status``, ``exp_status`` and ``days_to_expire`` are set by the
    classifier and are only ever re-derived, never edited.
    """
    code: str
    name: str
    pack: str
    lot_no: str
    exp_date: str
    price: float
    total_in: float = 0.0
    total_out: float = 0.0
    balance: float = 0.0
    min_stock: int = 0
    cabinet: str = DEFAULT_CABINET
    status: StockStatus = StockStatus.NORMAL
    exp_status: ExpiryStatus = ExpiryStatus.OK
    days_to_expire: Optional[int] = None
    last_update: str = ""

    @property
    def key(self) -> Tuple[str, str]:
        return (self.code, self.lot_no)

    @property
    def stock_value(self) -> float:
        return self.balance * self.price

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["status"] = self.status.value
        data["exp_status"] = self.exp_status.value
        return data


@dataclass
class RequisitionItem(InventoryItem):
    """Inventory line plus forecast and the user's order edits."""
    usage_rate_per_week: float = 0.0
    suggested_1_2: int = 0
    suggested_1_5: int = 0
    manual_order: int = 0
    is_selected: bool = False

    @property
    def line_total(self) -> float:
        return self.manual_order * self.price
