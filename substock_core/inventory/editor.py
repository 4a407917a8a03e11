# =============================================================================
# substock_core/inventory/editor.py
# Interactive requisition session
# =============================================================================
"""
Requisition editor.

Holds the working copy of forecast lines for one session. The only fields
ever edited are ``manual_order`` and ``is_selected``; derived totals are
computed on access. Finalizing hands an immutable ``RequisitionDocument``
to the print view and closes the session.
"""

from __future__ import annotations
import math
import random
from dataclasses import dataclass, replace, field
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple

from substock_core.config import DOC_ID_PREFIX, SUGGESTION_MULTIPLIERS
from substock_core.errors import RequisitionError
from substock_core.logging import get_logger
from .models import RequisitionItem

logger = get_logger(__name__)


def coerce_quantity(value: Any) -> int:
    """
    Turn user input into a non-negative whole quantity.

    Non-numeric, NaN and negative input become 0; fractions are truncated.
    """
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0
    return int(number)


def generate_document_id(
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """``REQ-YYYYMMDD-NNN``. Readable, not guaranteed unique."""
    now = now or datetime.now()
    rng = rng or random.Random()
    return f"{DOC_ID_PREFIX}-{now:%Y%m%d}-{rng.randrange(1000):03d}"


@dataclass(frozen=True)
class RequisitionDocument:
    """Finalized requisition handed to print/export."""
    items: Tuple[RequisitionItem, ...]
    requester: str
    doc_id: str
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def total(self) -> float:
        return sum(item.line_total for item in self.items)


class RequisitionEditor:
    """
    Working set of requisition lines for one session.

    Usage:
        editor = RequisitionEditor(build_requisition(inventory))
        editor.apply_suggestion(1.5)
        editor.set_manual_order("ABC123", "L1", 40)
        document = editor.finalize("Nurse A")
    """

    def __init__(self, items: Iterable[RequisitionItem]):
        self._items: List[RequisitionItem] = [replace(item) for item in items]
        self.document: Optional[RequisitionDocument] = None

    # ---------------------------------------------------------------- state

    @property
    def items(self) -> List[RequisitionItem]:
        return list(self._items)

    @property
    def is_open(self) -> bool:
        return self.document is None

    @property
    def selected_items(self) -> List[RequisitionItem]:
        return [item for item in self._items if item.is_selected]

    @property
    def selected_total(self) -> float:
        return sum(item.line_total for item in self.selected_items)

    def find(self, code: str, lot_no: str) -> Optional[RequisitionItem]:
        for item in self._items:
            if item.code == code and item.lot_no == lot_no:
                return item
        return None

    def _ensure_open(self) -> None:
        if not self.is_open:
            raise RequisitionError(
                "Requisition session already finalized",
                doc_id=self.document.doc_id,
            )

    # ---------------------------------------------------------------- edits

    def set_manual_order(self, code: str, lot_no: str, quantity: Any) -> None:
        self._ensure_open()
        item = self.find(code, lot_no)
        if item is None:
            return
        item.manual_order = coerce_quantity(quantity)
        item.is_selected = item.manual_order > 0

    def apply_suggestion(self, multiplier: Any) -> None:
        """Overwrite every line with its 1.2x or 1.5x suggestion."""
        self._ensure_open()
        try:
            factor = float(multiplier)
        except (TypeError, ValueError):
            factor = None
        if factor not in SUGGESTION_MULTIPLIERS:
            raise RequisitionError(
                f"Unsupported suggestion multiplier: {multiplier}",
                multiplier=multiplier,
            )

        for item in self._items:
            suggestion = item.suggested_1_2 if factor == 1.2 else item.suggested_1_5
            item.manual_order = suggestion
            item.is_selected = suggestion > 0

    def toggle_selected(self, code: str, lot_no: str) -> None:
        self._ensure_open()
        item = self.find(code, lot_no)
        if item is not None:
            item.is_selected = not item.is_selected

    def select_all(self, flag: bool) -> None:
        self._ensure_open()
        for item in self._items:
            item.is_selected = bool(flag)

    # ---------------------------------------------------------- finalizing

    def can_finalize(self, requester: Optional[str]) -> bool:
        return (
            self.is_open
            and bool(self.selected_items)
            and bool(requester and requester.strip())
        )

    def finalize(
        self,
        requester: Optional[str],
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[RequisitionDocument]:
        """
        Freeze the selected lines into a document and end the session.

        Returns None, generating nothing, when no line is selected or no
        requester was chosen.
        """
        if not self.can_finalize(requester):
            logger.info(
                f"Finalize refused: {len(self.selected_items)} selected, "
                f"requester={requester!r}, open={self.is_open}"
            )
            return None

        now = now or datetime.now()
        self.document = RequisitionDocument(
            items=tuple(replace(item) for item in self.selected_items),
            requester=requester.strip(),
            doc_id=generate_document_id(now, rng),
            created_at=now,
        )
        logger.info(
            f"Requisition {self.document.doc_id} finalized: "
            f"{len(self.document.items)} lines, total {self.document.total:,.2f}"
        )
        return self.document
