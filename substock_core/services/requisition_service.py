# =============================================================================
# substock_core/services/requisition_service.py
# Requisition Service - forecast session lifecycle
# =============================================================================

from __future__ import annotations
import random
from datetime import datetime
from typing import List, Optional, Sequence

import pandas as pd

from substock_core.inventory import (
    InventoryItem,
    RequisitionEditor,
    build_requisition,
)
from .base_service import BaseService, ServiceResult

RATE_NOTE = (
    "Rate/Week is the lot's total outflow to date divided by four weeks. "
    "Lines at or below their minimum get a suggestion; editing an order "
    "selects the line when the quantity is above zero."
)


class RequisitionService(BaseService):
    """
    Starts and finalizes requisition sessions.

    Usage:
        service = RequisitionService()
        editor = service.start_session(inventory).data
        editor.apply_suggestion(1.2)
        result = service.finalize(editor, "Nurse A")
        if result:
            document = result.data
    """

    def start_session(self, inventory: Sequence[InventoryItem]) -> ServiceResult:
        def _start():
            return RequisitionEditor(build_requisition(inventory))

        result = self.safe_execute("Building requisition forecast", _start)
        if result:
            result.metadata = {"preselected": len(result.data.selected_items)}
        return result

    def finalize(
        self,
        editor: RequisitionEditor,
        requester: Optional[str],
        now: Optional[datetime] = None,
        rng: Optional[random.Random] = None,
    ) -> ServiceResult:
        """
        Finalize the session; fails without generating a document when
        nothing is selected or no requester was chosen.
        """
        if not editor.selected_items:
            return ServiceResult.fail("Select at least one item", error_code="REQ_001")
        if not (requester and requester.strip()):
            return ServiceResult.fail("Choose a requester", error_code="REQ_001")

        result = self.safe_execute(
            "Finalizing requisition", editor.finalize, requester, now, rng
        )
        if result and result.data is None:
            return ServiceResult.fail("Requisition already finalized", error_code="REQ_001")
        return result

    @staticmethod
    def to_frame(editor: RequisitionEditor) -> pd.DataFrame:
        """Editable grid shown on the requisition page."""
        rows: List[dict] = [
            {
                "Select": item.is_selected,
                "Code": item.code,
                "Lot": item.lot_no,
                "Name": item.name,
                "Pack": item.pack,
                "Price": item.price,
                "Balance": item.balance,
                "Rate/Week": item.usage_rate_per_week,
                "Suggest 1.2x": item.suggested_1_2,
                "Suggest 1.5x": item.suggested_1_5,
                "Order": item.manual_order,
                "Value": item.line_total,
            }
            for item in editor.items
        ]
        return pd.DataFrame(rows)
