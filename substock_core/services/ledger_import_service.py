# =============================================================================
# substock_core/services/ledger_import_service.py
# Ledger Import Service - CSV upload into the transactions table
# =============================================================================

from __future__ import annotations
from datetime import datetime
from typing import Optional, Union

from substock_core.data.ingest import decode_upload, parse_ledger_csv
from substock_core.data.ledger_service import LedgerService
from substock_core.errors import DataIngestionError
from substock_core.inventory import MovementKind
from .base_service import BaseService, ServiceResult


class LedgerImportService(BaseService):
    """Parses an uploaded export and writes it to the ledger."""

    def __init__(self, ledger_service: LedgerService):
        super().__init__()
        self.ledger_service = ledger_service

    def import_csv(
        self,
        data: Union[bytes, str],
        kind: MovementKind,
        now: Optional[datetime] = None,
    ) -> ServiceResult:
        """
        Returns:
            ServiceResult with the number of rows written
        """
        def _import() -> int:
            records = parse_ledger_csv(decode_upload(data), kind, now)
            if not records:
                raise DataIngestionError("No usable rows found in the file", file_type="csv")
            return self.ledger_service.push_records(records)

        return self.safe_execute(f"Importing {kind.value} CSV", _import)
