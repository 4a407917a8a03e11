# =============================================================================
# tests/integration/test_inventory_pipeline.py
# Integration Tests for Ledger → Inventory → Requisition → Document
# =============================================================================

import random
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from substock_core.data.feed import Feed, LiveInventory
from substock_core.data.ingest import parse_ledger_csv
from substock_core.data.ledger_service import LedgerService
from substock_core.data.sync import StoreSync
from substock_core.inventory import (
    ConfigSnapshot,
    LedgerRecord,
    MovementKind,
    StockStatus,
    compute_inventory,
)
from substock_core.services import RequisitionService

NOW = datetime(2024, 2, 1, 9, 0)


class TestInventoryPipelineIntegration:
    """
    Integration tests for the complete derivation flow.

    Tests the flow:
    1. Ledger records (store rows or CSV import)
    2. Aggregation and classification
    3. Forecast and requisition editing
    4. Finalized document
    """

    @pytest.fixture
    def ledger(self, make_record):
        return [
            make_record("ABC123", "L1", 100, "2024-01-01"),
            make_record("ABC123", "L1", -30, "2024-01-10"),
        ]

    def test_scenario_normal_stock(self, ledger):
        [item] = compute_inventory(ledger, ConfigSnapshot(min_stock={"ABC123": 50}), NOW)

        assert (item.total_in, item.total_out, item.balance) == (100, -30, 70)
        assert item.status == StockStatus.NORMAL
        assert item.last_update == "2024-01-10"

    def test_scenario_balance_at_minimum_is_low(self, ledger):
        [item] = compute_inventory(ledger, ConfigSnapshot(min_stock={"ABC123": 70}), NOW)
        assert item.status == StockStatus.LOW

    def test_scenario_no_order_above_minimum(self, make_record):
        records = [
            make_record("ABC123", "L1", 350, "2024-01-01"),
            make_record("ABC123", "L1", -280, "2024-01-28"),
        ]
        inventory = compute_inventory(records, ConfigSnapshot(min_stock={"ABC123": 50}), NOW)

        [line] = RequisitionService().start_session(inventory).data.items

        assert line.balance == 70
        assert line.usage_rate_per_week == 70.0
        assert (line.suggested_1_2, line.suggested_1_5) == (0, 0)
        assert line.is_selected is False

    def test_scenario_order_below_minimum(self, make_record):
        records = [
            make_record("ABC123", "L1", 210, "2024-01-01"),
            make_record("ABC123", "L1", -200, "2024-01-28"),
        ]
        inventory = compute_inventory(records, ConfigSnapshot(min_stock={"ABC123": 50}), NOW)

        [line] = RequisitionService().start_session(inventory).data.items

        assert line.balance == 10
        assert line.usage_rate_per_week == 50.0
        assert (line.suggested_1_2, line.suggested_1_5) == (50, 65)
        assert line.is_selected is True

    def test_scenario_bulk_suggestion_overrides_manual_selection(self, sample_records, sample_config):
        inventory = compute_inventory(sample_records, sample_config, NOW)
        editor = RequisitionService().start_session(inventory).data
        editor.toggle_selected("ABC123", "L1")
        editor.set_manual_order("ABC123", "L2", 15)

        editor.apply_suggestion(1.2)

        by_key = {line.key: line for line in editor.items}
        assert by_key[("ABC123", "L1")].is_selected is False
        assert by_key[("ABC123", "L2")].manual_order == 0
        assert by_key[("ABC123", "L2")].is_selected is False
        assert by_key[("XYZ9", "A")].manual_order == 50
        assert [line.key for line in editor.selected_items] == [("XYZ9", "A")]
        assert editor.selected_total == 200.0

    def test_scenario_finalize_without_selection_generates_nothing(self, sample_records, sample_config):
        inventory = compute_inventory(sample_records, sample_config, NOW)
        service = RequisitionService()
        editor = service.start_session(inventory).data
        editor.select_all(False)
        rng = MagicMock(wraps=random.Random(1))

        result = service.finalize(editor, "Nurse A", NOW, rng)

        assert not result.success
        assert editor.document is None
        rng.randrange.assert_not_called()

    def test_full_flow_from_csv_to_document(self):
        receipts = (
            "dispno,date,department,code,name,amount,pack,price,lot_no,barcode,exp_date\n"
            "R1,2024-01-02,IPD,P500,Paracetamol,300,box,1.5,LOT9,-,2024-04-01\n"
        )
        dispensed = (
            "dispno,date,department,code,name,amount,pack,price,lot_no,barcode,exp_date\n"
            "D1,2024-01-20,IPD,P500,Paracetamol,280,box,1.5,LOT9,-,2024-04-01\n"
        )
        records = (
            parse_ledger_csv(receipts, MovementKind.IN, NOW)
            + parse_ledger_csv(dispensed, MovementKind.OUT, NOW)
        )
        config = ConfigSnapshot(min_stock={"P500": 40}, cabinets={"P500": "B"})

        inventory = compute_inventory(records, config, NOW)
        [item] = inventory

        assert item.balance == 20
        assert item.status == StockStatus.LOW
        assert item.exp_status.value == "NEAR"
        assert item.cabinet == "B"

        service = RequisitionService()
        editor = service.start_session(inventory).data
        editor.apply_suggestion(1.5)
        document = service.finalize(editor, "Nurse A", NOW, random.Random(5)).data

        # rate 70/week -> ceil(105) - 20
        assert document.items[0].manual_order == 85
        assert document.total == 85 * 1.5
        assert document.doc_id.startswith("REQ-20240201-")

    def test_balance_invariant_over_store_round_trip(self, sample_records, supabase_factory, now):
        rows = [dict(r.to_dict(), id=str(i)) for i, r in enumerate(sample_records)]
        ledger_service = LedgerService(client=supabase_factory([rows]))
        config_service = MagicMock()
        config_service.fetch_snapshot.return_value = ConfigSnapshot()
        ledger_feed, config_feed = Feed("ledger"), Feed("config")
        live = LiveInventory(ledger_feed, config_feed, clock=lambda: now)

        StoreSync(ledger_service, config_service, ledger_feed, config_feed).poll()

        assert len(live.records) == len(sample_records)
        for item in live.inventory:
            assert item.balance == item.total_in + item.total_out
            assert item.total_out <= 0 <= item.total_in
        assert live.inventory == compute_inventory(
            [LedgerRecord.from_dict(row) for row in rows], ConfigSnapshot(), now
        )
