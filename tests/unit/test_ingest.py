# =============================================================================
# tests/unit/test_ingest.py
# Unit Tests for CSV ledger import
# =============================================================================

import pytest
from datetime import datetime

from substock_core.data.ingest import (
    decode_upload,
    parse_ledger_csv,
    records_to_frame,
    sort_transactions,
)
from substock_core.errors import DataIngestionError
from substock_core.inventory import MovementKind

UPLOAD_TIME = datetime(2024, 2, 10, 8, 0, 0)


class TestParseLedgerCsv:
    """Positional CSV rows into ledger records"""

    def test_drops_blank_and_short_rows(self, sample_csv):
        records = parse_ledger_csv(sample_csv, MovementKind.IN, UPLOAD_TIME)
        assert [r.dispno for r in records] == ["D001", "D002", "D003"]

    def test_in_mode_stores_positive_amounts(self, sample_csv):
        records = parse_ledger_csv(sample_csv, MovementKind.IN, UPLOAD_TIME)

        assert [r.amount for r in records] == [100, 40, 0]
        assert all(r.kind == MovementKind.IN for r in records)

    def test_out_mode_stores_negative_amounts(self, sample_csv):
        records = parse_ledger_csv(sample_csv, MovementKind.OUT, UPLOAD_TIME)

        assert records[0].amount == -100
        assert records[1].amount == -40
        assert all(r.kind == MovementKind.OUT for r in records)

    def test_fields_and_defaults(self, sample_csv):
        first, second, third = parse_ledger_csv(sample_csv, MovementKind.IN, UPLOAD_TIME)

        assert first.code == "ABC123"
        assert first.lot_no == "L1"
        assert first.price == 2.5
        assert first.exp_date == "2026-12-31"
        assert second.barcode == "-"
        assert third.date == "2024-02-10"
        assert third.name == "Unknown"
        assert third.lot_no == "-"
        assert third.exp_date == "-"
        assert third.pack == "1"

    def test_timestamp_is_upload_time_in_ms(self, sample_csv):
        records = parse_ledger_csv(sample_csv, MovementKind.IN, UPLOAD_TIME)
        assert {r.timestamp for r in records} == {int(UPLOAD_TIME.timestamp() * 1000)}

    def test_quoted_fields_with_commas(self):
        text = (
            "dispno,date,department,code,name,amount,pack,price,lot_no,barcode,exp_date\n"
            'D9,2024-02-01,IPD,Q1,"Vitamin B1, B6, B12",3,amp,7.25,LB,-,2025-01-01\n'
        )
        [record] = parse_ledger_csv(text, MovementKind.IN, UPLOAD_TIME)
        assert record.name == "Vitamin B1, B6, B12"
        assert record.amount == 3

    def test_header_only(self):
        assert parse_ledger_csv("dispno,date\n", MovementKind.IN, UPLOAD_TIME) == []


class TestDecodeUpload:

    def test_utf8_with_bom(self):
        assert decode_upload("code".encode("utf-8-sig")) == "code"

    def test_thai_windows_encoding(self):
        text = "ยาพาราเซตามอล"
        assert decode_upload(text.encode("cp874")) == text

    def test_str_passthrough(self):
        assert decode_upload("already text") == "already text"

    def test_undecodable(self):
        # 0xDB is unassigned in cp874 and invalid as a UTF-8 start byte here
        with pytest.raises(DataIngestionError):
            decode_upload(b"\xdb\xdb\xdb")


class TestHistory:

    def test_newest_first(self, make_record):
        records = [make_record(timestamp=1), make_record(timestamp=3), make_record(timestamp=2)]
        assert [r.timestamp for r in sort_transactions(records)] == [3, 2, 1]

    def test_frame_columns(self, sample_records):
        df = records_to_frame(sample_records)

        assert list(df.columns) == ["Date", "Document", "Code", "Name", "Amount", "Lot", "Expiry", "Type"]
        assert len(df) == len(sample_records)
        assert set(df["Type"]) == {"IN", "OUT"}

    def test_empty_frame_keeps_columns(self):
        assert list(records_to_frame([]).columns)[0] == "Date"
