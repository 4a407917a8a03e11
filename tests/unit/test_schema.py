# =============================================================================
# tests/unit/test_schema.py
# Unit Tests for the store setup SQL
# =============================================================================

from substock_core.config import SubStockConfig
from substock_core.data.schema import create_tables_sql


class TestCreateTablesSql:

    def test_default_tables(self):
        sql = create_tables_sql()

        assert "CREATE TABLE IF NOT EXISTS transactions" in sql
        assert "CREATE TABLE IF NOT EXISTS drug_config" in sql
        assert "CREATE TABLE IF NOT EXISTS requesters" in sql
        assert "code TEXT PRIMARY KEY" in sql

    def test_configured_table_names(self):
        sql = create_tables_sql(SubStockConfig(transactions_table="ward5_ledger"))

        assert "CREATE TABLE IF NOT EXISTS ward5_ledger" in sql
        assert "idx_ward5_ledger_code_lot" in sql
        assert "{" not in sql

    def test_ledger_has_insertion_sequence(self):
        sql = create_tables_sql()

        assert "seq BIGSERIAL NOT NULL UNIQUE" in sql
        assert "ADD COLUMN IF NOT EXISTS seq BIGSERIAL" in sql
        assert "idx_transactions_order ON transactions(timestamp, seq)" in sql
