# =============================================================================
# substock_core/data/schema.py
# SQL for the three Supabase tables behind the dashboard
# =============================================================================

from __future__ import annotations
from typing import Optional

from substock_core.config import SubStockConfig

CREATE_TABLES_TEMPLATE = """
-- ============================================================================
-- SUBSTOCK RH TABLES
-- Run once in the Supabase SQL Editor
-- ============================================================================

-- Ledger of every inward (+) and outward (-) movement per drug lot
CREATE TABLE IF NOT EXISTS {transactions} (
    id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
    seq BIGSERIAL NOT NULL UNIQUE,
    dispno TEXT DEFAULT '-',
    date TEXT NOT NULL,
    department TEXT DEFAULT '-',
    code TEXT NOT NULL,
    name TEXT DEFAULT 'Unknown',
    amount NUMERIC NOT NULL,
    pack TEXT DEFAULT '1',
    price NUMERIC DEFAULT 0,
    lot_no TEXT DEFAULT '-',
    barcode TEXT DEFAULT '-',
    exp_date TEXT DEFAULT '-',
    timestamp BIGINT DEFAULT 0,
    type TEXT CHECK (type IN ('IN', 'OUT')),
    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()
);

-- Tables created before the seq column existed
ALTER TABLE {transactions} ADD COLUMN IF NOT EXISTS seq BIGSERIAL;

CREATE INDEX IF NOT EXISTS idx_{transactions}_code_lot ON {transactions}(code, lot_no);
CREATE INDEX IF NOT EXISTS idx_{transactions}_order ON {transactions}(timestamp, seq);

-- Per-drug reorder threshold and storage cabinet
CREATE TABLE IF NOT EXISTS {drug_config} (
    code TEXT PRIMARY KEY,
    min_stock INTEGER DEFAULT 0 CHECK (min_stock >= 0),
    cabinet TEXT
);

-- Names offered in the requisition "Requested by" list
CREATE TABLE IF NOT EXISTS {requesters} (
    id UUID DEFAULT gen_random_uuid() PRIMARY KEY,
    name TEXT NOT NULL
);

ALTER TABLE {transactions} ENABLE ROW LEVEL SECURITY;
ALTER TABLE {drug_config} ENABLE ROW LEVEL SECURITY;
ALTER TABLE {requesters} ENABLE ROW LEVEL SECURITY;

-- Adjust to your hospital's security requirements
CREATE POLICY "substock_all_{transactions}" ON {transactions} FOR ALL USING (true) WITH CHECK (true);
CREATE POLICY "substock_all_{drug_config}" ON {drug_config} FOR ALL USING (true) WITH CHECK (true);
CREATE POLICY "substock_all_{requesters}" ON {requesters} FOR ALL USING (true) WITH CHECK (true);
"""


def create_tables_sql(config: Optional[SubStockConfig] = None) -> str:
    """SQL creating the configured tables."""
    config = config or SubStockConfig()
    return CREATE_TABLES_TEMPLATE.format(
        transactions=config.transactions_table,
        drug_config=config.drug_config_table,
        requesters=config.requesters_table,
    )
