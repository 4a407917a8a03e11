# =============================================================================
# 02_Transactions.py - Ledger history, CSV import and row deletion
# =============================================================================
"""
Transactions

Everyone sees the movement history (newest first). Administrators can
import IN/OUT exports from the hospital system and delete single rows.
After every write the store sync is invalidated so the next poll reads the
updated ledger.
"""
from __future__ import annotations
import streamlit as st

from substock_core.data.ingest import CSV_COLUMNS, records_to_frame, sort_transactions
from substock_core.errors import ErrorContext
from substock_core.inventory import MovementKind
from substock_core.services import LedgerImportService
from substock_core.ui.page import bootstrap_page, refresh_after_write

ctx = bootstrap_page("Transactions", "🔁")

st.title("Transactions")

# ============================================================================
# IMPORT (administrators)
# ============================================================================
if ctx.privileged:
    with st.expander("⬆️ Import CSV export", expanded=not ctx.live.records):
        st.caption("Expected columns: " + ", ".join(CSV_COLUMNS))
        mode = st.radio(
            "Movement type",
            [MovementKind.IN.value, MovementKind.OUT.value],
            key="upload_mode",
            horizontal=True,
            help="IN rows are stored as positive amounts, OUT rows as negative.",
        )
        uploaded = st.file_uploader("CSV file", type=["csv"])

        if uploaded is not None and st.button("Import", type="primary"):
            service = LedgerImportService(st.session_state["ledger_service"])
            result = service.import_csv(uploaded.getvalue(), MovementKind(mode))
            if result:
                st.success(f"Imported {result.data} {mode} rows from {uploaded.name}")
                ctx.sync.invalidate()
                with ErrorContext("Refreshing ledger after import"):
                    ctx.sync.poll()
            else:
                st.error(f"Import failed: {result.error}")

# ============================================================================
# HISTORY
# ============================================================================
records = sort_transactions(ctx.live.records)
if not records:
    st.info("The ledger is empty.")
    st.stop()

search = st.text_input("Filter by name, code or document", placeholder="Search...")
needle = search.strip().lower()
shown = [
    r for r in records
    if not needle
    or needle in r.name.lower()
    or needle in r.code.lower()
    or needle in r.dispno.lower()
]

st.caption(f"{len(shown)} of {len(records)} movements")
st.dataframe(
    records_to_frame(shown),
    use_container_width=True,
    hide_index=True,
    column_config={"Amount": st.column_config.NumberColumn(format="%.0f")},
)

# ============================================================================
# DELETE (administrators)
# ============================================================================
if ctx.privileged:
    deletable = [r for r in shown if r.id]
    with st.expander("🗑️ Delete a movement"):
        if not deletable:
            st.caption("No stored rows match the current filter.")
        else:
            target = st.selectbox(
                "Row",
                deletable,
                format_func=lambda r: f"{r.date} | {r.code} {r.name} | lot {r.lot_no} | {r.amount:+,.0f}",
            )
            confirm = st.checkbox("I understand this changes the stock balance")
            if st.button("Delete", disabled=not confirm):
                with ErrorContext(f"Deleting ledger row {target.id}") as op:
                    st.session_state["ledger_service"].delete_record(target.id)
                if not op.failed:
                    refresh_after_write(ctx)
