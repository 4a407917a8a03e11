# =============================================================================
# 01_Inventory.py - Per-lot stock list
# =============================================================================
from __future__ import annotations
import streamlit as st

from substock_core.inventory import ALL_CABINETS, filter_inventory
from substock_core.services import InventoryService, RequisitionService
from substock_core.ui.page import bootstrap_page
from substock_core.ui.theme import STATUS_COLORS

ctx = bootstrap_page("Inventory", "📦")

st.title("Inventory")
st.caption("Balances per lot, recomputed from the full transaction ledger.")

inventory = ctx.live.inventory
cabinets = sorted({item.cabinet for item in inventory} | set(ctx.settings.cabinet_options))

# ============================================================================
# FILTERS
# ============================================================================
col_search, col_cabinet, col_action = st.columns([3, 2, 2])
with col_search:
    search = st.text_input("Search name or code", placeholder="e.g. Paracetamol")
with col_cabinet:
    cabinet = st.selectbox("Cabinet", [ALL_CABINETS] + cabinets)
with col_action:
    st.write("")
    start_requisition = st.button(
        "📝 Create requisition",
        type="primary",
        use_container_width=True,
        disabled=not inventory,
    )

if start_requisition:
    result = RequisitionService().start_session(inventory)
    if result:
        st.session_state["requisition_editor"] = result.data
        st.session_state["print_document"] = None
        st.switch_page("pages/03_Requisition.py")
    else:
        st.error(f"Could not build the requisition: {result.error}")

# ============================================================================
# TABLE
# ============================================================================
visible = filter_inventory(inventory, search, cabinet)
st.caption(f"{len(visible)} of {len(inventory)} lots")

df = InventoryService.to_frame(visible)


def _status_style(value):
    color = STATUS_COLORS.get(value)
    return f"color: {color}; font-weight: 600" if color else ""


st.dataframe(
    df.style.map(_status_style, subset=["Status"]),
    use_container_width=True,
    hide_index=True,
    column_config={
        "Balance": st.column_config.NumberColumn(format="%.0f"),
        "Days Left": st.column_config.NumberColumn(format="%d"),
    },
)
