# =============================================================================
# 03_Requisition.py - Forecast-based requisition editor and print view
# =============================================================================
"""
Requisition

A session is started from the Inventory page. Lines below their minimum are
preselected with their 1.2x suggestion shown alongside; the user edits order
quantities, applies a multiplier in bulk, picks a requester and finalizes.
The finalized document replaces the editor with a printable A4 sheet.
"""
from __future__ import annotations
import streamlit as st
import streamlit.components.v1 as components

from substock_core.errors import RequisitionError, handle_error
from substock_core.inventory import coerce_quantity
from substock_core.services.requisition_service import RATE_NOTE, RequisitionService
from substock_core.state.session import end_requisition_session
from substock_core.ui.page import bootstrap_page
from substock_core.ui.print_layout import render_requisition_html

ctx = bootstrap_page("Requisition", "📝")
service = RequisitionService()

GRID_VERSION_KEY = "requisition_grid_version"
st.session_state.setdefault(GRID_VERSION_KEY, 0)


def _reset_grid():
    st.session_state[GRID_VERSION_KEY] += 1


def _back_to_inventory():
    st.session_state["print_document"] = None
    end_requisition_session()
    st.switch_page("pages/01_Inventory.py")


# ============================================================================
# PRINT VIEW
# ============================================================================
document = st.session_state.get("print_document")
if document is not None:
    st.title(f"Requisition {document.doc_id}")
    html = render_requisition_html(document, ctx.settings)

    c1, c2, _ = st.columns([2, 2, 4])
    with c1:
        if st.button("⬅️ Back to inventory", use_container_width=True):
            _back_to_inventory()
    with c2:
        st.download_button(
            "⬇️ Download HTML",
            data=html,
            file_name=f"{document.doc_id}.html",
            mime="text/html",
            use_container_width=True,
        )

    components.html(html, height=1200, scrolling=True)
    st.stop()

# ============================================================================
# EDITOR
# ============================================================================
st.title("New requisition")

editor = st.session_state.get("requisition_editor")
if editor is None or not editor.is_open:
    st.info("No requisition in progress. Start one from the Inventory page.")
    if st.button("Go to inventory"):
        st.switch_page("pages/01_Inventory.py")
    st.stop()

st.caption(RATE_NOTE)

b1, b2, b3, b4, b5 = st.columns(5)
try:
    with b1:
        if st.button("Apply 1.2x", use_container_width=True):
            editor.apply_suggestion(1.2)
            _reset_grid()
    with b2:
        if st.button("Apply 1.5x", use_container_width=True):
            editor.apply_suggestion(1.5)
            _reset_grid()
    with b3:
        if st.button("Select all", use_container_width=True):
            editor.select_all(True)
            _reset_grid()
    with b4:
        if st.button("Clear selection", use_container_width=True):
            editor.select_all(False)
            _reset_grid()
except RequisitionError as e:
    handle_error(e)
with b5:
    if st.button("Cancel", use_container_width=True):
        _back_to_inventory()

grid = service.to_frame(editor)
edited = st.data_editor(
    grid,
    key=f"requisition_grid_{st.session_state[GRID_VERSION_KEY]}",
    use_container_width=True,
    hide_index=True,
    disabled=[c for c in grid.columns if c not in ("Select", "Order")],
    column_config={
        "Select": st.column_config.CheckboxColumn(width="small"),
        "Order": st.column_config.NumberColumn(min_value=0, step=1, format="%d"),
        "Rate/Week": st.column_config.NumberColumn(format="%.2f"),
        "Value": st.column_config.NumberColumn(format="%.2f"),
    },
)

changed = False
for before, after in zip(grid.to_dict(orient="records"), edited.to_dict(orient="records")):
    if coerce_quantity(after["Order"]) != before["Order"]:
        editor.set_manual_order(before["Code"], before["Lot"], after["Order"])
        changed = True
    elif bool(after["Select"]) != bool(before["Select"]):
        editor.toggle_selected(before["Code"], before["Lot"])
        changed = True
if changed:
    st.rerun()

# ============================================================================
# FINALIZE
# ============================================================================
st.divider()
selected = editor.selected_items
m1, m2 = st.columns(2)
m1.metric("Selected lines", f"{len(selected):,}")
m2.metric("Total (THB)", f"{editor.selected_total:,.2f}")

names = [r.name for r in ctx.live.config.requesters]
current = st.session_state.get("requisition_requester")
requester = st.selectbox(
    "Requester",
    names,
    index=names.index(current) if current in names else None,
    placeholder="Choose a requester",
)
st.session_state["requisition_requester"] = requester or ""
if not names:
    st.caption("No requesters configured yet. An administrator can add them in Settings.")

if st.button("✅ Finalize and print", type="primary", disabled=not editor.can_finalize(requester)):
    result = service.finalize(editor, requester)
    if result:
        st.session_state["print_document"] = result.data
        end_requisition_session()
        st.rerun()
    else:
        st.warning(result.error)
