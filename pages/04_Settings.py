# =============================================================================
# 04_Settings.py - Per-drug thresholds, cabinets and requester list
# =============================================================================
from __future__ import annotations
import streamlit as st

from substock_core.errors import ErrorContext, safe_execute
from substock_core.inventory import drug_choices
from substock_core.ui.page import bootstrap_page, refresh_after_write

ctx = bootstrap_page("Settings", "⚙️", admin_only=True)
config_service = st.session_state["config_service"]
config = ctx.live.config

st.title("Settings")

tab_drugs, tab_requesters = st.tabs(["💊 Drug settings", "👤 Requesters"])

# ============================================================================
# DRUG SETTINGS
# ============================================================================
with tab_drugs:
    choices = drug_choices(ctx.live.inventory)
    if not choices:
        st.info("No drugs in the ledger yet.")
    else:
        code, name = st.selectbox(
            "Drug",
            choices,
            format_func=lambda pair: f"{pair[1]} ({pair[0]})",
        )
        cabinet_now = config.cabinet_for(code)
        options = list(ctx.settings.cabinet_options)
        if cabinet_now not in options:
            options.append(cabinet_now)

        with st.form("drug_config_form"):
            min_stock = st.number_input(
                "Minimum stock",
                min_value=0,
                step=1,
                value=int(config.min_stock_for(code)),
                help="Lots at or below this balance are flagged and suggested for reorder.",
            )
            cabinet = st.selectbox("Cabinet", options, index=options.index(cabinet_now))
            submitted = st.form_submit_button("Save", type="primary")

        if submitted:
            saved = safe_execute(
                config_service.save_drug_config,
                code, min_stock, cabinet,
                default=False,
                error_message="Could not save drug settings",
            )
            if saved:
                st.toast(f"Saved {name}: minimum {min_stock}, cabinet {cabinet}")
                refresh_after_write(ctx)

# ============================================================================
# REQUESTERS
# ============================================================================
with tab_requesters:
    with st.form("add_requester_form", clear_on_submit=True):
        new_name = st.text_input("Name")
        added = st.form_submit_button("Add requester")

    if added:
        ok = safe_execute(
            config_service.add_requester,
            new_name,
            default=False,
            error_message="Could not add requester",
        )
        if ok:
            refresh_after_write(ctx)
        elif not new_name.strip():
            st.warning("Enter a name first.")

    if not config.requesters:
        st.caption("No requesters yet.")
    for requester in config.requesters:
        c_name, c_remove = st.columns([5, 1])
        c_name.write(requester.name)
        if c_remove.button("Remove", key=f"remove_requester_{requester.id}"):
            with ErrorContext(f"Removing requester {requester.name}") as op:
                config_service.remove_requester(requester.id)
            if not op.failed:
                refresh_after_write(ctx)
