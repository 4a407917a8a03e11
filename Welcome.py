from __future__ import annotations
import streamlit as st

from substock_core.errors import error_boundary
from substock_core.services import InventoryService
from substock_core.ui.charts import cabinet_value_bar, status_pie
from substock_core.ui.page import bootstrap_page
from substock_core.ui.theme import kpi_card

# ============================================================================
# PAGE SETUP (login form is shown here until the user signs in)
# ============================================================================
ctx = bootstrap_page("Dashboard", "💊")
dark_mode = st.session_state["dark_mode"]

st.title("Substock Dashboard")
st.caption(f"{ctx.settings.department} · {ctx.settings.hospital_name}")

summary = InventoryService().summarize(ctx.live.inventory)

# ============================================================================
# KPI CARDS
# ============================================================================
c1, c2, c3, c4 = st.columns(4)
with c1:
    kpi_card("Lots in stock", f"{summary.total_items:,}", "blue")
with c2:
    kpi_card("Stock value (THB)", f"{summary.total_value:,.2f}", "green")
with c3:
    kpi_card("Below minimum", f"{summary.low_count:,}", "yellow")
with c4:
    kpi_card("Expired lots", f"{summary.expired_count:,}", "red")

if summary.empty_count or summary.near_expiry_count:
    st.info(
        f"{summary.empty_count} lots are out of stock and "
        f"{summary.near_expiry_count} lots expire within 90 days."
    )

# ============================================================================
# CHARTS
# ============================================================================


@error_boundary(error_message="Stock status chart unavailable")
def render_status_chart():
    st.plotly_chart(status_pie(summary, dark_mode), use_container_width=True)


@error_boundary(error_message="Cabinet value chart unavailable")
def render_cabinet_chart():
    st.plotly_chart(cabinet_value_bar(summary, dark_mode), use_container_width=True)


if summary.total_items:
    left, right = st.columns(2)
    with left:
        render_status_chart()
    with right:
        render_cabinet_chart()
else:
    st.info("No stock movements recorded yet. Upload IN/OUT exports on the Transactions page.")
