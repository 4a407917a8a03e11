# =============================================================================
# substock_core/ui/page.py
# Common page setup: config, logging, login, sidebar, store sync
# =============================================================================

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

import streamlit as st

from substock_core.auth import is_privileged_user, render_sidebar, require_authentication
from substock_core.config import SubStockConfig
from substock_core.data.feed import LiveInventory
from substock_core.data.sync import StoreSync
from substock_core.errors import SubStockError, handle_error
from substock_core.logging import setup_logging
from substock_core.state.session import get_settings, get_store, init_state
from .theme import apply_css


@dataclass
class PageContext:
    settings: SubStockConfig
    sync: StoreSync
    live: LiveInventory
    privileged: bool
    authenticator: Any


@st.cache_resource
def _configure_logging() -> bool:
    setup_logging()
    return True


def bootstrap_page(title: str, icon: str, admin_only: bool = False) -> PageContext:
    """Run at the top of every page; stops the script if access is denied."""
    st.set_page_config(page_title=f"{title} - SubStock RH", page_icon=icon, layout="wide")
    _configure_logging()
    init_state()

    try:
        settings = get_settings()
        authenticator = require_authentication()
    except SubStockError as e:
        handle_error(e)
        st.stop()

    privileged = is_privileged_user(settings.admin_emails)
    apply_css(st.session_state["dark_mode"])
    render_sidebar(authenticator, privileged)

    if admin_only and not privileged:
        st.warning("This page is available to pharmacy administrators only.")
        st.stop()

    try:
        sync, live = get_store()
    except Exception as e:
        handle_error(e, user_message="Could not load data from the store")
        st.stop()

    return PageContext(settings, sync, live, privileged, authenticator)


def refresh_after_write(ctx: PageContext) -> None:
    """Skip the polling TTL and rerun so the page shows the user's own write."""
    ctx.sync.invalidate()
    st.rerun()
