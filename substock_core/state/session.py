import streamlit as st

from substock_core.config import load_config
from substock_core.data.config_service import ConfigService
from substock_core.data.feed import Feed, LiveInventory
from substock_core.data.ledger_service import LedgerService
from substock_core.data.sync import StoreSync

# Central registry for session-state keys used across the app.
SESSION_DEFAULTS = {
    "dark_mode": False,
    "upload_mode": "IN",
    "requisition_editor": None,
    "requisition_requester": "",
    "print_document": None,
    "debug_mode": False,
}


def init_state():
    """Initialize session state with defaults."""
    for k, v in SESSION_DEFAULTS.items():
        if k not in st.session_state:
            st.session_state[k] = v


def get_settings():
    if "settings" not in st.session_state:
        st.session_state["settings"] = load_config()
    return st.session_state["settings"]


def get_store():
    """
    Per-session wiring of store services, feeds and the live inventory.

    Returns:
        (StoreSync, LiveInventory)
    """
    if "store_sync" not in st.session_state:
        settings = get_settings()
        ledger_feed, config_feed = Feed("ledger"), Feed("config")
        ledger_service = LedgerService(settings)
        config_service = ConfigService(settings)
        st.session_state["ledger_service"] = ledger_service
        st.session_state["config_service"] = config_service
        st.session_state["live_inventory"] = LiveInventory(ledger_feed, config_feed)
        st.session_state["store_sync"] = StoreSync(
            ledger_service,
            config_service,
            ledger_feed,
            config_feed,
            ttl_seconds=settings.poll_ttl_seconds,
        )

    sync = st.session_state["store_sync"]
    sync.poll()
    return sync, st.session_state["live_inventory"]


def end_requisition_session():
    """Discard the working requisition (going back or after printing)."""
    st.session_state["requisition_editor"] = None
    st.session_state["requisition_requester"] = ""

