"""
Sidebar shared by every page: signed-in user, theme toggle and logout.
"""

import streamlit as st

from .authentication import get_user_name


def render_sidebar(authenticator, privileged: bool):
    """
    Draw the sidebar for a signed-in user.

    Args:
        authenticator: streamlit-authenticator instance from require_authentication()
        privileged: whether admin-only actions are enabled
    """
    with st.sidebar:
        st.markdown("### SubStock RH")
        st.caption(get_user_name() or "")
        if privileged:
            st.caption("Administrator")
            st.toggle("Show error details", key="debug_mode")

        st.toggle("Dark mode", key="dark_mode")
        authenticator.logout("Logout", location="sidebar")
