"""
Authentication module for SubStock RH.

Login is handled by streamlit-authenticator with credentials kept in
Streamlit secrets. The rest of the app only reads one fact from here:
whether the signed-in user is privileged (may upload, delete ledger rows
and edit settings).

Expected secrets.toml format:

    [auth]
    cookie_name = "substock_auth"
    cookie_key = "change-me"
    cookie_expiry_days = 1

    [auth.credentials.usernames.pharmacist]
    name = "Head Pharmacist"
    email = "pharmacist@hospital.go.th"
    password = "$2b$12$..."      # bcrypt hash, see hash_password()
    roles = ["admin"]
"""

from typing import Any, Dict, Optional

import streamlit as st
import streamlit_authenticator as stauth

from substock_core.errors import ConfigurationError

ADMIN_ROLE = "admin"


# ==================== AUTHENTICATOR SETUP ====================

def _to_plain(value: Any) -> Any:
    """Copy st.secrets sections into mutable dicts (the authenticator writes to them)."""
    if hasattr(value, "items"):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


def get_user_credentials() -> Dict[str, Any]:
    if "auth" not in st.secrets or "credentials" not in st.secrets["auth"]:
        raise ConfigurationError(
            "Login credentials not found in .streamlit/secrets.toml",
            config_key="auth.credentials",
        )
    return _to_plain(st.secrets["auth"]["credentials"])


def get_authenticator():
    """
    Creates and returns a configured streamlit-authenticator instance.

    Returns:
        stauth.Authenticate: Configured authenticator instance
    """
    if "authenticator" not in st.session_state:
        auth = st.secrets["auth"]
        st.session_state["authenticator"] = stauth.Authenticate(
            get_user_credentials(),
            auth.get("cookie_name", "substock_auth"),
            auth["cookie_key"],
            float(auth.get("cookie_expiry_days", 1)),
        )
    return st.session_state["authenticator"]


# ==================== HELPER FUNCTIONS ====================

def check_authentication() -> bool:
    return st.session_state.get("authentication_status") is True


def get_user_name() -> Optional[str]:
    if not check_authentication():
        return None
    return st.session_state.get("name")


def is_privileged_user(admin_emails=()) -> bool:
    """
    True for users with the admin role or a configured admin email.

    Args:
        admin_emails: Lower-cased addresses from SubStockConfig.admin_emails
    """
    if not check_authentication():
        return False

    roles = st.session_state.get("roles") or []
    if ADMIN_ROLE in roles:
        return True

    email = (st.session_state.get("email") or "").strip().lower()
    return bool(email) and email in admin_emails


# ==================== PAGE PROTECTION ====================

def require_authentication():
    """
    Show the login form and stop the page until the user is signed in.
    """
    authenticator = get_authenticator()
    authenticator.login(location="main")

    status = st.session_state.get("authentication_status")
    if status is False:
        st.error("Username or password is incorrect")
    if status is not True:
        st.stop()

    return authenticator


# ==================== PASSWORD HASHING UTILITY ====================

def hash_password(password: str) -> str:
    """
    Hash a password for the [auth.credentials] section.

    Example:
        >>> hash_password("mypassword123")
        '$2b$12$...'
    """
    return stauth.Hasher.hash(password)


if __name__ == "__main__":
    import sys

    for plain in sys.argv[1:]:
        print(f"{plain}: {hash_password(plain)}")
