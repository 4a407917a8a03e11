"""
Authentication module for SubStock RH.
Provides streamlit-authenticator login and the privileged-user check.
"""

from .authentication import (
    get_authenticator,
    check_authentication,
    is_privileged_user,
    require_authentication,
    get_user_name,
)
from .navigation import render_sidebar

__all__ = [
    "get_authenticator",
    "check_authentication",
    "is_privileged_user",
    "require_authentication",
    "get_user_name",
    "render_sidebar",
]
