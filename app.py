"""
Entry point kept for hosts that expect app.py.

The dashboard and login live in Welcome.py.
"""

import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

import Welcome  # noqa: E402,F401
