"""
Configuration for SubStock RH.

Holds the fixed thresholds used by the inventory derivation pipeline and the
deployment settings read from Streamlit secrets. The pure inventory modules
take their constants from here; nothing in the pipeline reads secrets.

Expected secrets.toml format:

    [supabase]
    url = "https://your-project.supabase.co"
    key = "your-anon-key"

    [substock]
    admin_emails = ["pharmacist@hospital.go.th"]
    department = "Substock IPD"
    poll_ttl_seconds = 15
"""

from __future__ import annotations
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Tuple

from substock_core.errors import ConfigurationError
from substock_core.logging import get_logger

logger = get_logger(__name__)


# ==================== DERIVATION CONSTANTS ====================
NEAR_EXPIRY_DAYS = 90
LOOKBACK_WEEKS = 4
SUGGESTION_MULTIPLIERS: Tuple[float, float] = (1.2, 1.5)
DEFAULT_CABINET = "Unassigned"
DOC_ID_PREFIX = "REQ"

CABINET_OPTIONS = ["A", "B", "C", "D", "E", "Fridge", "Narcotics"]


@dataclass
class SubStockConfig:
    """Deployment settings for the dashboard."""

    # ==================== STORE ====================
    transactions_table: str = "transactions"
    drug_config_table: str = "drug_config"
    requesters_table: str = "requesters"
    poll_ttl_seconds: int = 15

    # ==================== ACCESS ====================
    admin_emails: List[str] = field(default_factory=list)

    # ==================== DOCUMENTS ====================
    department: str = "Substock IPD"
    hospital_name: str = "Hospital"
    requisition_type: str = "Sub-stock replenishment"
    cabinet_options: List[str] = field(default_factory=lambda: list(CABINET_OPTIONS))

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> SubStockConfig:
        """Build a config from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning(f"Ignoring unknown substock settings: {unknown}")

        config = cls(**{k: v for k, v in values.items() if k in known})

        if not isinstance(config.admin_emails, (list, tuple)):
            raise ConfigurationError(
                "admin_emails must be a list of email addresses",
                config_key="admin_emails",
                expected_type="list[str]",
            )
        if int(config.poll_ttl_seconds) < 0:
            raise ConfigurationError(
                "poll_ttl_seconds must be non-negative",
                config_key="poll_ttl_seconds",
                expected_type="int >= 0",
            )
        config.admin_emails = [str(e).strip().lower() for e in config.admin_emails]
        config.poll_ttl_seconds = int(config.poll_ttl_seconds)
        return config


def load_config() -> SubStockConfig:
    """
    Load settings from the [substock] section of Streamlit secrets.

    Falls back to defaults when the section is missing.
    """
    import streamlit as st

    try:
        section = dict(st.secrets.get("substock", {}))
    except FileNotFoundError:
        # No secrets.toml at all (local runs)
        section = {}

    return SubStockConfig.from_dict(section)
