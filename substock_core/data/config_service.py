# =============================================================================
# substock_core/data/config_service.py
# Supabase Service for drug settings and requester names
# =============================================================================
"""
Config Service for Supabase Integration

Tables:
    drug_config
        - code: text (primary key)
        - min_stock: int
        - cabinet: text
    requesters
        - id: UUID (auto-generated)
        - name: text
"""

from __future__ import annotations
from typing import Optional

from substock_core.config import SubStockConfig
from substock_core.inventory import ConfigSnapshot, coerce_quantity
from substock_core.logging import get_logger

from .supabase_client import SupabaseService

logger = get_logger(__name__)


class ConfigService:
    """
    Reads the configuration snapshot and forwards settings writes.

    The derivation pipeline only ever sees the ConfigSnapshot; writes here
    are pass-through effects on the store.
    """

    def __init__(self, config: Optional[SubStockConfig] = None, client=None):
        config = config or SubStockConfig()
        self.drugs = SupabaseService(config.drug_config_table, client=client)
        self.requesters = SupabaseService(config.requesters_table, client=client)

    def fetch_snapshot(self) -> ConfigSnapshot:
        snapshot = ConfigSnapshot.from_rows(
            self.drugs.fetch_all(),
            self.requesters.fetch_all(order_by="name"),
        )
        logger.info(
            f"Fetched config: {len(snapshot.min_stock)} drugs, "
            f"{len(snapshot.requesters)} requesters"
        )
        return snapshot

    def save_drug_config(self, code: str, min_stock, cabinet: str) -> bool:
        """
        Persist threshold and cabinet for one drug code.

        Returns:
            False when no drug code was given, True once written
        """
        code = (code or "").strip()
        if not code:
            return False

        self.drugs.upsert(
            {"code": code, "min_stock": coerce_quantity(min_stock), "cabinet": cabinet},
            on_conflict="code",
        )
        logger.info(f"Saved drug config for {code}")
        return True

    def add_requester(self, name: str) -> bool:
        name = (name or "").strip()
        if not name:
            return False
        self.requesters.insert({"name": name})
        logger.info(f"Added requester {name!r}")
        return True

    def remove_requester(self, requester_id: str) -> None:
        self.requesters.delete({"id": requester_id})
        logger.info(f"Removed requester {requester_id}")
