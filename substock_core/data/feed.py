# =============================================================================
# substock_core/data/feed.py
# Push-based snapshot feeds and the live inventory view over them
# =============================================================================
"""
Feeds deliver full snapshots (never deltas) of the ledger and the
configuration. ``LiveInventory`` subscribes to both and recomputes the whole
inventory from scratch on every emission.

Usage:
    ledger_feed, config_feed = Feed(), Feed()
    live = LiveInventory(ledger_feed, config_feed)
    ledger_feed.publish(records)
    config_feed.publish(snapshot)
    live.inventory  # -> List[InventoryItem]
"""

from __future__ import annotations
from datetime import datetime
from typing import Callable, Generic, List, Optional, Sequence, TypeVar

from substock_core.inventory import (
    ConfigSnapshot,
    InventoryItem,
    LedgerRecord,
    compute_inventory,
)
from substock_core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Feed(Generic[T]):
    """Latest-value feed with subscribe/publish semantics."""

    def __init__(self, name: str = "feed"):
        self.name = name
        self._latest: Optional[T] = None
        self._has_value = False
        self._callbacks: List[Callable[[T], None]] = []

    @property
    def latest(self) -> Optional[T]:
        return self._latest

    @property
    def has_value(self) -> bool:
        return self._has_value

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register a callback and replay the latest value to it.

        Returns:
            Function that removes the subscription
        """
        if callback not in self._callbacks:
            self._callbacks.append(callback)
        if self._has_value:
            callback(self._latest)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def publish(self, value: T) -> None:
        """Store a new full snapshot and notify every subscriber."""
        self._latest = value
        self._has_value = True
        for callback in list(self._callbacks):
            try:
                callback(value)
            except Exception as e:
                logger.error(f"Error in {self.name} subscriber: {e}", exc_info=True)


class LiveInventory:
    """Inventory state kept current from a ledger feed and a config feed."""

    def __init__(
        self,
        ledger_feed: Feed[Sequence[LedgerRecord]],
        config_feed: Feed[ConfigSnapshot],
        clock: Callable[[], datetime] = datetime.now,
    ):
        self._clock = clock
        self.records: Sequence[LedgerRecord] = ()
        self.config = ConfigSnapshot()
        self.inventory: List[InventoryItem] = []

        self._unsubscribers = [
            ledger_feed.subscribe(self._on_ledger),
            config_feed.subscribe(self._on_config),
        ]

    def _on_ledger(self, records: Sequence[LedgerRecord]) -> None:
        self.records = tuple(records)
        self.refresh()

    def _on_config(self, config: ConfigSnapshot) -> None:
        self.config = config
        self.refresh()

    def refresh(self, now: Optional[datetime] = None) -> List[InventoryItem]:
        """Recompute everything from the latest snapshots."""
        self.inventory = compute_inventory(self.records, self.config, now or self._clock())
        logger.debug(
            f"Inventory recomputed: {len(self.records)} records -> {len(self.inventory)} lots"
        )
        return self.inventory

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
