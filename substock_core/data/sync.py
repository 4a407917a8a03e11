# =============================================================================
# substock_core/data/sync.py
# Poll the store and publish full snapshots into the feeds
# =============================================================================

from __future__ import annotations
import time
from typing import Callable, Optional, Sequence

from substock_core.inventory import ConfigSnapshot, LedgerRecord
from substock_core.logging import get_logger, LogContext

from .config_service import ConfigService
from .feed import Feed
from .ledger_service import LedgerService

logger = get_logger(__name__)


class StoreSync:
    """
    Bridges Supabase to the ledger and config feeds.

    Streamlit reruns call ``poll()``; the store is only re-read once the
    TTL has passed or after ``invalidate()`` (used right after this user
    writes, so they always see their own changes).
    """

    def __init__(
        self,
        ledger_service: LedgerService,
        config_service: ConfigService,
        ledger_feed: Feed[Sequence[LedgerRecord]],
        config_feed: Feed[ConfigSnapshot],
        ttl_seconds: float = 15,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ledger_service = ledger_service
        self.config_service = config_service
        self.ledger_feed = ledger_feed
        self.config_feed = config_feed
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._last_poll: Optional[float] = None

    def is_stale(self) -> bool:
        if self._last_poll is None:
            return True
        return self._clock() - self._last_poll >= self.ttl_seconds

    def invalidate(self) -> None:
        self._last_poll = None

    def poll(self, force: bool = False) -> bool:
        """
        Re-read both tables and publish if stale.

        Returns:
            True if new snapshots were published
        """
        if not force and not self.is_stale():
            return False

        with LogContext(logger, "Syncing ledger and config from store"):
            records = self.ledger_service.fetch_records()
            snapshot = self.config_service.fetch_snapshot()

        self._last_poll = self._clock()
        self.ledger_feed.publish(records)
        self.config_feed.publish(snapshot)
        return True
