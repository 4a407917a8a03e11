# =============================================================================
# tests/unit/test_feed.py
# Unit Tests for feeds, live inventory and store polling
# =============================================================================

import pytest
from unittest.mock import MagicMock

from substock_core.data.feed import Feed, LiveInventory
from substock_core.data.sync import StoreSync
from substock_core.inventory import ConfigSnapshot, StockStatus


class TestFeed:
    """Push-based snapshot feed"""

    def test_subscribers_receive_published_values(self):
        feed = Feed("test")
        seen = []
        feed.subscribe(seen.append)

        feed.publish([1])
        feed.publish([1, 2])

        assert seen == [[1], [1, 2]]
        assert feed.latest == [1, 2]

    def test_late_subscriber_gets_latest_value(self):
        feed = Feed("test")
        feed.publish("snapshot")
        seen = []

        feed.subscribe(seen.append)

        assert seen == ["snapshot"]

    def test_no_replay_before_first_publish(self):
        feed = Feed("test")
        seen = []
        feed.subscribe(seen.append)

        assert seen == []
        assert not feed.has_value

    def test_unsubscribe(self):
        feed = Feed("test")
        seen = []
        unsubscribe = feed.subscribe(seen.append)

        unsubscribe()
        feed.publish("ignored")

        assert seen == []

    def test_failing_subscriber_does_not_block_others(self):
        feed = Feed("test")
        seen = []
        feed.subscribe(MagicMock(side_effect=RuntimeError("boom")))
        feed.subscribe(seen.append)

        feed.publish("value")

        assert seen == ["value"]


class TestLiveInventory:
    """Full recompute on each feed emission"""

    def test_recomputes_on_ledger_and_config(self, sample_records, now):
        ledger_feed, config_feed = Feed("ledger"), Feed("config")
        live = LiveInventory(ledger_feed, config_feed, clock=lambda: now)

        assert live.inventory == []

        ledger_feed.publish(sample_records)
        assert len(live.inventory) == 4
        assert live.inventory[0].status == StockStatus.NORMAL

        config_feed.publish(ConfigSnapshot(min_stock={"ABC123": 70}))
        assert live.inventory[0].status == StockStatus.LOW

    def test_republishing_same_snapshot_is_stable(self, sample_records, sample_config, now):
        ledger_feed, config_feed = Feed("ledger"), Feed("config")
        live = LiveInventory(ledger_feed, config_feed, clock=lambda: now)
        config_feed.publish(sample_config)

        ledger_feed.publish(sample_records)
        first = live.inventory
        ledger_feed.publish(sample_records)

        assert live.inventory == first
        assert sum(i.total_in for i in live.inventory) == 335

    def test_close_stops_updates(self, sample_records, now):
        ledger_feed, config_feed = Feed("ledger"), Feed("config")
        live = LiveInventory(ledger_feed, config_feed, clock=lambda: now)
        live.close()

        ledger_feed.publish(sample_records)

        assert live.inventory == []


class FakeClock:
    def __init__(self):
        self.value = 100.0

    def __call__(self):
        return self.value


def _sync(records=(), snapshot=None, ttl=15):
    ledger_service = MagicMock()
    ledger_service.fetch_records.return_value = list(records)
    config_service = MagicMock()
    config_service.fetch_snapshot.return_value = snapshot or ConfigSnapshot()
    clock = FakeClock()
    sync = StoreSync(
        ledger_service, config_service, Feed("ledger"), Feed("config"),
        ttl_seconds=ttl, clock=clock,
    )
    return sync, ledger_service, clock


class TestStoreSync:
    """TTL polling with read-your-writes invalidation"""

    def test_first_poll_publishes(self, sample_records):
        sync, ledger_service, _ = _sync(sample_records)

        assert sync.poll() is True
        assert sync.ledger_feed.latest == sample_records
        assert sync.config_feed.has_value
        ledger_service.fetch_records.assert_called_once()

    def test_fresh_data_is_not_refetched(self):
        sync, ledger_service, clock = _sync()
        sync.poll()

        clock.value += 5
        assert sync.poll() is False
        assert ledger_service.fetch_records.call_count == 1

    def test_refetches_after_ttl(self):
        sync, ledger_service, clock = _sync()
        sync.poll()

        clock.value += 15
        assert sync.poll() is True
        assert ledger_service.fetch_records.call_count == 2

    def test_invalidate_forces_next_poll(self):
        sync, ledger_service, _ = _sync()
        sync.poll()

        sync.invalidate()

        assert sync.is_stale()
        assert sync.poll() is True
        assert ledger_service.fetch_records.call_count == 2

    def test_force(self):
        sync, ledger_service, _ = _sync()
        sync.poll()
        assert sync.poll(force=True) is True

    def test_failed_fetch_publishes_nothing(self):
        sync, ledger_service, _ = _sync()
        ledger_service.fetch_records.side_effect = RuntimeError("store down")

        with pytest.raises(RuntimeError):
            sync.poll()

        assert not sync.ledger_feed.has_value
        assert sync.is_stale()
