"""
Unit tests for the change feed that backs the SSE stream.

Usage:
    pytest tests/test_change_feed.py -v
"""
import asyncio

import pytest

from server.moodcraft_api.services.change_feed import END_OF_STREAM, ChangeFeed, EntriesChanged


class TestChangeFeedPublish:
    """Test fan-out to subscriber queues."""

    def test_publish_reaches_every_queue(self):
        feed = ChangeFeed()
        first = feed.open_queue()
        second = feed.open_queue()

        event = feed.publish()

        assert first.get_nowait() is event
        assert second.get_nowait() is event
        assert event.event == "entries-changed"

    def test_full_queue_drops_subscriber(self):
        feed = ChangeFeed(max_queue_size=1)
        slow = feed.open_queue()

        feed.publish()
        feed.publish()

        stats = feed.get_stats()
        assert stats["dropped_subscribers"] == 1
        assert stats["current_subscribers"] == 0
        assert slow.get_nowait() is END_OF_STREAM
        assert slow.empty()

    def test_stats_track_publishes_and_subscribers(self):
        feed = ChangeFeed()
        queue = feed.open_queue()
        feed.publish()
        feed.close_queue(queue)

        assert feed.get_stats() == {
            "total_published": 1,
            "total_subscribers": 1,
            "dropped_subscribers": 0,
            "current_subscribers": 0,
        }

    def test_event_serializes(self):
        data = EntriesChanged(event="entries-changed").to_dict()
        assert set(data) == {"id", "event", "timestamp"}


class TestChangeFeedStore:
    """Test wiring to the Entry Store's change signal."""

    def test_store_append_publishes(self, store, make_entry):
        feed = ChangeFeed()
        feed.attach(store)
        queue = feed.open_queue()

        store.append(make_entry())

        assert isinstance(queue.get_nowait(), EntriesChanged)
        assert feed.get_stats()["total_published"] == 1

    def test_failed_append_publishes_nothing(self, make_entry):
        from mood_engine.storage import MemoryBackend
        from mood_engine.store import EntryStore

        store = EntryStore(MemoryBackend(quota_bytes=10))
        feed = ChangeFeed()
        feed.attach(store)

        store.append(make_entry())

        assert feed.get_stats()["total_published"] == 0

    def test_detach_stops_publishing(self, store, make_entry):
        feed = ChangeFeed()
        feed.attach(store)
        feed.detach()

        store.append(make_entry())

        assert feed.get_stats()["total_published"] == 0
        assert store.notifier.listener_count == 0


class TestChangeFeedSubscribe:
    """Test the async generator interface."""

    @pytest.mark.asyncio
    async def test_subscriber_receives_event(self):
        feed = ChangeFeed()
        stream = feed.subscribe()
        pending = asyncio.ensure_future(stream.__anext__())
        await asyncio.sleep(0)

        published = feed.publish()
        received = await asyncio.wait_for(pending, timeout=1.0)

        assert received is published
        await stream.aclose()
        assert feed.get_stats()["current_subscribers"] == 0

    @pytest.mark.asyncio
    async def test_dropped_subscriber_stream_ends(self):
        feed = ChangeFeed(max_queue_size=1)
        received = []

        async def consume():
            async for change in feed.subscribe():
                received.append(change)

        consumer = asyncio.ensure_future(consume())
        await asyncio.sleep(0)

        feed.publish()
        feed.publish()
        await asyncio.wait_for(consumer, timeout=1.0)

        assert consumer.done()
        assert feed.get_stats()["dropped_subscribers"] == 1
        assert feed.get_stats()["current_subscribers"] == 0
