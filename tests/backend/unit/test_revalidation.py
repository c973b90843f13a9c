"""
Unit tests for core.revalidation module.
Tests listener subscription and revalidation broadcasting.
"""
import asyncio
from devflow.core.revalidation import RevalidationChannel


class TestSubscription:

    def test_subscribe_is_idempotent(self):
        channel = RevalidationChannel()
        seen = []
        channel.subscribe(seen.append)
        channel.subscribe(seen.append)
        asyncio.run(channel.revalidate("/"))
        assert seen == ["/"]

    def test_unsubscribe_stops_notifications(self):
        channel = RevalidationChannel()
        seen = []
        channel.subscribe(seen.append)
        channel.unsubscribe(seen.append)
        asyncio.run(channel.revalidate("/"))
        assert seen == []

    def test_unsubscribe_unknown_listener_does_not_error(self):
        channel = RevalidationChannel()
        channel.unsubscribe(print)


class TestRevalidate:

    def test_sync_and_async_listeners_are_notified(self):
        channel = RevalidationChannel()
        sync_seen, async_seen = [], []

        async def async_listener(path: str):
            async_seen.append(path)

        channel.subscribe(sync_seen.append)
        channel.subscribe(async_listener)
        asyncio.run(channel.revalidate("/question/1"))

        assert sync_seen == ["/question/1"]
        assert async_seen == ["/question/1"]

    def test_failing_listener_does_not_block_others(self):
        channel = RevalidationChannel()
        seen = []

        def broken(path: str):
            raise RuntimeError("renderer down")

        channel.subscribe(broken)
        channel.subscribe(seen.append)
        asyncio.run(channel.revalidate("/"))

        assert seen == ["/"]

    def test_records_stale_paths(self):
        channel = RevalidationChannel()
        assert channel.last_revalidated("/") is None

        asyncio.run(channel.revalidate("/"))
        asyncio.run(channel.revalidate("/collection"))

        assert channel.last_revalidated("/") is not None
        assert set(channel.stale_paths) == {"/", "/collection"}
