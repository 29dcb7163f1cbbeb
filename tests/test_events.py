"""Tests for the records changed notifier."""

import pytest

from vibecheck.services.storage import RecordsChangedNotifier


class TestRecordsChangedNotifier:
    """Tests for explicit subscription and best-effort delivery."""

    @pytest.mark.asyncio
    async def test_publish_calls_subscribers_in_order(self):
        notifier = RecordsChangedNotifier()
        calls = []
        notifier.subscribe(lambda: calls.append("first"))
        notifier.subscribe(lambda: calls.append("second"))

        await notifier.publish()
        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_async_subscribers_are_awaited(self):
        notifier = RecordsChangedNotifier()
        calls = []

        @notifier.subscribe
        async def refresh():
            calls.append("refreshed")

        await notifier.publish()
        assert calls == ["refreshed"]

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        notifier = RecordsChangedNotifier()
        calls = []

        def callback():
            calls.append("called")

        notifier.subscribe(callback)
        notifier.unsubscribe(callback)
        await notifier.publish()
        assert calls == []
        assert notifier.subscriber_count == 0

    def test_unsubscribe_unknown_is_noop(self):
        notifier = RecordsChangedNotifier()
        notifier.unsubscribe(lambda: None)
        assert notifier.subscriber_count == 0

    def test_subscribe_twice_registers_once(self):
        notifier = RecordsChangedNotifier()

        def callback():
            pass

        notifier.subscribe(callback)
        notifier.subscribe(callback)
        assert notifier.subscriber_count == 1

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_stop_delivery(self):
        """Test a broken subscriber is skipped and the rest still run."""
        notifier = RecordsChangedNotifier()
        calls = []

        def broken():
            raise RuntimeError("view went away")

        async def broken_async():
            raise RuntimeError("also gone")

        notifier.subscribe(broken)
        notifier.subscribe(broken_async)
        notifier.subscribe(lambda: calls.append("still called"))

        await notifier.publish()
        assert calls == ["still called"]

    @pytest.mark.asyncio
    async def test_subscriber_may_unsubscribe_itself(self):
        notifier = RecordsChangedNotifier()
        calls = []

        def once():
            calls.append("once")
            notifier.unsubscribe(once)

        notifier.subscribe(once)
        await notifier.publish()
        await notifier.publish()
        assert calls == ["once"]

    @pytest.mark.asyncio
    async def test_notify_schedules_delivery(self):
        """Test notify returns at once and drain waits for delivery."""
        notifier = RecordsChangedNotifier()
        calls = []
        notifier.subscribe(lambda: calls.append("first"))
        notifier.subscribe(lambda: calls.append("second"))

        notifier.notify()
        assert calls == []

        await notifier.drain()
        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_notify_without_subscribers_schedules_nothing(self):
        notifier = RecordsChangedNotifier()
        notifier.notify()
        await notifier.drain()
        assert notifier.subscriber_count == 0
