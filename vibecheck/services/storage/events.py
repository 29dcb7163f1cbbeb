"""
Records Changed Notification

Collaborators that show derived views (dashboard, charts) subscribe here
and refresh when the store reports a mutation. The notifier is created
once by the application and handed to the store; there is no global
broadcast.

Delivery is best effort and does not hold up the store. A failing
subscriber is logged and the rest still get called.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Union

import structlog


Subscriber = Callable[[], Union[None, Awaitable[Any]]]


class RecordsChangedNotifier:
    """Explicit registry of "records changed" subscribers."""

    def __init__(self) -> None:
        self._subscribers: list[Subscriber] = []
        self._pending: set[asyncio.Task] = set()
        self._logger = structlog.get_logger(__name__)

    def subscribe(self, callback: Subscriber) -> Subscriber:
        """
        Register a no-argument callback.

        Coroutine functions are awaited on publish. Returns the callback
        so it can be used as a decorator.
        """
        if callback not in self._subscribers:
            self._subscribers.append(callback)
        return callback

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def publish(self) -> None:
        """Call every subscriber in subscription order."""
        # Snapshot so subscribers may unsubscribe while being notified
        for callback in list(self._subscribers):
            try:
                result = callback()
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                self._logger.warning(
                    "records_changed_subscriber_failed",
                    subscriber=getattr(callback, "__qualname__", repr(callback)),
                    error=str(e),
                )

    def notify(self) -> None:
        """
        Schedule a publish on the running loop and return immediately.

        The task is kept until it finishes so it cannot be garbage
        collected mid-delivery.
        """
        if not self._subscribers:
            return
        task = asyncio.get_running_loop().create_task(self.publish())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every scheduled publish to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending))
