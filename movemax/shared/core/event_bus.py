"""In-process event bus for shell notifications.

Toasts, navigation changes, sign-in/out and AI analysis progress are published
here. Handlers are coroutines and every delivery runs as its own task, so the
publisher never waits on a handler.
"""

from __future__ import annotations

import asyncio
import logging
from collections import defaultdict
from typing import Any, Awaitable, Callable, Dict, List, Set, TypeAlias

EventPayload: TypeAlias = Dict[str, Any]
EventHandler: TypeAlias = Callable[[EventPayload], Awaitable[None]]


class EventBus:
    """Topic-keyed publish/subscribe hub.

    Registration and publishing never await while touching the handler table,
    so no lock is needed on the single event loop.
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._inflight: Set[asyncio.Task] = set()
        self._logger = logging.getLogger(__name__)

    async def subscribe(self, topic: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``topic``; registering twice is a no-op."""
        handlers = self._handlers[topic]
        if handler not in handlers:
            handlers.append(handler)
            self._logger.debug(f"Subscribed {getattr(handler, '__qualname__', handler)} to '{topic}'")

    async def unsubscribe(self, topic: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(topic)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def subscriber_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, ()))

    @property
    def pending(self) -> int:
        """Deliveries scheduled but not yet finished."""
        return len(self._inflight)

    async def publish(self, topic: str, payload: EventPayload) -> int:
        """Schedule delivery of ``payload`` to every handler of ``topic``.

        Returns:
            Number of handlers the event was scheduled for
        """
        handlers = tuple(self._handlers.get(topic, ()))
        if not handlers:
            self._logger.debug(f"No subscribers for '{topic}'")
            return 0

        for handler in handlers:
            task = asyncio.create_task(self._deliver(topic, handler, payload), name=f"event:{topic}")
            self._inflight.add(task)
            task.add_done_callback(self._inflight.discard)
        return len(handlers)

    async def wait_until_idle(self, timeout: float = 10.0) -> bool:
        """Wait until no delivery is in flight, including ones scheduled meanwhile.

        Returns:
            False if ``timeout`` seconds passed first
        """
        try:
            async with asyncio.timeout(timeout):
                while self._inflight:
                    await asyncio.gather(*self._inflight, return_exceptions=True)
        except TimeoutError:
            self._logger.warning(f"EventBus: {self.pending} delivery(ies) still running after {timeout}s")
            return False
        return True

    async def _deliver(self, topic: str, handler: EventHandler, payload: EventPayload) -> None:
        try:
            await handler(payload)
        except Exception:
            name = getattr(handler, "__qualname__", repr(handler))
            self._logger.exception(f"EventBus handler {name} failed on '{topic}'")

    def clear(self) -> None:
        """Drop every subscription; in-flight deliveries still complete."""
        self._handlers.clear()
