# marine_shop/services/events.py
"""
Admin live updates.

A ``Notifier`` hands every published event to its subscribers. The admin API
streams them over Server-Sent Events; admin pages that cannot hold an SSE
connection poll the order list instead.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Protocol

logger = logging.getLogger(__name__)

Event = Dict[str, Any]
Unsubscribe = Callable[[], None]


class Notifier(Protocol):
    def subscribe(self, on_event: Callable[[Event], None]) -> Unsubscribe: ...

    def publish(self, event: Event) -> None: ...


class InProcessNotifier:
    """Fan-out to callbacks registered in this process."""

    def __init__(self) -> None:
        self._subscribers: List[Callable[[Event], None]] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, on_event: Callable[[Event], None]) -> Unsubscribe:
        self._subscribers.append(on_event)

        def unsubscribe() -> None:
            if on_event in self._subscribers:
                self._subscribers.remove(on_event)

        return unsubscribe

    def publish(self, event: Event) -> None:
        for cb in list(self._subscribers):
            try:
                cb(event)
            except Exception:
                # one broken subscriber must not block the rest
                logger.exception("event subscriber failed")


def format_sse(event: Event) -> str:
    return f"event: {event.get('type', 'message')}\ndata: {json.dumps(event, default=str)}\n\n"


async def sse_stream(
    notifier: Notifier,
    is_disconnected: Callable[[], Any],
    heartbeat: float = 15.0,
) -> AsyncIterator[str]:
    """Yield SSE frames for every event until the client goes away."""
    queue: asyncio.Queue[Event] = asyncio.Queue()
    unsubscribe = notifier.subscribe(queue.put_nowait)
    try:
        yield ": connected\n\n"
        while True:
            if await is_disconnected():
                break
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat)
            except asyncio.TimeoutError:
                yield ": keep-alive\n\n"
                continue
            yield format_sse(event)
    finally:
        unsubscribe()


# process-wide instance used by the routes
notifier = InProcessNotifier()
