"""Admin live-update fan-out and the catalog cache."""
from __future__ import annotations

import asyncio
import json

from marine_shop.services.catalog_cache import CatalogCache
from marine_shop.services.events import InProcessNotifier, format_sse, sse_stream


def test_subscribe_and_unsubscribe():
    n = InProcessNotifier()
    seen = []
    unsubscribe = n.subscribe(seen.append)
    n.publish({"type": "order.created", "id": "1"})
    unsubscribe()
    n.publish({"type": "order.deleted", "id": "1"})

    assert seen == [{"type": "order.created", "id": "1"}]
    assert n.subscriber_count == 0
    unsubscribe()  # second call is a no-op


def test_failing_subscriber_does_not_block_others(caplog):
    n = InProcessNotifier()
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    n.subscribe(broken)
    n.subscribe(seen.append)
    n.publish({"type": "order.status"})

    assert seen == [{"type": "order.status"}]
    assert "event subscriber failed" in caplog.text


def test_format_sse():
    frame = format_sse({"type": "order.created", "id": "7"})
    assert frame.startswith("event: order.created\ndata: ")
    assert frame.endswith("\n\n")
    assert json.loads(frame.split("data: ", 1)[1]) == {"type": "order.created", "id": "7"}


def test_sse_stream_delivers_events_then_stops():
    n = InProcessNotifier()
    state = {"disconnected": False}

    async def is_disconnected():
        return state["disconnected"]

    async def run():
        frames = []
        stream = sse_stream(n, is_disconnected, heartbeat=0.01)
        frames.append(await stream.__anext__())
        n.publish({"type": "order.created", "id": "1"})
        frames.append(await stream.__anext__())
        frames.append(await stream.__anext__())  # heartbeat, queue is empty
        state["disconnected"] = True
        async for frame in stream:
            frames.append(frame)
        return frames

    frames = asyncio.run(run())
    assert frames[0] == ": connected\n\n"
    assert frames[1].startswith("event: order.created")
    assert frames[2] == ": keep-alive\n\n"
    assert len(frames) == 3
    assert n.subscriber_count == 0


def test_cache_reads_through_once_until_invalidated():
    cache = CatalogCache()
    calls = []

    async def loader():
        calls.append(1)
        return ["A"]

    async def run():
        first = await cache.get("products", loader)
        second = await cache.get("products", loader)
        cache.invalidate("products")
        third = await cache.get("products", loader)
        return first, second, third

    first, second, third = asyncio.run(run())
    assert first == second == third == ["A"]
    assert len(calls) == 2


def test_cache_invalidate_all():
    cache = CatalogCache()

    async def loader():
        return []

    async def run():
        await cache.get("products", loader)
        await cache.get("brands", loader)

    asyncio.run(run())
    assert "brands" in cache
    assert len(cache) == 2
    cache.invalidate()
    assert "products" not in cache and "brands" not in cache
    assert len(cache) == 0
