# marine_shop/services/catalog_cache.py
from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional


class CatalogCache:
    """
    Read-through cache for the public catalog listings.

    There is no TTL: an entry is authoritative only until the next admin write,
    and every product or brand mutation must call ``invalidate``.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, Any] = {}
        self._lock = asyncio.Lock()

    async def get(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        if key in self._entries:
            return self._entries[key]
        async with self._lock:
            if key not in self._entries:
                self._entries[key] = await loader()
            return self._entries[key]

    def invalidate(self, key: Optional[str] = None) -> None:
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


catalog_cache = CatalogCache()
