# marine_shop/services/shop_settings.py
from __future__ import annotations

from typing import Awaitable, Callable

import asyncpg

from ..db import get_pool

LOGO_KEY = "shop_logo"


class ShopSettingsStore:
    def __init__(self, pool_getter: Callable[[], Awaitable[asyncpg.Pool]] = get_pool):
        self._get_pool = pool_getter

    async def get_logo(self) -> str:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            value = await conn.fetchval("SELECT value FROM settings WHERE key = $1", LOGO_KEY)
        return value or ""

    async def set_logo(self, logo: str) -> None:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            await conn.execute(
                """
                INSERT INTO settings (key, value, updated_at)
                VALUES ($1, $2, NOW())
                ON CONFLICT (key) DO UPDATE SET value = EXCLUDED.value, updated_at = NOW()
                """,
                LOGO_KEY,
                logo or "",
            )
