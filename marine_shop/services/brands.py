# marine_shop/services/brands.py
from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

import asyncpg

from ..db import get_pool
from ..errors import DuplicateBrand, NotFound
from ..schemas.catalog import BrandIn, BrandOut
from .products import db_id

logger = logging.getLogger(__name__)


def _row_to_brand(row) -> BrandOut:
    return BrandOut(id=str(row["id"]), name=row["name"], logo=row["logo"] or "")


class BrandStore:
    def __init__(self, pool_getter: Callable[[], Awaitable[asyncpg.Pool]] = get_pool):
        self._get_pool = pool_getter

    async def list(self) -> List[BrandOut]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch("SELECT id, name, logo FROM brands ORDER BY name")
        return [_row_to_brand(r) for r in rows]

    async def get_by_name(self, name: str) -> Optional[BrandOut]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow("SELECT id, name, logo FROM brands WHERE name = $1", name)
        return _row_to_brand(row) if row else None

    async def create(self, payload: BrandIn) -> BrandOut:
        name = payload.name.strip()
        if not name:
            raise ValueError("name is required")
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    "INSERT INTO brands (name, logo) VALUES ($1, $2) RETURNING id, name, logo",
                    name,
                    payload.logo or "",
                )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateBrand(name) from e
        logger.info("created brand %s", name)
        return _row_to_brand(row)

    async def update(self, brand_id: str, payload: BrandIn) -> BrandOut:
        bid = db_id(brand_id, "brand")
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    """
                    UPDATE brands SET name = $1, logo = $2, updated_at = NOW()
                    WHERE id = $3
                    RETURNING id, name, logo
                    """,
                    payload.name.strip(),
                    payload.logo or "",
                    bid,
                )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateBrand(payload.name) from e
        if not row:
            raise NotFound("brand", brand_id)
        return _row_to_brand(row)

    async def delete(self, brand_id: str) -> None:
        bid = db_id(brand_id, "brand")
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval("DELETE FROM brands WHERE id = $1 RETURNING id", bid)
        if deleted is None:
            raise NotFound("brand", brand_id)
