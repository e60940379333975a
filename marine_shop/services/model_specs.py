# marine_shop/services/model_specs.py
from __future__ import annotations

from typing import Awaitable, Callable, Dict, List, Optional

import asyncpg

from ..db import get_pool
from ..errors import NotFound
from ..schemas.catalog import ModelSpecOut


def _row_to_spec(row) -> ModelSpecOut:
    return ModelSpecOut(
        modelName=row["model_name"],
        specifications=row["specifications"] or {},
        updatedAt=row["updated_at"],
    )


class ModelSpecStore:
    """Detailed per-model specification sheets keyed by model name."""

    def __init__(self, pool_getter: Callable[[], Awaitable[asyncpg.Pool]] = get_pool):
        self._get_pool = pool_getter

    async def get(self, model_name: str) -> Optional[ModelSpecOut]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT model_name, specifications, updated_at FROM model_specifications "
                "WHERE model_name = $1",
                model_name,
            )
        return _row_to_spec(row) if row else None

    async def list(self) -> List[ModelSpecOut]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT model_name, specifications, updated_at FROM model_specifications "
                "ORDER BY model_name"
            )
        return [_row_to_spec(r) for r in rows]

    async def upsert(self, model_name: str, specifications: Dict[str, str]) -> ModelSpecOut:
        name = model_name.strip()
        if not name:
            raise ValueError("model name is required")
        # blank values are not shown on the model page, so they are not stored
        specs = {
            k.strip(): str(v).strip()
            for k, v in specifications.items()
            if k.strip() and str(v).strip()
        }
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO model_specifications (model_name, specifications, updated_at)
                VALUES ($1, $2, NOW())
                ON CONFLICT (model_name)
                DO UPDATE SET specifications = EXCLUDED.specifications, updated_at = NOW()
                RETURNING model_name, specifications, updated_at
                """,
                name,
                specs,
            )
        return _row_to_spec(row)

    async def delete(self, model_name: str) -> None:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval(
                "DELETE FROM model_specifications WHERE model_name = $1 RETURNING id", model_name
            )
        if deleted is None:
            raise NotFound("model specification", model_name)
