# marine_shop/services/queries.py
from __future__ import annotations

from typing import Awaitable, Callable, List

import asyncpg

from ..db import get_pool
from ..errors import NotFound
from ..schemas.queries import QueryIn, QueryOut
from .products import db_id


def _row_to_query(row) -> QueryOut:
    return QueryOut(
        id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        phone=row["phone"],
        message=row["message"],
        createdAt=row["created_at"],
    )


def clean_query(payload: QueryIn) -> QueryIn:
    """
    Trim the contact form fields:
      { name, email, phone?, message }
    """
    name = (payload.name or "").strip()
    email = (payload.email or "").strip()
    message = (payload.message or "").strip()
    phone = (payload.phone or "").strip() or None

    if not name or not email or not message:
        raise ValueError("Name, email, and message are required")
    return QueryIn(name=name, email=email, phone=phone, message=message)


class QueryStore:
    """Contact and rental-partner inquiries."""

    def __init__(self, pool_getter: Callable[[], Awaitable[asyncpg.Pool]] = get_pool):
        self._get_pool = pool_getter

    async def create(self, payload: QueryIn) -> QueryOut:
        q = clean_query(payload)
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                """
                INSERT INTO queries (name, email, phone, message)
                VALUES ($1, $2, $3, $4)
                RETURNING id, name, email, phone, message, created_at
                """,
                q.name,
                q.email,
                q.phone,
                q.message,
            )
        return _row_to_query(row)

    async def list(self, limit: int = 500) -> List[QueryOut]:
        """Return latest queries (newest first)."""
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(
                "SELECT id, name, email, phone, message, created_at FROM queries "
                "ORDER BY created_at DESC, id DESC LIMIT $1",
                limit,
            )
        return [_row_to_query(r) for r in rows]

    async def delete(self, query_id: str) -> None:
        qid = db_id(query_id, "query")
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval("DELETE FROM queries WHERE id = $1 RETURNING id", qid)
        if deleted is None:
            raise NotFound("query", query_id)
