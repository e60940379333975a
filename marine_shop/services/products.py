# marine_shop/services/products.py
from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, List, Optional

import asyncpg

from ..db import get_pool
from ..errors import InvalidDirection, NotFound
from ..schemas.products import Product, ProductIn
from .options import parse_option_editor_payload

logger = logging.getLogger(__name__)

PoolGetter = Callable[[], Awaitable[asyncpg.Pool]]

_COLUMNS = """
    id, name, category, price, stock, description, standard_equipment, specs,
    images, options, display_order, specs_columns
"""


def db_id(raw: str, kind: str = "product") -> int:
    """Path ids are strings on the wire and BIGINTs in Postgres."""
    try:
        value = int(str(raw).strip())
    except (TypeError, ValueError):
        raise NotFound(kind, raw) from None
    if value <= 0:
        raise NotFound(kind, raw)
    return value


def _row_to_product(row) -> Product:
    return Product(
        id=str(row["id"]),
        name=row["name"],
        category=row["category"],
        price=row["price"],
        stock=row["stock"] or 0,
        description=row["description"],
        standardEquipment=row["standard_equipment"],
        specs=row["specs"],
        images=list(row["images"] or []),
        options=row["options"] or [],
        displayOrder=row["display_order"] or 0,
        specsColumns=row["specs_columns"] if row["specs_columns"] in (1, 2) else 1,
    )


def prepare_product(payload: ProductIn) -> ProductIn:
    """
    Resolve raw option editor rows into structured options.

    The result is validated again, so duplicate option names or choice labels
    coming from the editor raise ``pydantic.ValidationError``.
    """
    if payload.optionRows is None:
        return payload
    options = parse_option_editor_payload(payload.optionRows)
    data = payload.model_dump(exclude={"optionRows", "options"})
    return ProductIn.model_validate({**data, "options": [o.model_dump() for o in options]})


def _write_args(p: ProductIn) -> List[Any]:
    data = p.model_dump(mode="json", exclude={"optionRows", "displayOrder"})
    return [
        p.name.strip(),
        p.category,
        p.price,
        p.stock,
        p.description,
        data["standardEquipment"],
        data["specs"],
        p.images,
        data["options"],
        p.specsColumns,
    ]


class ProductStore:
    """Products table access; ids are returned as strings."""

    def __init__(self, pool_getter: PoolGetter = get_pool):
        self._get_pool = pool_getter

    async def list(self, brand: Optional[str] = None) -> List[Product]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            if brand:
                rows = await conn.fetch(
                    f"SELECT {_COLUMNS} FROM products WHERE category = $1 "
                    "ORDER BY display_order ASC, id ASC",
                    brand,
                )
            else:
                rows = await conn.fetch(
                    f"SELECT {_COLUMNS} FROM products ORDER BY display_order ASC, id ASC"
                )
        return [_row_to_product(r) for r in rows]

    async def get(self, product_id: str) -> Product:
        pid = db_id(product_id)
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {_COLUMNS} FROM products WHERE id = $1", pid)
        if not row:
            raise NotFound("product", product_id)
        return _row_to_product(row)

    async def find_by_name(self, name: str, category: Optional[str] = None) -> Optional[Product]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            if category is None:
                row = await conn.fetchrow(
                    f"SELECT {_COLUMNS} FROM products WHERE name = $1 ORDER BY id LIMIT 1", name
                )
            else:
                row = await conn.fetchrow(
                    f"SELECT {_COLUMNS} FROM products WHERE name = $1 AND category = $2 "
                    "ORDER BY id LIMIT 1",
                    name,
                    category,
                )
        return _row_to_product(row) if row else None

    async def create(self, payload: ProductIn) -> Product:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                display_order = payload.displayOrder
                if display_order is None:
                    display_order = await conn.fetchval(
                        "SELECT COALESCE(MAX(display_order), 0) + 1 FROM products"
                    )
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO products (name, category, price, stock, description,
                                          standard_equipment, specs, images, options,
                                          specs_columns, display_order)
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
                    RETURNING {_COLUMNS}
                    """,
                    *_write_args(payload),
                    display_order,
                )
        product = _row_to_product(row)
        logger.info("created product %s (%s)", product.id, product.name)
        return product

    async def update(self, product_id: str, payload: ProductIn) -> Product:
        pid = db_id(product_id)
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            # display_order is left alone when the payload does not carry one
            row = await conn.fetchrow(
                f"""
                UPDATE products
                SET name = $1, category = $2, price = $3, stock = $4, description = $5,
                    standard_equipment = $6, specs = $7, images = $8, options = $9,
                    specs_columns = $10,
                    display_order = COALESCE($11, display_order),
                    updated_at = NOW()
                WHERE id = $12
                RETURNING {_COLUMNS}
                """,
                *_write_args(payload),
                payload.displayOrder,
                pid,
            )
        if not row:
            raise NotFound("product", product_id)
        return _row_to_product(row)

    async def delete(self, product_id: str) -> None:
        pid = db_id(product_id)
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval("DELETE FROM products WHERE id = $1 RETURNING id", pid)
        if deleted is None:
            raise NotFound("product", product_id)
        logger.info("deleted product %s", product_id)

    async def move(self, product_id: str, direction: str) -> bool:
        """
        Swap display order with the neighbouring product.

        Both rows are locked and rewritten in one transaction so two admins
        re-ordering at once cannot lose an update. Returns False when the
        product is already first (``up``) or last (``down``).
        """
        if direction not in ("up", "down"):
            raise InvalidDirection(direction)
        pid = db_id(product_id)

        if direction == "up":
            sibling_sql = (
                "SELECT id, display_order FROM products WHERE display_order < $1 "
                "ORDER BY display_order DESC, id DESC LIMIT 1 FOR UPDATE"
            )
        else:
            sibling_sql = (
                "SELECT id, display_order FROM products WHERE display_order > $1 "
                "ORDER BY display_order ASC, id ASC LIMIT 1 FOR UPDATE"
            )

        pool = await self._get_pool()
        async with pool.acquire() as conn:
            async with conn.transaction():
                current = await conn.fetchrow(
                    "SELECT id, display_order FROM products WHERE id = $1 FOR UPDATE", pid
                )
                if not current:
                    raise NotFound("product", product_id)
                sibling = await conn.fetchrow(sibling_sql, current["display_order"])
                if not sibling:
                    return False
                await conn.execute(
                    "UPDATE products SET display_order = $2, updated_at = NOW() WHERE id = $1",
                    pid,
                    sibling["display_order"],
                )
                await conn.execute(
                    "UPDATE products SET display_order = $2, updated_at = NOW() WHERE id = $1",
                    sibling["id"],
                    current["display_order"],
                )
        logger.info("moved product %s %s (swapped with %s)", product_id, direction, sibling["id"])
        return True
