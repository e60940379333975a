# marine_shop/services/orders.py
from __future__ import annotations

import logging
import time
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

import asyncpg

from ..db import get_pool
from ..errors import DuplicateOrderNumber, NotFound
from ..schemas.orders import CustomerInfo, OrderDraft, OrderIn, OrderOut, OrderStatus
from ..schemas.products import Product
from .events import Notifier
from .pricing import apply_required_defaults, calculate_price, money, vat_inclusive
from .products import ProductStore, db_id

logger = logging.getLogger(__name__)

PoolGetter = Callable[[], Awaitable[asyncpg.Pool]]

ORDER_PREFIX = "ORD-"

_COLUMNS = """
    id, order_number, product_id, product_name, product_brand, product_price,
    selected_options, price_breakdown, total_excl_vat, total_incl_vat, customer_info,
    product_images, product_description, product_specs, product_standard_equipment,
    status, date
"""


def _now_ms() -> int:
    return int(time.time() * 1000)


def new_order_number(clock: Optional[Callable[[], int]] = None) -> str:
    return f"{ORDER_PREFIX}{(clock or _now_ms)()}"


def assemble_order(
    product: Product,
    selected_options: Mapping[str, Any],
    customer_info: CustomerInfo,
    clock: Optional[Callable[[], int]] = None,
) -> OrderDraft:
    """
    Price the selection and freeze a copy of the product into an order draft.

    The snapshot (images, description, specs, equipment, price) keeps the
    order readable after the product is edited or deleted.
    """
    priced = calculate_price(product, selected_options)
    return OrderDraft(
        orderNumber=new_order_number(clock),
        productId=product.id,
        productName=product.name,
        productBrand=product.category or "Unknown",
        productPrice=product.price,
        selectedOptions=dict(selected_options),
        priceBreakdown=[l.as_dict() for l in priced.breakdown],
        totalExclVAT=priced.total,
        totalInclVAT=vat_inclusive(priced.total),
        customerInfo=customer_info,
        productImages=list(product.images),
        productDescription=product.description,
        productSpecs=product.specs,
        productStandardEquipment=product.standardEquipment,
        status="pending",
    )


def _row_to_order(row) -> OrderOut:
    """Convert a flat Postgres order row into the camelCase shape routes expect."""
    return OrderOut(
        id=str(row["id"]),
        orderNumber=row["order_number"],
        productId=str(row["product_id"]) if row["product_id"] is not None else None,
        productName=row["product_name"],
        productBrand=row["product_brand"],
        productPrice=row["product_price"],
        selectedOptions=row["selected_options"] or {},
        priceBreakdown=row["price_breakdown"] or [],
        totalExclVAT=row["total_excl_vat"],
        totalInclVAT=row["total_incl_vat"],
        customerInfo=row["customer_info"],
        productImages=list(row["product_images"] or []),
        productDescription=row["product_description"],
        productSpecs=row["product_specs"],
        productStandardEquipment=row["product_standard_equipment"],
        status=row["status"] or "pending",
        date=row["date"],
    )


class OrderStore:
    """Orders table access. Orders are immutable apart from their status."""

    def __init__(self, pool_getter: PoolGetter = get_pool):
        self._get_pool = pool_getter

    async def create(self, draft: OrderDraft, date: Optional[Any] = None) -> OrderOut:
        data = draft.model_dump(mode="json")
        product_id = int(draft.productId) if draft.productId else None
        pool = await self._get_pool()
        try:
            async with pool.acquire() as conn:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO orders (
                        order_number, product_id, product_name, product_brand, product_price,
                        selected_options, price_breakdown, total_excl_vat, total_incl_vat,
                        customer_info, product_images, product_description, product_specs,
                        product_standard_equipment, status, date
                    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14, $15,
                              COALESCE($16, NOW()))
                    RETURNING {_COLUMNS}
                    """,
                    draft.orderNumber,
                    product_id,
                    draft.productName,
                    draft.productBrand,
                    money(draft.productPrice) if draft.productPrice is not None else None,
                    data["selectedOptions"],
                    data["priceBreakdown"],
                    money(draft.totalExclVAT),
                    money(draft.totalInclVAT),
                    data["customerInfo"],
                    draft.productImages,
                    draft.productDescription,
                    data["productSpecs"],
                    data["productStandardEquipment"],
                    draft.status,
                    date,
                )
        except asyncpg.UniqueViolationError as e:
            raise DuplicateOrderNumber(draft.orderNumber) from e
        return _row_to_order(row)

    async def list(self) -> List[OrderOut]:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            rows = await conn.fetch(f"SELECT {_COLUMNS} FROM orders ORDER BY date DESC, id DESC")
        return [_row_to_order(r) for r in rows]

    async def get(self, order_id: str) -> OrderOut:
        oid = db_id(order_id, "order")
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(f"SELECT {_COLUMNS} FROM orders WHERE id = $1", oid)
        if not row:
            raise NotFound("order", order_id)
        return _row_to_order(row)

    async def exists_number(self, order_number: str) -> bool:
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            found = await conn.fetchval(
                "SELECT 1 FROM orders WHERE order_number = $1", order_number
            )
        return bool(found)

    async def update_status(self, order_id: str, status: OrderStatus) -> OrderOut:
        # single-field write, last write wins
        oid = db_id(order_id, "order")
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            row = await conn.fetchrow(
                f"""
                UPDATE orders SET status = $2, updated_at = NOW()
                WHERE id = $1
                RETURNING {_COLUMNS}
                """,
                oid,
                status,
            )
        if not row:
            raise NotFound("order", order_id)
        return _row_to_order(row)

    async def delete(self, order_id: str) -> None:
        oid = db_id(order_id, "order")
        pool = await self._get_pool()
        async with pool.acquire() as conn:
            deleted = await conn.fetchval("DELETE FROM orders WHERE id = $1 RETURNING id", oid)
        if deleted is None:
            raise NotFound("order", order_id)


def _event(kind: str, order: Optional[OrderOut] = None, **extra) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"type": kind, **extra}
    if order is not None:
        payload.update(
            {"id": order.id, "orderNumber": order.orderNumber, "status": order.status}
        )
    return payload


async def price_quote(products: ProductStore, product_id: str, selected: Mapping[str, Any]):
    product = await products.get(product_id)
    selection = apply_required_defaults(product, selected)
    priced = calculate_price(product, selection)
    return product, selection, priced


async def place_order(
    products: ProductStore,
    orders: OrderStore,
    body: OrderIn,
    notifier: Optional[Notifier] = None,
) -> OrderOut:
    """Look up the product, price the selection and persist the order (no retry)."""
    product = await products.get(body.productId)
    selection = apply_required_defaults(product, body.selectedOptions)
    draft = assemble_order(product, selection, body.customerInfo)
    order = await orders.create(draft)
    logger.info(
        "order %s placed for product %s, total %s excl. VAT",
        order.orderNumber, order.productId, order.totalExclVAT,
    )
    if notifier is not None:
        notifier.publish(_event("order.created", order))
    return order


async def change_status(
    orders: OrderStore, order_id: str, status: OrderStatus, notifier: Optional[Notifier] = None
) -> OrderOut:
    order = await orders.update_status(order_id, status)
    logger.info("order %s status -> %s", order.orderNumber, status)
    if notifier is not None:
        notifier.publish(_event("order.status", order))
    return order


async def remove_order(orders: OrderStore, order_id: str, notifier: Optional[Notifier] = None) -> None:
    await orders.delete(order_id)
    logger.info("order %s deleted", order_id)
    if notifier is not None:
        notifier.publish(_event("order.deleted", id=str(order_id)))
