# marine_shop/services/migration.py
"""
One-off import of the data the old storefront kept in browser storage.

The export looks like ``{"products": [...], "brands": [...], "orders": [...],
"logo": "..."}``. Records that already exist are skipped, so the import can be
re-run; a bad record is reported in ``errors`` and never stops the rest.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional

import asyncpg

from ..errors import NotFound, ShopError
from ..schemas.catalog import BrandIn
from ..schemas.orders import OrderDraft
from ..schemas.products import ProductIn
from .brands import BrandStore
from .orders import OrderStore
from .pricing import vat_inclusive
from .products import ProductStore
from .shop_settings import ShopSettingsStore

logger = logging.getLogger(__name__)

ORDER_STATUSES = ("pending", "confirmed", "completed", "cancelled")
IMPORT_KEYS = ("products", "brands", "orders", "logo")

# errors a single record can raise without aborting the import
_RECORD_ERRORS = (ValueError, TypeError, AttributeError, InvalidOperation, ShopError, asyncpg.PostgresError)


def _parse_date(raw: Any) -> Optional[datetime]:
    if not raw:
        return None
    if isinstance(raw, (int, float)):
        return datetime.fromtimestamp(raw / 1000, tz=timezone.utc)
    try:
        dt = datetime.fromisoformat(str(raw).replace("Z", "+00:00"))
    except ValueError:
        return None
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


async def _resolve_product_id(products: ProductStore, order: Dict[str, Any]) -> Optional[str]:
    """Old ids were client-side timestamps; fall back to matching by name."""
    raw_id = order.get("productId")
    if raw_id:
        try:
            return (await products.get(str(raw_id))).id
        except NotFound:
            pass
        except asyncpg.DataError:
            # timestamp ids overflow BIGINT lookups on some schemas
            pass
    name = order.get("productName")
    if name:
        found = await products.find_by_name(name)
        if found:
            return found.id
    return None


def _legacy_order_draft(order: Dict[str, Any], product_id: Optional[str]) -> OrderDraft:
    total_excl = order.get("totalExclVAT")
    if total_excl is None:
        raise ValueError("totalExclVAT is missing")
    total_incl = order.get("totalInclVAT")
    if total_incl is None:
        total_incl = vat_inclusive(Decimal(str(total_excl)))
    status = order.get("status") if order.get("status") in ORDER_STATUSES else "pending"
    return OrderDraft(
        orderNumber=order["orderNumber"],
        productId=product_id,
        productName=order.get("productName") or "Unknown product",
        productBrand=order.get("productBrand"),
        productPrice=order.get("productPrice"),
        selectedOptions=order.get("selectedOptions") or {},
        priceBreakdown=order.get("priceBreakdown") or [],
        totalExclVAT=total_excl,
        totalInclVAT=total_incl,
        customerInfo=order.get("customerInfo") or {},
        productImages=order.get("productImages") or [],
        productDescription=order.get("productDescription"),
        productSpecs=order.get("productSpecs"),
        productStandardEquipment=order.get("productStandardEquipment"),
        status=status,
    )


async def import_legacy_export(
    payload: Dict[str, Any],
    products: ProductStore,
    brands: BrandStore,
    orders: OrderStore,
    shop_settings: ShopSettingsStore,
) -> Dict[str, Any]:
    if not isinstance(payload, dict) or not any(payload.get(k) for k in IMPORT_KEYS):
        raise ValueError("Invalid data. Expected products, brands, orders, or logo.")

    results: Dict[str, Any] = {"products": 0, "brands": 0, "orders": 0, "logo": False}
    errors: List[str] = []

    for p in payload.get("products") or []:
        try:
            if await products.find_by_name(p.get("name"), p.get("category")):
                continue
            await products.create(ProductIn(**{
                "name": p.get("name"),
                "category": p.get("category"),
                "price": p.get("price"),
                "stock": p.get("stock") or 0,
                "description": p.get("description"),
                "standardEquipment": p.get("standardEquipment"),
                "specs": p.get("specs"),
                "images": p.get("images") or [],
                "options": p.get("options") or [],
                "specsColumns": p.get("specsColumns") or 1,
            }))
            results["products"] += 1
        except _RECORD_ERRORS as e:
            errors.append(f'Product "{p.get("name")}": {e}')

    for b in payload.get("brands") or []:
        try:
            if await brands.get_by_name(b.get("name")):
                continue
            await brands.create(BrandIn(name=b.get("name"), logo=b.get("logo") or ""))
            results["brands"] += 1
        except _RECORD_ERRORS as e:
            errors.append(f'Brand "{b.get("name")}": {e}')

    for o in payload.get("orders") or []:
        number = o.get("orderNumber")
        try:
            if not number:
                raise ValueError("orderNumber is missing")
            if await orders.exists_number(number):
                continue
            product_id = await _resolve_product_id(products, o)
            draft = _legacy_order_draft(o, product_id)
            await orders.create(draft, date=_parse_date(o.get("date")))
            results["orders"] += 1
        except _RECORD_ERRORS as e:
            errors.append(f'Order "{number}": {e}')

    if payload.get("logo"):
        try:
            await shop_settings.set_logo(payload["logo"])
            results["logo"] = True
        except _RECORD_ERRORS as e:
            errors.append(f"Logo: {e}")

    results["errors"] = errors
    logger.info(
        "legacy import: %d products, %d brands, %d orders, logo=%s, %d errors",
        results["products"], results["brands"], results["orders"], results["logo"], len(errors),
    )
    return results
