# marine_shop/routes/admin.py
from __future__ import annotations
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from ..deps import (
    get_brand_store,
    get_catalog_cache,
    get_notifier,
    get_order_store,
    get_product_store,
    get_query_store,
    get_shop_settings_store,
    require_admin,
)
from ..schemas.orders import OrderOut, StatusUpdateIn
from ..schemas.queries import QueryOut
from ..services.brands import BrandStore
from ..services.catalog_cache import CatalogCache
from ..services.events import Notifier, sse_stream
from ..services.migration import import_legacy_export
from ..services.orders import OrderStore, change_status, remove_order
from ..services.products import ProductStore
from ..services.queries import QueryStore
from ..services.shop_settings import ShopSettingsStore

router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)])


# ---- Orders ------------------------------------------------------------------
@router.get("/orders", response_model=List[OrderOut])
async def list_orders_endpoint(orders: OrderStore = Depends(get_order_store)):
    """
    Return all orders for the admin UI, newest first.
    Also the polling fallback for admin pages without an event stream.
    """
    return await orders.list()


@router.get("/orders/{order_id}", response_model=OrderOut)
async def get_order_endpoint(order_id: str, orders: OrderStore = Depends(get_order_store)):
    return await orders.get(order_id)


@router.patch("/orders/{order_id}/status", response_model=OrderOut)
async def update_order_status_endpoint(
    order_id: str,
    body: StatusUpdateIn,
    orders: OrderStore = Depends(get_order_store),
    notifier: Notifier = Depends(get_notifier),
):
    return await change_status(orders, order_id, body.status, notifier)


@router.delete("/orders/{order_id}")
async def delete_order_endpoint(
    order_id: str,
    orders: OrderStore = Depends(get_order_store),
    notifier: Notifier = Depends(get_notifier),
):
    await remove_order(orders, order_id, notifier)
    return {"message": "Order deleted successfully"}


# ---- Queries -----------------------------------------------------------------
@router.get("/queries", response_model=List[QueryOut])
async def list_queries_endpoint(queries: QueryStore = Depends(get_query_store)):
    return await queries.list()


@router.delete("/queries/{query_id}")
async def delete_query_endpoint(query_id: str, queries: QueryStore = Depends(get_query_store)):
    await queries.delete(query_id)
    return {"message": "Query deleted successfully"}


# ---- Live updates ------------------------------------------------------------
@router.get("/events")
async def events_endpoint(request: Request, notifier: Notifier = Depends(get_notifier)):
    """Server-Sent Events: order.created / order.status / order.deleted."""
    return StreamingResponse(
        sse_stream(notifier, request.is_disconnected),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


# ---- Legacy import -----------------------------------------------------------
@router.post("/migrate-legacy")
async def migrate_legacy_endpoint(
    payload: Dict[str, Any] = Body(...),
    products: ProductStore = Depends(get_product_store),
    brands: BrandStore = Depends(get_brand_store),
    orders: OrderStore = Depends(get_order_store),
    shop_settings: ShopSettingsStore = Depends(get_shop_settings_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    """Import a browser-storage export from the old storefront."""
    try:
        results = await import_legacy_export(payload, products, brands, orders, shop_settings)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    cache.invalidate()
    return {"success": True, "message": "Migration completed", "results": results}
