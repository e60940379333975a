# marine_shop/routes/admin_catalog.py
from __future__ import annotations
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from ..deps import (
    get_brand_store,
    get_catalog_cache,
    get_model_spec_store,
    get_product_store,
    get_shop_settings_store,
    require_admin,
)
from ..schemas.catalog import BrandIn, BrandOut, LogoIn, ModelSpecIn, ModelSpecOut
from ..schemas.products import MoveIn, MoveOut, Product, ProductIn
from ..services.brands import BrandStore
from ..services.catalog_cache import CatalogCache
from ..services.model_specs import ModelSpecStore
from ..services.products import ProductStore, prepare_product
from ..services.shop_settings import ShopSettingsStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["admin-catalog"], dependencies=[Depends(require_admin)])


def _resolved(payload: ProductIn) -> ProductIn:
    try:
        return prepare_product(payload)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=[err["msg"] for err in e.errors()])


# ---- Products ----------------------------------------------------------------
@router.post("/products", response_model=Product, status_code=201)
async def create_product_endpoint(
    payload: ProductIn,
    products: ProductStore = Depends(get_product_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    created = await products.create(_resolved(payload))
    cache.invalidate()
    return created


@router.put("/products/{product_id}", response_model=Product)
async def update_product_endpoint(
    product_id: str,
    payload: ProductIn,
    products: ProductStore = Depends(get_product_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    updated = await products.update(product_id, _resolved(payload))
    cache.invalidate()
    return updated


@router.delete("/products/{product_id}")
async def delete_product_endpoint(
    product_id: str,
    products: ProductStore = Depends(get_product_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    await products.delete(product_id)
    cache.invalidate()
    return {"message": "Product deleted successfully"}


@router.patch("/products/{product_id}/order", response_model=MoveOut)
async def move_product_endpoint(
    product_id: str,
    body: MoveIn,
    products: ProductStore = Depends(get_product_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    try:
        moved = await products.move(product_id, body.direction)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if not moved:
        edge = "top" if body.direction == "up" else "bottom"
        return MoveOut(moved=False, message=f"Product is already at the {edge}")
    cache.invalidate()
    return MoveOut(moved=True, message="Product order updated successfully")


# ---- Brands ------------------------------------------------------------------
@router.post("/brands", response_model=BrandOut, status_code=201)
async def create_brand_endpoint(
    payload: BrandIn,
    brands: BrandStore = Depends(get_brand_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    try:
        created = await brands.create(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    cache.invalidate()
    return created


@router.put("/brands/{brand_id}", response_model=BrandOut)
async def update_brand_endpoint(
    brand_id: str,
    payload: BrandIn,
    brands: BrandStore = Depends(get_brand_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    updated = await brands.update(brand_id, payload)
    cache.invalidate()
    return updated


@router.delete("/brands/{brand_id}")
async def delete_brand_endpoint(
    brand_id: str,
    brands: BrandStore = Depends(get_brand_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    await brands.delete(brand_id)
    cache.invalidate()
    return {"message": "Brand deleted successfully"}


# ---- Model specifications ----------------------------------------------------
@router.get("/model-specifications", response_model=List[ModelSpecOut])
async def list_model_specs_endpoint(specs: ModelSpecStore = Depends(get_model_spec_store)):
    return await specs.list()


@router.put("/model-specifications/{model_name}", response_model=ModelSpecOut)
async def put_model_spec_endpoint(
    model_name: str,
    payload: ModelSpecIn,
    specs: ModelSpecStore = Depends(get_model_spec_store),
):
    try:
        return await specs.upsert(model_name, payload.specifications)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/model-specifications/{model_name}")
async def delete_model_spec_endpoint(
    model_name: str,
    specs: ModelSpecStore = Depends(get_model_spec_store),
):
    await specs.delete(model_name)
    return {"message": "Specifications deleted successfully"}


# ---- Settings ----------------------------------------------------------------
@router.put("/settings/logo")
async def put_logo_endpoint(
    payload: LogoIn,
    store: ShopSettingsStore = Depends(get_shop_settings_store),
):
    await store.set_logo(payload.logo or "")
    logger.info("shop logo updated")
    return {"message": "Logo updated successfully"}
