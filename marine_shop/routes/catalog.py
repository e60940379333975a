# marine_shop/routes/catalog.py
from __future__ import annotations
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import (
    get_brand_store,
    get_catalog_cache,
    get_model_spec_store,
    get_product_store,
    get_shop_settings_store,
)
from ..schemas.catalog import BrandOut, LogoOut, ModelSpecOut
from ..schemas.products import Product
from ..services.brands import BrandStore
from ..services.catalog_cache import CatalogCache
from ..services.model_specs import ModelSpecStore
from ..services.products import ProductStore
from ..services.shop_settings import ShopSettingsStore

router = APIRouter(prefix="/api", tags=["catalog"])


# ---- Products ----------------------------------------------------------------
@router.get("/products", response_model=List[Product])
async def list_products_endpoint(
    brand: Optional[str] = Query(None, description="Only products of this brand"),
    products: ProductStore = Depends(get_product_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    # one cached listing; brand filters never add cache entries
    listed = await cache.get("products", products.list)
    if brand:
        return [p for p in listed if p.category == brand]
    return listed


@router.get("/products/{product_id}", response_model=Product)
async def get_product_endpoint(
    product_id: str,
    products: ProductStore = Depends(get_product_store),
):
    return await products.get(product_id)


# ---- Brands ------------------------------------------------------------------
@router.get("/brands", response_model=List[BrandOut])
async def list_brands_endpoint(
    brands: BrandStore = Depends(get_brand_store),
    cache: CatalogCache = Depends(get_catalog_cache),
):
    return await cache.get("brands", brands.list)


@router.get("/brands/name/{name}", response_model=BrandOut)
async def get_brand_by_name_endpoint(name: str, brands: BrandStore = Depends(get_brand_store)):
    brand = await brands.get_by_name(name)
    if not brand:
        raise HTTPException(status_code=404, detail="Brand not found")
    return brand


# ---- Model specifications ----------------------------------------------------
@router.get("/model-specifications/{model_name}", response_model=ModelSpecOut)
async def get_model_spec_endpoint(
    model_name: str,
    specs: ModelSpecStore = Depends(get_model_spec_store),
):
    found = await specs.get(model_name)
    if not found:
        raise HTTPException(status_code=404, detail="No specifications found")
    return found


# ---- Settings ----------------------------------------------------------------
@router.get("/settings/logo", response_model=LogoOut)
async def get_logo_endpoint(store: ShopSettingsStore = Depends(get_shop_settings_store)):
    return LogoOut(logo=await store.get_logo())
