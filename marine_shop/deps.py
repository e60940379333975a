# marine_shop/deps.py
"""FastAPI dependencies: admin auth and the stores the routes work against."""
from __future__ import annotations

import hmac
from typing import Optional

from fastapi import Header, HTTPException

from .services.brands import BrandStore
from .services.catalog_cache import CatalogCache, catalog_cache
from .services.events import Notifier, notifier
from .services.model_specs import ModelSpecStore
from .services.orders import OrderStore
from .services.products import ProductStore
from .services.queries import QueryStore
from .services.shop_settings import ShopSettingsStore
from .settings import settings


def bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        return ""
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def require_admin(authorization: Optional[str] = Header(default=None)) -> None:
    token = bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")
    if not hmac.compare_digest(token.encode(), settings.admin_token.encode()):
        raise HTTPException(status_code=401, detail="Invalid token")


def get_product_store() -> ProductStore:
    return ProductStore()


def get_order_store() -> OrderStore:
    return OrderStore()


def get_brand_store() -> BrandStore:
    return BrandStore()


def get_query_store() -> QueryStore:
    return QueryStore()


def get_model_spec_store() -> ModelSpecStore:
    return ModelSpecStore()


def get_shop_settings_store() -> ShopSettingsStore:
    return ShopSettingsStore()


def get_catalog_cache() -> CatalogCache:
    return catalog_cache


def get_notifier() -> Notifier:
    return notifier
