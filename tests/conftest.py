"""Shared fixtures: swap the Postgres stores for in-memory fakes so tests run without a database."""
from __future__ import annotations

import os

# Set env vars BEFORE any app imports
os.environ.setdefault("ADMIN_USERNAME", "admin")
os.environ.setdefault("ADMIN_PASSWORD", "secret-pass")
os.environ.setdefault("ADMIN_TOKEN", "test-admin-token")
os.environ["DB_INIT_ON_STARTUP"] = "false"
os.environ.pop("DATABASE_URL", None)

from decimal import Decimal
from types import SimpleNamespace

import pytest

from marine_shop.schemas.products import Product
from marine_shop.services.catalog_cache import CatalogCache

from .fakes import (
    FakeBrandStore,
    FakeModelSpecStore,
    FakeOrderStore,
    FakeProductStore,
    FakeQueryStore,
    FakeShopSettingsStore,
    RecordingNotifier,
)


# ---------- Domain fixtures ----------

def make_product(price=1000, options=None, **extra) -> Product:
    data = {
        "id": "1",
        "name": "Sea Ray 230",
        "category": "Sea Ray",
        "price": price,
        "stock": 2,
        "description": "Bowrider",
        "images": ["https://img.example/1.jpg", "https://img.example/2.jpg"],
        "specs": [{"key": "Length", "value": "7 m"}, {"key": "Engine", "value": "250 hp"}],
        "standardEquipment": [{"header": "Deck", "items": ["Swim ladder"]}, "Bimini top"],
        "options": options or [],
    }
    data.update(extra)
    return Product(**data)


COLOR_OPTION = {
    "name": "Color",
    "type": "radio",
    "required": False,
    "choices": [{"label": "Red", "price": 0}, {"label": "Blue", "price": 50}],
}

EXTRAS_OPTION = {
    "name": "Extras",
    "type": "checkbox",
    "required": False,
    "choices": [{"label": "GPS", "price": 100}, {"label": "Radio", "price": 75}],
}


@pytest.fixture()
def color_product() -> Product:
    return make_product(price=1000, options=[COLOR_OPTION])


@pytest.fixture()
def extras_product() -> Product:
    return make_product(price=500, options=[EXTRAS_OPTION])


@pytest.fixture()
def customer() -> dict:
    return {
        "fullName": "Ana Popescu",
        "email": "ana@example.com",
        "phone": "+40 700 000 000",
        "city": "Constanta",
    }


# ---------- Store fakes ----------

@pytest.fixture()
def stores():
    return SimpleNamespace(
        products=FakeProductStore(),
        orders=FakeOrderStore(),
        brands=FakeBrandStore(),
        queries=FakeQueryStore(),
        model_specs=FakeModelSpecStore(),
        shop_settings=FakeShopSettingsStore(),
        notifier=RecordingNotifier(),
        cache=CatalogCache(),
    )


@pytest.fixture()
def client(stores):
    """FastAPI TestClient (sync) wired to the in-memory stores."""
    from fastapi.testclient import TestClient
    from marine_shop import deps
    from marine_shop.main import app

    app.dependency_overrides.update({
        deps.get_product_store: lambda: stores.products,
        deps.get_order_store: lambda: stores.orders,
        deps.get_brand_store: lambda: stores.brands,
        deps.get_query_store: lambda: stores.queries,
        deps.get_model_spec_store: lambda: stores.model_specs,
        deps.get_shop_settings_store: lambda: stores.shop_settings,
        deps.get_notifier: lambda: stores.notifier,
        deps.get_catalog_cache: lambda: stores.cache,
    })
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers() -> dict:
    return {"Authorization": f"Bearer {os.environ['ADMIN_TOKEN']}"}


def dec(v) -> Decimal:
    return Decimal(str(v))
