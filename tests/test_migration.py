"""Import of the old storefront's browser-storage export."""
from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from marine_shop.schemas.catalog import BrandIn
from marine_shop.schemas.products import ProductIn
from marine_shop.services.migration import import_legacy_export
from tests.fakes import FakeBrandStore, FakeOrderStore, FakeProductStore, FakeShopSettingsStore


@pytest.fixture()
def fakes():
    return FakeProductStore(), FakeBrandStore(), FakeOrderStore(), FakeShopSettingsStore()


def _run(payload, fakes):
    return asyncio.run(import_legacy_export(payload, *fakes))


LEGACY_ORDER = {
    "orderNumber": "ORD-1699999999999",
    "productId": "1699999990000",
    "productName": "Sea Ray 230",
    "productBrand": "Sea Ray",
    "productPrice": 1000,
    "selectedOptions": {"Color": "Blue"},
    "priceBreakdown": [{"label": "Base Price", "price": 1000}, {"label": "Color: Blue", "price": 50}],
    "totalExclVAT": 1050,
    "customerInfo": {"fullName": "Ana", "email": "ana@example.com", "phone": "1", "city": "Constanta"},
    "status": "confirmed",
    "date": "2023-11-14T22:13:20.000Z",
}


def test_rejects_empty_payload(fakes):
    with pytest.raises(ValueError):
        _run({}, fakes)
    with pytest.raises(ValueError):
        _run({"products": []}, fakes)


def test_imports_everything(fakes):
    products, brands, orders, shop_settings = fakes
    payload = {
        "products": [{"name": "Sea Ray 230", "category": "Sea Ray", "price": 1000,
                      "specs": {"Length": "7 m"}, "standardEquipment": {"Deck": ["Ladder"]}}],
        "brands": [{"name": "Sea Ray", "logo": "data:x"}],
        "orders": [LEGACY_ORDER],
        "logo": "data:logo",
    }
    results = _run(payload, fakes)

    assert results == {"products": 1, "brands": 1, "orders": 1, "logo": True, "errors": []}
    order = asyncio.run(orders.list())[0]
    # stale client-side id resolved by product name
    assert order.productId == "1"
    assert order.status == "confirmed"
    assert order.totalInclVAT == Decimal("1249.50")
    assert order.date == datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc)
    assert shop_settings.logo == "data:logo"


def test_rerun_skips_existing(fakes):
    products, brands, orders, _ = fakes
    asyncio.run(products.create(ProductIn(name="Sea Ray 230", category="Sea Ray", price=1000)))
    asyncio.run(brands.create(BrandIn(name="Sea Ray")))
    payload = {
        "products": [{"name": "Sea Ray 230", "category": "Sea Ray", "price": 1000}],
        "brands": [{"name": "Sea Ray"}],
        "orders": [LEGACY_ORDER],
    }
    _run(payload, fakes)
    results = _run(payload, fakes)

    assert results["products"] == 0
    assert results["brands"] == 0
    assert results["orders"] == 0
    assert len(orders.rows) == 1


def test_bad_records_are_reported(fakes):
    _, _, orders, _ = fakes
    payload = {
        "products": [{"name": "No price"}],
        "orders": [
            {"productName": "Ghost"},
            {**LEGACY_ORDER, "orderNumber": "ORD-2", "totalExclVAT": None},
            {**LEGACY_ORDER, "orderNumber": "ORD-3", "status": "shipped", "productName": "Ghost"},
        ],
    }
    results = _run(payload, fakes)

    assert results["products"] == 0
    assert results["orders"] == 1
    assert len(results["errors"]) == 3
    assert results["errors"][0].startswith('Product "No price"')
    kept = asyncio.run(orders.list())[0]
    assert kept.status == "pending"
    assert kept.productId is None
