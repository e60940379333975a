"""
Create the database tables and, optionally, import a browser-storage export
from the old storefront.

    python scripts/init_db.py
    python scripts/init_db.py --import localstorage-export.json
"""
import argparse
import asyncio
import json
import logging

from marine_shop.db import close_pool
from marine_shop.db.schema import ensure_schema
from marine_shop.services.brands import BrandStore
from marine_shop.services.migration import import_legacy_export
from marine_shop.services.orders import OrderStore
from marine_shop.services.products import ProductStore
from marine_shop.services.shop_settings import ShopSettingsStore


async def main(import_path):
    try:
        await ensure_schema()
        if not import_path:
            return
        with open(import_path, "r", encoding="utf-8") as f:
            exported = json.load(f)
        results = await import_legacy_export(
            exported, ProductStore(), BrandStore(), OrderStore(), ShopSettingsStore()
        )
        print(f"Imported {results['products']} products, {results['brands']} brands, "
              f"{results['orders']} orders, logo: {'yes' if results['logo'] else 'no'}")
        for err in results["errors"]:
            print(f"  ! {err}")
    finally:
        await close_pool()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    ap = argparse.ArgumentParser()
    ap.add_argument("--import", dest="import_path", help="JSON export of the old browser storage")
    args = ap.parse_args()
    asyncio.run(main(args.import_path))
