"""Idempotent table creation plus additive column checks for older databases."""
from __future__ import annotations

import logging

from . import get_pool

logger = logging.getLogger(__name__)

TABLES = [
    """
    CREATE TABLE IF NOT EXISTS products (
        id BIGSERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        category VARCHAR(255),
        price NUMERIC(12, 2) NOT NULL,
        stock INTEGER NOT NULL DEFAULT 0 CHECK (stock >= 0),
        description TEXT,
        standard_equipment JSONB NOT NULL DEFAULT '[]'::jsonb,
        specs JSONB NOT NULL DEFAULT '[]'::jsonb,
        images TEXT[] NOT NULL DEFAULT '{}',
        options JSONB NOT NULL DEFAULT '[]'::jsonb,
        display_order INTEGER NOT NULL DEFAULT 0,
        specs_columns INTEGER NOT NULL DEFAULT 1,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS brands (
        id SERIAL PRIMARY KEY,
        name VARCHAR(255) UNIQUE NOT NULL,
        logo TEXT NOT NULL DEFAULT '',
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS orders (
        id BIGSERIAL PRIMARY KEY,
        order_number VARCHAR(50) UNIQUE NOT NULL,
        product_id BIGINT REFERENCES products(id) ON DELETE SET NULL,
        product_name VARCHAR(255) NOT NULL,
        product_brand VARCHAR(255),
        product_price NUMERIC(12, 2),
        selected_options JSONB NOT NULL DEFAULT '{}'::jsonb,
        price_breakdown JSONB NOT NULL DEFAULT '[]'::jsonb,
        total_excl_vat NUMERIC(12, 2) NOT NULL,
        total_incl_vat NUMERIC(12, 2) NOT NULL,
        customer_info JSONB NOT NULL,
        product_images TEXT[] NOT NULL DEFAULT '{}',
        product_description TEXT,
        product_specs JSONB NOT NULL DEFAULT '[]'::jsonb,
        product_standard_equipment JSONB NOT NULL DEFAULT '[]'::jsonb,
        status VARCHAR(20) NOT NULL DEFAULT 'pending',
        date TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS queries (
        id BIGSERIAL PRIMARY KEY,
        name VARCHAR(255) NOT NULL,
        email VARCHAR(255) NOT NULL,
        phone VARCHAR(100),
        message TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS model_specifications (
        id SERIAL PRIMARY KEY,
        model_name VARCHAR(255) UNIQUE NOT NULL,
        specifications JSONB NOT NULL DEFAULT '{}'::jsonb,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS settings (
        key VARCHAR(255) PRIMARY KEY,
        value TEXT,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
]

# (table, column, ddl, backfill) for databases created before the column existed
ADDED_COLUMNS = [
    (
        "products", "display_order", "INTEGER NOT NULL DEFAULT 0",
        # keep the old creation order for existing rows
        "UPDATE products SET display_order = id::INTEGER WHERE display_order = 0",
    ),
    ("products", "specs_columns", "INTEGER NOT NULL DEFAULT 1", None),
]


async def ensure_schema() -> None:
    """Create all tables and add any columns missing from an older schema."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        async with conn.transaction():
            for ddl in TABLES:
                await conn.execute(ddl)

            for table, column, ddl, backfill in ADDED_COLUMNS:
                exists = await conn.fetchval(
                    """
                    SELECT 1 FROM information_schema.columns
                    WHERE table_name = $1 AND column_name = $2
                    """,
                    table,
                    column,
                )
                if exists:
                    continue
                logger.info("adding %s.%s", table, column)
                await conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}")
                if backfill:
                    await conn.execute(backfill)
    logger.info("database schema ready")
