# marine_shop/main.py
import logging

import asyncpg
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .db import close_pool
from .db.schema import ensure_schema
from .errors import DuplicateBrand, DuplicateOrderNumber, NotFound, StoreUnavailable
from .routes import admin, admin_catalog, auth, catalog, orders, queries
from .settings import settings

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("marine_shop")

app = FastAPI(title="Marine Shop API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(catalog.router)
app.include_router(orders.router)
app.include_router(queries.router)
app.include_router(auth.router)
app.include_router(admin.router)
app.include_router(admin_catalog.router)


# ---- Domain errors -> HTTP ---------------------------------------------------
@app.exception_handler(NotFound)
async def _not_found(request: Request, exc: NotFound):
    return JSONResponse(status_code=404, content={"detail": str(exc).capitalize()})


@app.exception_handler(DuplicateOrderNumber)
async def _duplicate_order(request: Request, exc: DuplicateOrderNumber):
    # caller may regenerate the order number and resubmit
    logger.warning("duplicate order number %s", exc.order_number)
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(DuplicateBrand)
async def _duplicate_brand(request: Request, exc: DuplicateBrand):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(StoreUnavailable)
async def _store_unavailable(request: Request, exc: StoreUnavailable):
    logger.error("store unavailable: %s", exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@app.exception_handler(asyncpg.PostgresConnectionError)
async def _connection_lost(request: Request, exc: asyncpg.PostgresConnectionError):
    logger.error("database connection error", exc_info=exc)
    return JSONResponse(status_code=503, content={"detail": "Database unavailable"})


@app.get("/")
def root():
    return {"message": "Marine Shop API is running"}


@app.on_event("startup")
async def _startup_schema():
    if not settings.db_init_on_startup:
        return
    try:
        await ensure_schema()
    except StoreUnavailable as e:
        # Don't crash; requests report 503 until the database is reachable
        logger.error("schema setup skipped: %s", e)


@app.on_event("shutdown")
async def _shutdown_pool():
    await close_pool()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("marine_shop.main:app", host=settings.api_host, port=settings.api_port)
