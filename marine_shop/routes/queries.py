# marine_shop/routes/queries.py
from __future__ import annotations
from fastapi import APIRouter, Depends, HTTPException

from ..deps import get_query_store
from ..schemas.queries import QueryIn, QueryOut
from ..services.queries import QueryStore

router = APIRouter(prefix="/api/queries", tags=["queries"])


@router.post("", response_model=QueryOut, status_code=201)
async def query_create(body: QueryIn, queries: QueryStore = Depends(get_query_store)):
    """Contact form and rental-partner inquiries."""
    try:
        return await queries.create(body)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
