# marine_shop/schemas/queries.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class QueryIn(BaseModel):
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    phone: Optional[str] = Field(None, max_length=100)
    message: str = Field(..., max_length=5000)


class QueryOut(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    message: str
    createdAt: Optional[datetime] = None
