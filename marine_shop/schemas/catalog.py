# marine_shop/schemas/catalog.py
from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

from pydantic import BaseModel, Field


class BrandIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    logo: Optional[str] = ""


class BrandOut(BaseModel):
    id: str
    name: str
    logo: str = ""


class ModelSpecIn(BaseModel):
    specifications: Dict[str, str] = Field(default_factory=dict)


class ModelSpecOut(BaseModel):
    modelName: str
    specifications: Dict[str, str] = Field(default_factory=dict)
    updatedAt: Optional[datetime] = None


class LogoIn(BaseModel):
    logo: Optional[str] = ""


class LogoOut(BaseModel):
    logo: str = ""
