# marine_shop/schemas/orders.py
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from ..services.specs import normalize_specs, normalize_standard_equipment
from .products import EquipmentEntry, Money, SelectedOptions, SpecEntry

OrderStatus = Literal["pending", "confirmed", "completed", "cancelled"]


class PriceLineOut(BaseModel):
    label: str
    price: Money


class CustomerInfo(BaseModel):
    fullName: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    phone: Optional[str] = None
    city: Optional[str] = None


class OrderIn(BaseModel):
    # we keep camelCase to match the frontend JSON exactly
    productId: str
    selectedOptions: SelectedOptions = Field(default_factory=dict)
    customerInfo: CustomerInfo


class PriceQuoteIn(BaseModel):
    productId: str
    selectedOptions: SelectedOptions = Field(default_factory=dict)


class PriceQuoteOut(BaseModel):
    productId: str
    selectedOptions: SelectedOptions
    priceBreakdown: List[PriceLineOut]
    totalExclVAT: Money
    totalInclVAT: Money


class OrderDraft(BaseModel):
    orderNumber: str
    productId: Optional[str] = None
    productName: str
    productBrand: Optional[str] = None
    productPrice: Optional[Money] = None
    selectedOptions: SelectedOptions = Field(default_factory=dict)
    priceBreakdown: List[PriceLineOut] = Field(default_factory=list)
    totalExclVAT: Money
    totalInclVAT: Money
    customerInfo: CustomerInfo
    productImages: List[str] = Field(default_factory=list)
    productDescription: Optional[str] = None
    productSpecs: List[SpecEntry] = Field(default_factory=list)
    productStandardEquipment: List[EquipmentEntry] = Field(default_factory=list)
    status: OrderStatus = "pending"

    @field_validator("productSpecs", mode="before")
    @classmethod
    def _upgrade_specs(cls, v):
        return normalize_specs(v)

    @field_validator("productStandardEquipment", mode="before")
    @classmethod
    def _upgrade_equipment(cls, v):
        return normalize_standard_equipment(v)


class OrderOut(OrderDraft):
    id: str
    date: Optional[datetime] = None


class StatusUpdateIn(BaseModel):
    status: OrderStatus
