# marine_shop/schemas/products.py
from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, PlainSerializer, field_validator, model_validator

from ..services.specs import normalize_specs, normalize_standard_equipment

# Decimal inside the app, plain JSON number on the wire
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

OptionType = Literal["radio", "checkbox"]

# option name -> label (radio) or [labels] (checkbox)
SelectedOptions = Dict[str, Union[str, List[str]]]


class Choice(BaseModel):
    label: str
    price: Money = Decimal("0")


class ProductOption(BaseModel):
    name: str
    type: OptionType = "radio"
    required: bool = False
    choices: List[Choice] = Field(default_factory=list)

    def find_choice(self, label: str) -> Optional[Choice]:
        for c in self.choices:
            if c.label == label:
                return c
        return None


class OptionEditorRow(BaseModel):
    """One row of the admin options editor; choices arrive as a JSON string."""
    name: str = ""
    type: str = "radio"
    required: bool = False
    choicesJSON: str = ""


class SpecEntry(BaseModel):
    key: str
    value: str = ""


class EquipmentGroup(BaseModel):
    header: str = ""
    items: List[str] = Field(default_factory=list)


EquipmentEntry = Union[str, EquipmentGroup]


class ProductBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    category: Optional[str] = None                # brand name
    price: Money = Field(..., description="Base price excl. VAT")
    stock: int = Field(0, ge=0)
    description: Optional[str] = None
    standardEquipment: List[EquipmentEntry] = Field(default_factory=list)
    specs: List[SpecEntry] = Field(default_factory=list)
    images: List[str] = Field(default_factory=list)
    options: List[ProductOption] = Field(default_factory=list)
    specsColumns: Literal[1, 2] = 1

    @field_validator("specs", mode="before")
    @classmethod
    def _upgrade_specs(cls, v: Any):
        return normalize_specs(v)

    @field_validator("standardEquipment", mode="before")
    @classmethod
    def _upgrade_equipment(cls, v: Any):
        return normalize_standard_equipment(v)

    def find_option(self, name: str) -> Optional[ProductOption]:
        for o in self.options:
            if o.name == name:
                return o
        return None


class ProductIn(ProductBase):
    price: Money = Field(..., ge=0, description="Base price excl. VAT")
    displayOrder: Optional[int] = None
    # raw editor rows; when present they replace `options`
    optionRows: Optional[List[OptionEditorRow]] = None

    @model_validator(mode="after")
    def _unique_names(self):
        names = [o.name for o in self.options]
        if len(names) != len(set(names)):
            raise ValueError("option names must be unique within a product")
        for o in self.options:
            labels = [c.label for c in o.choices]
            if len(labels) != len(set(labels)):
                raise ValueError(f"choice labels must be unique within option {o.name!r}")
        return self


class Product(ProductBase):
    id: str
    displayOrder: int = 0


class MoveIn(BaseModel):
    direction: str


class MoveOut(BaseModel):
    moved: bool
    message: str
