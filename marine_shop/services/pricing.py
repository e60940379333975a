# marine_shop/services/pricing.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Mapping, Union

from ..schemas.products import ProductBase

# Fixed rate, not per product or region.
VAT_RATE = Decimal("0.19")
CENT = Decimal("0.01")

BASE_PRICE_LABEL = "Base Price"


def money(v: Union[Decimal, float, int, str]) -> Decimal:
    """Round to currency precision (half-up)."""
    if not isinstance(v, Decimal):
        v = Decimal(str(v))
    return v.quantize(CENT, rounding=ROUND_HALF_UP)


def vat_inclusive(total: Decimal) -> Decimal:
    return money(total * (1 + VAT_RATE))


@dataclass(frozen=True)
class PriceLine:
    label: str
    price: Decimal

    def as_dict(self) -> Dict[str, object]:
        return {"label": self.label, "price": self.price}


@dataclass(frozen=True)
class PriceResult:
    total: Decimal
    breakdown: List[PriceLine] = field(default_factory=list)


def calculate_price(product: ProductBase, selected_options: Mapping[str, object]) -> PriceResult:
    """
    Base price plus every selected choice that still exists on the product.

    Selection keys that name no option, and labels that name no choice, are
    skipped silently: a customer may have loaded the product before an admin
    edited its options. Negative totals are allowed.
    """
    total = product.price
    breakdown = [PriceLine(BASE_PRICE_LABEL, product.price)]

    for option in product.options:
        if option.name not in selected_options:
            continue
        selected = selected_options[option.name]
        labels = list(selected) if isinstance(selected, (list, tuple)) else [selected]
        for label in labels:
            choice = option.find_choice(label)
            if choice is None:
                continue
            total += choice.price
            breakdown.append(PriceLine(f"{option.name}: {label}", choice.price))

    return PriceResult(total=total, breakdown=breakdown)


def apply_required_defaults(
    product: ProductBase, selected_options: Mapping[str, object]
) -> Dict[str, object]:
    """Pre-select the first choice of every required radio the customer left empty."""
    out = dict(selected_options)
    for option in product.options:
        if option.type != "radio" or not option.required or not option.choices:
            continue
        if out.get(option.name) in (None, ""):
            out[option.name] = option.choices[0].label
    return out
