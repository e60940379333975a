# marine_shop/services/options.py
from __future__ import annotations

import json
import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional

from ..schemas.products import Choice, OptionEditorRow, ProductOption

logger = logging.getLogger(__name__)

OPTION_TYPES = ("radio", "checkbox")


def _parse_choices(text: str) -> Optional[List[Choice]]:
    try:
        raw = json.loads(text)
    except (TypeError, json.JSONDecodeError):
        return None
    if not isinstance(raw, list):
        return None

    choices: List[Choice] = []
    for entry in raw:
        if not isinstance(entry, dict):
            return None
        label = str(entry.get("label") or "").strip()
        if not label:
            return None
        price = entry.get("price", 0)
        if isinstance(price, bool):
            return None
        try:
            price = Decimal(str(price if price not in (None, "") else 0))
        except InvalidOperation:
            return None
        if not price.is_finite():
            return None
        choices.append(Choice(label=label, price=price))
    return choices


def parse_option_editor_payload(rows: Iterable[Any]) -> List[ProductOption]:
    """
    Turn admin editor rows into product options.

    A row is dropped whole when its name is blank or its choices JSON does not
    parse to a list of ``{label, price}`` objects.
    """
    options: List[ProductOption] = []
    for row in rows:
        if isinstance(row, dict):
            row = OptionEditorRow(**row)
        name = (row.name or "").strip()
        if not name:
            continue
        choices = _parse_choices(row.choicesJSON)
        if choices is None:
            logger.warning("dropping option %r: invalid choices JSON", name)
            continue
        opt_type = row.type if row.type in OPTION_TYPES else "radio"
        options.append(
            ProductOption(name=name, type=opt_type, required=bool(row.required), choices=choices)
        )
    return options
