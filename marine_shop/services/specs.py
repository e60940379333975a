# marine_shop/services/specs.py
"""
Upgrade stored product specs / standard equipment to one canonical shape.

Older rows keep specs as a plain JSON object, newer ones as an ordered list of
``{"key", "value"}`` pairs (JSONB objects do not keep key order). Everything is
normalised to the pair list when it crosses the storage boundary, so the rest
of the code only ever sees one shape.
"""
from __future__ import annotations

from typing import Any, Dict, List, Union

SpecPair = Dict[str, str]
EquipmentEntry = Union[str, Dict[str, Any]]


def _text(v: Any) -> str:
    if v is None:
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v).strip()


def normalize_specs(raw: Any) -> List[SpecPair]:
    if raw is None or raw == "":
        return []
    if isinstance(raw, dict):
        items = list(raw.items())
    elif isinstance(raw, (list, tuple)):
        items = []
        for entry in raw:
            if isinstance(entry, dict) and "key" in entry:
                items.append((entry.get("key"), entry.get("value")))
            elif isinstance(entry, (list, tuple)) and len(entry) == 2:
                items.append((entry[0], entry[1]))
            elif hasattr(entry, "key") and hasattr(entry, "value"):
                items.append((entry.key, entry.value))
            else:
                raise ValueError(f"unrecognised spec entry: {entry!r}")
    else:
        raise ValueError("specs must be an object or a list of {key, value} pairs")

    out: List[SpecPair] = []
    for key, value in items:
        k = _text(key)
        if not k:
            continue
        out.append({"key": k, "value": _text(value)})
    return out


def specs_as_mapping(pairs: List[SpecPair]) -> Dict[str, str]:
    """Flatten pairs for consumers that only need lookups (later keys win)."""
    return {p["key"]: p["value"] for p in pairs}


def normalize_standard_equipment(raw: Any) -> List[EquipmentEntry]:
    if raw is None or raw == "":
        return []
    if isinstance(raw, dict):
        # legacy {header: [items]} shape
        raw = [{"header": h, "items": items} for h, items in raw.items()]
    if not isinstance(raw, (list, tuple)):
        raise ValueError("standardEquipment must be a list")

    out: List[EquipmentEntry] = []
    for entry in raw:
        if isinstance(entry, str):
            if entry.strip():
                out.append(entry.strip())
            continue
        if hasattr(entry, "model_dump"):
            entry = entry.model_dump()
        if isinstance(entry, dict):
            items = entry.get("items") or []
            if isinstance(items, str):
                items = [items]
            out.append({
                "header": _text(entry.get("header")),
                "items": [_text(i) for i in items if _text(i)],
            })
            continue
        raise ValueError(f"unrecognised equipment entry: {entry!r}")
    return out
