"""In-memory stand-ins for the Postgres-backed stores (same method contracts)."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

from marine_shop.errors import DuplicateBrand, DuplicateOrderNumber, InvalidDirection, NotFound
from marine_shop.schemas.catalog import BrandIn, BrandOut, ModelSpecOut
from marine_shop.schemas.orders import OrderDraft, OrderOut
from marine_shop.schemas.products import Product, ProductIn
from marine_shop.services.products import db_id
from marine_shop.services.queries import clean_query
from marine_shop.schemas.queries import QueryIn, QueryOut

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeProductStore:
    def __init__(self):
        self.rows: Dict[int, Product] = {}
        self._next = 1

    def _build(self, pid: int, payload: ProductIn, display_order: int) -> Product:
        data = payload.model_dump(exclude={"optionRows", "displayOrder"})
        return Product(**data, id=str(pid), displayOrder=display_order)

    async def list(self, brand: Optional[str] = None) -> List[Product]:
        rows = [p for p in self.rows.values() if not brand or p.category == brand]
        return sorted(rows, key=lambda p: (p.displayOrder, int(p.id)))

    async def get(self, product_id: str) -> Product:
        pid = db_id(product_id)
        if pid not in self.rows:
            raise NotFound("product", product_id)
        return self.rows[pid]

    async def find_by_name(self, name, category=None):
        for p in sorted(self.rows.values(), key=lambda p: int(p.id)):
            if p.name == name and (category is None or p.category == category):
                return p
        return None

    async def create(self, payload: ProductIn) -> Product:
        order = payload.displayOrder
        if order is None:
            order = max((p.displayOrder for p in self.rows.values()), default=0) + 1
        pid = self._next
        self._next += 1
        self.rows[pid] = self._build(pid, payload, order)
        return self.rows[pid]

    async def update(self, product_id: str, payload: ProductIn) -> Product:
        current = await self.get(product_id)
        order = current.displayOrder if payload.displayOrder is None else payload.displayOrder
        pid = int(current.id)
        self.rows[pid] = self._build(pid, payload, order)
        return self.rows[pid]

    async def delete(self, product_id: str) -> None:
        current = await self.get(product_id)
        del self.rows[int(current.id)]

    async def move(self, product_id: str, direction: str) -> bool:
        if direction not in ("up", "down"):
            raise InvalidDirection(direction)
        current = await self.get(product_id)
        ordered = await self.list()
        if direction == "up":
            candidates = [p for p in ordered if p.displayOrder < current.displayOrder]
            sibling = candidates[-1] if candidates else None
        else:
            candidates = [p for p in ordered if p.displayOrder > current.displayOrder]
            sibling = candidates[0] if candidates else None
        if sibling is None:
            return False
        a, b = current.displayOrder, sibling.displayOrder
        self.rows[int(current.id)] = current.model_copy(update={"displayOrder": b})
        self.rows[int(sibling.id)] = sibling.model_copy(update={"displayOrder": a})
        return True


class FakeOrderStore:
    def __init__(self):
        self.rows: Dict[int, OrderOut] = {}
        self._next = 1

    async def create(self, draft: OrderDraft, date=None) -> OrderOut:
        if await self.exists_number(draft.orderNumber):
            raise DuplicateOrderNumber(draft.orderNumber)
        oid = self._next
        self._next += 1
        # strictly increasing dates so "newest first" is deterministic
        stamp = date or (_EPOCH + timedelta(minutes=oid))
        self.rows[oid] = OrderOut(**draft.model_dump(), id=str(oid), date=stamp)
        return self.rows[oid]

    async def exists_number(self, order_number: str) -> bool:
        return any(o.orderNumber == order_number for o in self.rows.values())

    async def list(self) -> List[OrderOut]:
        return sorted(self.rows.values(), key=lambda o: (o.date, int(o.id)), reverse=True)

    async def get(self, order_id: str) -> OrderOut:
        oid = db_id(order_id, "order")
        if oid not in self.rows:
            raise NotFound("order", order_id)
        return self.rows[oid]

    async def update_status(self, order_id: str, status: str) -> OrderOut:
        current = await self.get(order_id)
        self.rows[int(current.id)] = current.model_copy(update={"status": status})
        return self.rows[int(current.id)]

    async def delete(self, order_id: str) -> None:
        current = await self.get(order_id)
        del self.rows[int(current.id)]


class FakeBrandStore:
    def __init__(self):
        self.rows: Dict[int, BrandOut] = {}
        self._next = 1

    async def list(self) -> List[BrandOut]:
        return sorted(self.rows.values(), key=lambda b: b.name)

    async def get_by_name(self, name: str) -> Optional[BrandOut]:
        return next((b for b in self.rows.values() if b.name == name), None)

    async def create(self, payload: BrandIn) -> BrandOut:
        name = payload.name.strip()
        if await self.get_by_name(name):
            raise DuplicateBrand(name)
        bid = self._next
        self._next += 1
        self.rows[bid] = BrandOut(id=str(bid), name=name, logo=payload.logo or "")
        return self.rows[bid]

    async def update(self, brand_id: str, payload: BrandIn) -> BrandOut:
        bid = db_id(brand_id, "brand")
        if bid not in self.rows:
            raise NotFound("brand", brand_id)
        self.rows[bid] = BrandOut(id=str(bid), name=payload.name.strip(), logo=payload.logo or "")
        return self.rows[bid]

    async def delete(self, brand_id: str) -> None:
        bid = db_id(brand_id, "brand")
        if bid not in self.rows:
            raise NotFound("brand", brand_id)
        del self.rows[bid]


class FakeQueryStore:
    def __init__(self):
        self.rows: Dict[int, QueryOut] = {}
        self._next = 1

    async def create(self, payload: QueryIn) -> QueryOut:
        q = clean_query(payload)
        qid = self._next
        self._next += 1
        self.rows[qid] = QueryOut(
            id=str(qid), createdAt=_EPOCH + timedelta(minutes=qid), **q.model_dump()
        )
        return self.rows[qid]

    async def list(self, limit: int = 500) -> List[QueryOut]:
        return sorted(self.rows.values(), key=lambda q: q.createdAt, reverse=True)[:limit]

    async def delete(self, query_id: str) -> None:
        qid = db_id(query_id, "query")
        if qid not in self.rows:
            raise NotFound("query", query_id)
        del self.rows[qid]


class FakeModelSpecStore:
    def __init__(self):
        self.rows: Dict[str, ModelSpecOut] = {}

    async def get(self, model_name: str) -> Optional[ModelSpecOut]:
        return self.rows.get(model_name)

    async def list(self) -> List[ModelSpecOut]:
        return [self.rows[k] for k in sorted(self.rows)]

    async def upsert(self, model_name: str, specifications: Dict[str, str]) -> ModelSpecOut:
        name = model_name.strip()
        if not name:
            raise ValueError("model name is required")
        specs = {k: v for k, v in specifications.items() if k.strip() and str(v).strip()}
        self.rows[name] = ModelSpecOut(modelName=name, specifications=specs, updatedAt=_EPOCH)
        return self.rows[name]

    async def delete(self, model_name: str) -> None:
        if model_name not in self.rows:
            raise NotFound("model specification", model_name)
        del self.rows[model_name]


class FakeShopSettingsStore:
    def __init__(self):
        self.logo = ""

    async def get_logo(self) -> str:
        return self.logo

    async def set_logo(self, logo: str) -> None:
        self.logo = logo or ""


class RecordingNotifier:
    def __init__(self):
        self.events: List[dict] = []

    def subscribe(self, on_event):
        return lambda: None

    def publish(self, event):
        self.events.append(event)
