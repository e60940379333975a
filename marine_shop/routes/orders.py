# marine_shop/routes/orders.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from ..deps import get_notifier, get_order_store, get_product_store
from ..schemas.orders import OrderIn, OrderOut, PriceQuoteIn, PriceQuoteOut
from ..services.events import Notifier
from ..services.orders import OrderStore, place_order, price_quote
from ..services.pricing import vat_inclusive
from ..services.products import ProductStore

router = APIRouter(prefix="/api", tags=["orders"])


@router.post("/orders", response_model=OrderOut, status_code=201)
async def create_order_endpoint(
    body: OrderIn,
    products: ProductStore = Depends(get_product_store),
    orders: OrderStore = Depends(get_order_store),
    notifier: Notifier = Depends(get_notifier),
):
    """
    Price the customer's selection server-side and store the order.
    The client only sends the product id, its selection and contact details.
    """
    return await place_order(products, orders, body, notifier)


@router.post("/price-quote", response_model=PriceQuoteOut)
async def price_quote_endpoint(
    body: PriceQuoteIn,
    products: ProductStore = Depends(get_product_store),
):
    product, selection, priced = await price_quote(products, body.productId, body.selectedOptions)
    return PriceQuoteOut(
        productId=product.id,
        selectedOptions=selection,
        priceBreakdown=[l.as_dict() for l in priced.breakdown],
        totalExclVAT=priced.total,
        totalInclVAT=vat_inclusive(priced.total),
    )
