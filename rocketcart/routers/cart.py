"""
Cart Router

Exposes the session CartStore over HTTP for the storefront UI.

Response format:
- items carry price both as a number and formatted for display
- rejected and failed operations answer with outcome + localized message
"""
from fastapi import APIRouter, Depends, HTTPException, Request

from rocketcart import config
from rocketcart.cart import Cart, CartOutcome, CartResult, CartStore
from rocketcart.models import AddProductRequest, UpdateProductAmountRequest
from rocketcart.services.money import format_money, to_float

router = APIRouter(tags=["cart"])

OUTCOME_STATUS_CODES = {
    CartOutcome.OUT_OF_STOCK: 409,
    CartOutcome.INVALID_AMOUNT: 422,
    CartOutcome.PRODUCT_NOT_FOUND: 404,
    CartOutcome.ADDITION_FAILED: 502,
    CartOutcome.REMOVAL_FAILED: 502,
    CartOutcome.UPDATE_FAILED: 502,
}


def get_cart_store(request: Request) -> CartStore:
    store = getattr(request.app.state, "cart_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Cart is not ready")
    return store


def _format_cart_response(cart: Cart) -> dict:
    currency = config.CART_CURRENCY
    return {
        "items": [
            {
                "id": item.id,
                "name": item.name,
                "image_url": item.image_url,
                "amount": item.amount,
                "price": to_float(item.price),
                "price_formatted": format_money(item.price, currency),
                "subtotal": to_float(item.total_price),
                "subtotal_formatted": format_money(item.total_price, currency),
            }
            for item in cart
        ],
        "size": cart.size,
        "total_items": cart.total_items,
        "total": to_float(cart.subtotal),
        "total_formatted": format_money(cart.subtotal, currency),
        "currency": currency,
    }


def _result_response(result: CartResult) -> dict:
    if not result.ok:
        raise HTTPException(
            status_code=OUTCOME_STATUS_CODES[result.outcome],
            detail={
                "outcome": result.outcome.value,
                "message": result.message,
                "product_id": result.product_id,
            },
        )

    response = _format_cart_response(result.cart)
    response["outcome"] = result.outcome.value
    return response


@router.get("/cart")
async def get_cart(store: CartStore = Depends(get_cart_store)):
    """Get the current cart."""
    return _format_cart_response(store.get_cart())


@router.post("/cart/add")
async def add_product(request: AddProductRequest, store: CartStore = Depends(get_cart_store)):
    """Add one unit of a product."""
    return _result_response(await store.add_product(request.product_id))


@router.patch("/cart/item")
async def update_product_amount(request: UpdateProductAmountRequest, store: CartStore = Depends(get_cart_store)):
    """Set a product's amount."""
    return _result_response(await store.update_product_amount(request.product_id, request.amount))


@router.delete("/cart/item/{product_id}")
async def remove_product(product_id: int, store: CartStore = Depends(get_cart_store)):
    """Remove a product from the cart."""
    return _result_response(await store.remove_product(product_id))
