"""FastAPI endpoints for the signed-in buyer's cart."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.access import Actor
from marketplace.api.auth import get_actor
from marketplace.api.presenters import present_cart
from marketplace.api.schemas import AddToCartRequest, ApiResponse, UpdateCartItemRequest
from marketplace.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from marketplace.cart.queries import get_cart

router = APIRouter(prefix="/api/users/cart", tags=["cart"])


def _cart_response(actor: Actor, message: str | None = None) -> ApiResponse:
    return ApiResponse(message=message, data={"cart": present_cart(get_cart(actor.user_id))})


@router.get("", response_model=ApiResponse)
async def read_cart(actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    return _cart_response(actor)


@router.post("", response_model=ApiResponse)
async def add_to_cart(body: AddToCartRequest, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    command = AddToCart(
        customer_id=actor.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
        customization=json.dumps(body.customization.model_dump()) if body.customization else None,
    )
    current_domain.process(command, asynchronous=False)
    return _cart_response(actor, "Item added to cart")


@router.delete("", response_model=ApiResponse)
async def clear_cart(actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    current_domain.process(ClearCart(customer_id=actor.user_id), asynchronous=False)
    return _cart_response(actor, "Cart cleared")


@router.put("/{product_id}", response_model=ApiResponse)
async def update_cart_item(
    product_id: str,
    body: UpdateCartItemRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = UpdateCartItem(customer_id=actor.user_id, product_id=product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return _cart_response(actor, "Cart updated")


@router.delete("/{product_id}", response_model=ApiResponse)
async def remove_from_cart(product_id: str, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    current_domain.process(RemoveFromCart(customer_id=actor.user_id, product_id=product_id), asynchronous=False)
    return _cart_response(actor, "Item removed from cart")
