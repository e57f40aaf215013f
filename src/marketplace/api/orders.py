"""FastAPI endpoints for orders."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from marketplace.access import Actor
from marketplace.api.auth import get_actor
from marketplace.api.presenters import present_dashboard, present_order
from marketplace.api.schemas import (
    ApiResponse,
    CancelOrderRequest,
    PlaceOrderRequest,
    RecordPaymentRequest,
    ReturnRequest,
    UpdateStatusRequest,
)
from marketplace.ordering.cancellation import CancelOrder
from marketplace.ordering.payment import RecordPayment
from marketplace.ordering.placement import PlaceOrder
from marketplace.ordering.queries import get_order, list_customer_orders, seller_dashboard
from marketplace.ordering.returns import RequestReturn
from marketplace.ordering.status import UpdateOrderStatus

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", status_code=201, response_model=ApiResponse)
async def place_order(body: PlaceOrderRequest, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    items = [
        {
            "product_id": item.product,
            "quantity": item.quantity,
            "customization": item.customization.model_dump() if item.customization else None,
        }
        for item in body.items
    ]
    billing = body.billing_address.model_dump(exclude_none=True) if body.billing_address else None
    command = PlaceOrder(
        customer_id=actor.user_id,
        items=json.dumps(items),
        shipping_address=json.dumps(body.shipping_address.model_dump(exclude_none=True)),
        billing_address=json.dumps(billing) if billing else None,
        payment_method=body.payment.method,
    )
    order_id = current_domain.process(command, asynchronous=False)
    order = get_order(order_id, actor)
    return ApiResponse(message="Order created successfully", data={"order": present_order(order)})


@router.get("", response_model=ApiResponse)
async def list_orders(
    page: int = 1,
    limit: int | None = None,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    result = list_customer_orders(actor, page, limit)
    return ApiResponse(
        data={
            "orders": [present_order(order) for order in result.items],
            "pagination": result.to_dict(),
        }
    )


@router.get("/artisan/dashboard", response_model=ApiResponse)
async def dashboard(actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    return ApiResponse(data=present_dashboard(seller_dashboard(actor)))


@router.get("/{order_id}", response_model=ApiResponse)
async def read_order(order_id: str, actor: Actor = Depends(get_actor)) -> ApiResponse:  # noqa: B008
    return ApiResponse(data={"order": present_order(get_order(order_id, actor))})


@router.put("/{order_id}/status", response_model=ApiResponse)
async def update_status(
    order_id: str,
    body: UpdateStatusRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = UpdateOrderStatus(
        order_id=order_id,
        actor_id=actor.user_id,
        actor_role=actor.role,
        status=body.status,
        note=body.note,
    )
    current_domain.process(command, asynchronous=False)
    order = get_order(order_id, actor)
    return ApiResponse(message="Order status updated successfully", data={"order": present_order(order)})


@router.post("/{order_id}/cancel", response_model=ApiResponse)
async def cancel_order(
    order_id: str,
    body: CancelOrderRequest | None = None,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = CancelOrder(
        order_id=order_id,
        actor_id=actor.user_id,
        actor_role=actor.role,
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    order = get_order(order_id, actor)
    return ApiResponse(message="Order cancelled successfully", data={"order": present_order(order)})


@router.post("/{order_id}/payment", response_model=ApiResponse)
async def record_payment(
    order_id: str,
    body: RecordPaymentRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = RecordPayment(
        order_id=order_id,
        actor_id=actor.user_id,
        actor_role=actor.role,
        transaction_id=body.transaction_id,
    )
    current_domain.process(command, asynchronous=False)
    order = get_order(order_id, actor)
    return ApiResponse(message="Payment recorded", data={"order": present_order(order)})


@router.post("/{order_id}/return", response_model=ApiResponse)
async def request_return(
    order_id: str,
    body: ReturnRequest,
    actor: Actor = Depends(get_actor),  # noqa: B008
) -> ApiResponse:
    command = RequestReturn(order_id=order_id, actor_id=actor.user_id, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    order = get_order(order_id, actor)
    return ApiResponse(message="Return requested", data={"order": present_order(order)})
