"""FastAPI routes for orders: checkout, fulfilment updates, cancellation and reads."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from marketplace.ordering.api.schemas import (
    CancelOrderRequest,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    PlaceOrderRequest,
    UpdateStatusRequest,
)
from marketplace.ordering.order.cancellation import CancelOrder
from marketplace.ordering.order.placement import PlaceOrder
from marketplace.ordering.order.queries import find_order_for, list_orders_for
from marketplace.ordering.order.status import UpdateOrderStatus
from marketplace.shared.access import Caller
from marketplace.shared.http import current_caller
from marketplace.shared.schemas import PaginationSchema

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", status_code=201, response_model=OrderResponse)
async def place_order(body: PlaceOrderRequest, caller: Caller = Depends(current_caller)) -> OrderResponse:
    command = PlaceOrder(
        customer_id=caller.user_id,
        actor_role=caller.role.value,
        items=json.dumps([line.model_dump() for line in body.items]),
        shipping_address=json.dumps(body.shipping_address.model_dump()),
        payment_method=body.payment_info.method,
        transaction_id=body.payment_info.transaction_id,
    )
    order_id = current_domain.process(command, asynchronous=False)
    return OrderResponse(data=OrderSchema.from_order(find_order_for(caller, order_id)))


@router.get("", response_model=OrderListResponse)
async def list_orders(
    status: str | None = None,
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    caller: Caller = Depends(current_caller),
) -> OrderListResponse:
    result = list_orders_for(caller, status=status, page=page, limit=limit)
    return OrderListResponse(
        count=result.count,
        data=[OrderSchema.from_order(order) for order in result.items],
        pagination=PaginationSchema.from_page(result),
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, caller: Caller = Depends(current_caller)) -> OrderResponse:
    return OrderResponse(data=OrderSchema.from_order(find_order_for(caller, order_id)))


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str, body: UpdateStatusRequest, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    tracking = body.tracking_info.model_dump(exclude_none=True) if body.tracking_info else None
    command = UpdateOrderStatus(
        order_id=order_id,
        actor_id=caller.user_id,
        actor_role=caller.role.value,
        status=body.status,
        note=body.note,
        tracking=json.dumps(tracking) if tracking else None,
        estimated_completion_date=(
            body.estimated_completion_date.isoformat() if body.estimated_completion_date else None
        ),
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse(data=OrderSchema.from_order(find_order_for(caller, order_id)))


@router.put("/{order_id}/cancel", response_model=OrderResponse)
async def cancel_order(
    order_id: str, body: CancelOrderRequest | None = None, caller: Caller = Depends(current_caller)
) -> OrderResponse:
    command = CancelOrder(
        order_id=order_id,
        actor_id=caller.user_id,
        actor_role=caller.role.value,
        reason=body.reason if body else None,
    )
    current_domain.process(command, asynchronous=False)
    return OrderResponse(data=OrderSchema.from_order(find_order_for(caller, order_id)))
