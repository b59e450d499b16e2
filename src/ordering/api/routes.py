"""FastAPI routes for the Ordering domain — orders, dashboards and admin tools."""

import json

from fastapi import APIRouter, Depends, HTTPException, Query
from protean.utils.globals import current_domain

from access.auth import get_principal, require_admin, require_staff
from access.principal import Principal, can_view_order
from ordering.api.schemas import (
    CustomerListResponse,
    CustomerSummarySchema,
    MyOrdersResponse,
    NotifyRequest,
    NotifyResponse,
    OrderListResponse,
    OrderResponse,
    OrderSchema,
    OrderStatsResponse,
    OrderStatusResponse,
    OrderSummarySchema,
    PlaceOrderRequest,
    PlaceOrderResponse,
    UpdateOrderStatusRequest,
)
from ordering.domain import logger
from ordering.order.maintenance import ClearOrders
from ordering.order.order import ORDER_STATUS_VALUES, Order, invalid_status_message
from ordering.order.placement import PlaceOrder
from ordering.order.statistics import compute_order_statistics, summarize_customers
from ordering.order.status import UpdateOrderStatus
from shared.schemas import MessageResponse

MISSING_ORDER_FIELDS = "Missing required fields: customerDetails, items, totalPrice"

router = APIRouter(prefix="/api/orders", tags=["orders"])
admin_router = APIRouter(prefix="/api/admin", tags=["admin"])
legacy_router = APIRouter(tags=["orders"])


# --- Customer endpoints ---


@router.post("", status_code=201, response_model=PlaceOrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    principal: Principal = Depends(get_principal),
) -> PlaceOrderResponse:
    if not body.customer_details or not body.items or not body.total_price:
        raise HTTPException(status_code=400, detail=MISSING_ORDER_FIELDS)

    command = PlaceOrder(
        owner_id=principal.subject_id,
        owner_email=principal.email,
        customer_details=json.dumps(body.customer_details.model_dump()),
        items=json.dumps([item.model_dump() for item in body.items]),
        total_price=body.total_price,
        payment_method=body.payment_method,
    )
    order = current_domain.process(command, asynchronous=False)
    return PlaceOrderResponse(
        order=OrderSummarySchema(
            order_id=order.order_id,
            status=order.status,
            total_price=order.total_price,
            timestamp=order.placed_at,
        )
    )


@router.get("/my", response_model=MyOrdersResponse)
async def list_my_orders(principal: Principal = Depends(get_principal)) -> MyOrdersResponse:
    orders = current_domain.repository_for(Order).owned_by(principal.subject_id)
    return MyOrdersResponse(orders=[OrderSchema.from_order(o) for o in orders])


# --- Staff endpoints ---


@router.get("/stats", response_model=OrderStatsResponse, dependencies=[Depends(require_admin)])
async def order_stats() -> OrderStatsResponse:
    orders = current_domain.repository_for(Order).everything()
    return OrderStatsResponse(**compute_order_statistics(orders).to_dict())


@router.get("", response_model=OrderListResponse, dependencies=[Depends(require_staff)])
async def list_orders(
    status: str | None = None,
    limit: int = Query(default=50, ge=1),
    offset: int | None = Query(default=None, ge=0),
    skip: int | None = Query(default=None, ge=0),
) -> OrderListResponse:
    start = offset if offset is not None else (skip or 0)
    orders, total = current_domain.repository_for(Order).page(status=status, limit=limit, offset=start)
    return OrderListResponse(orders=[OrderSchema.from_order(o) for o in orders], total=total)


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str, principal: Principal = Depends(get_principal)) -> OrderResponse:
    order = current_domain.repository_for(Order).find(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    if not can_view_order(principal, order.owner_id):
        raise HTTPException(status_code=403, detail="Forbidden — this order does not belong to you")
    return OrderResponse(order=OrderSchema.from_order(order))


@router.patch("/{order_id}/status", response_model=OrderStatusResponse)
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusRequest,
    principal: Principal = Depends(require_staff),
) -> OrderStatusResponse:
    if body.status not in ORDER_STATUS_VALUES:
        raise HTTPException(status_code=400, detail=invalid_status_message())

    command = UpdateOrderStatus(order_id=order_id, status=body.status, changed_by=principal.email)
    order = current_domain.process(command, asynchronous=False)
    return OrderStatusResponse(order=OrderSchema.from_order(order))


# --- Admin endpoints ---


@admin_router.delete("/orders", response_model=MessageResponse)
async def clear_orders(principal: Principal = Depends(require_admin)) -> MessageResponse:
    count = current_domain.process(ClearOrders(requested_by=principal.email), asynchronous=False)
    return MessageResponse(message=f"Deleted {count} orders")


@admin_router.get("/customers", response_model=CustomerListResponse, dependencies=[Depends(require_admin)])
async def list_customers() -> CustomerListResponse:
    customers = summarize_customers(current_domain.repository_for(Order).everything())
    return CustomerListResponse(
        customers=[CustomerSummarySchema(**c) for c in customers],
        total=len(customers),
    )


@admin_router.post("/notify", response_model=NotifyResponse)
async def broadcast_notification(
    body: NotifyRequest,
    principal: Principal = Depends(require_admin),
) -> NotifyResponse:
    if not body.message:
        raise HTTPException(status_code=400, detail="Message is required")

    owners = {order.owner_id for order in current_domain.repository_for(Order).everything()}
    logger.info("broadcast_notification", message=body.message, recipients=len(owners), sent_by=principal.email)
    return NotifyResponse(count=len(owners))


# --- Legacy path kept for older storefront builds ---


@legacy_router.get("/api/my-orders", response_model=list[OrderSchema])
async def list_my_orders_legacy(principal: Principal = Depends(get_principal)) -> list[OrderSchema]:
    orders = current_domain.repository_for(Order).owned_by(principal.subject_id)
    return [OrderSchema.from_order(o) for o in orders]
