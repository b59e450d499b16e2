"""Pydantic request/response schemas for the Ordering API.

These are external contracts (anti-corruption layer) — separate from
internal Protean commands. Keys are camelCase on the wire.
"""

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class CustomerDetailsSchema(CamelModel):
    name: str
    phone: str
    address: str
    email: str | None = None


class OrderItemSchema(CamelModel):
    plan_name: str
    price: float = Field(ge=0)
    quantity: int = Field(ge=1, default=1)


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class PlaceOrderRequest(CamelModel):
    # Presence is checked by the route so every missing field yields the same message
    customer_details: CustomerDetailsSchema | None = None
    items: list[OrderItemSchema] | None = None
    total_price: float | None = None
    payment_method: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "customerDetails": {
                        "name": "Asha Rao",
                        "phone": "+91 98450 12345",
                        "address": "12 MG Road, Bengaluru",
                        "email": "asha@example.com",
                    },
                    "items": [{"planName": "Gold", "price": 1500, "quantity": 1}],
                    "totalPrice": 1500,
                    "paymentMethod": "cod",
                }
            ]
        }
    }


class UpdateOrderStatusRequest(CamelModel):
    status: str | None = None


class NotifyRequest(CamelModel):
    message: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class OrderSchema(CamelModel):
    order_id: str
    customer_details: CustomerDetailsSchema
    items: list[OrderItemSchema]
    total_price: float
    status: str
    payment_method: str
    owner_id: str
    timestamp: datetime
    delivered_at: datetime | None = None

    @classmethod
    def from_order(cls, order) -> "OrderSchema":
        details = order.customer_details
        return cls(
            order_id=order.order_id,
            customer_details=CustomerDetailsSchema(
                name=details.name,
                phone=details.phone,
                address=details.address,
                email=details.email,
            ),
            items=[
                OrderItemSchema(plan_name=item.plan_name, price=item.price, quantity=item.quantity)
                for item in order.items
            ],
            total_price=order.total_price,
            status=order.status,
            payment_method=order.payment_method,
            owner_id=order.owner_id,
            timestamp=order.placed_at,
            delivered_at=order.delivered_at,
        )


class OrderSummarySchema(CamelModel):
    order_id: str
    status: str
    total_price: float
    timestamp: datetime


class PlaceOrderResponse(CamelModel):
    message: str = "Order placed successfully!"
    order: OrderSummarySchema


class OrderResponse(CamelModel):
    order: OrderSchema


class OrderListResponse(CamelModel):
    orders: list[OrderSchema]
    total: int


class MyOrdersResponse(CamelModel):
    orders: list[OrderSchema]


class OrderStatusResponse(CamelModel):
    message: str = "Status updated"
    order: OrderSchema


class OrderStatsResponse(CamelModel):
    total: int
    pending: int
    preparing: int
    out_for_delivery: int
    delivered: int
    cancelled: int
    revenue: float
    avg_delivery_minutes: int
    total_customers: int
    today_orders: int
    today_revenue: float
    today_delivered: int
    new_customers_today: int


class CustomerSummarySchema(CamelModel):
    owner_id: str
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    order_count: int
    total_spent: float
    first_order: datetime
    last_order: datetime


class CustomerListResponse(CamelModel):
    customers: list[CustomerSummarySchema]
    total: int


class NotifyResponse(CamelModel):
    message: str = "Notification sent"
    count: int
