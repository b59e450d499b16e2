"""Order aggregate — the core of the ordering domain.

An Order is a snapshot of a checkout: who ordered, what plans they bought and
at what price, and where it should be delivered. After placement only the
delivery status moves.

State Machine:
    Pending → Preparing → Out for Delivery → Delivered
    Cancelled

Which moves are allowed is controlled by ORDER_TRANSITION_POLICY:
    permissive   (default) any status may be written over any other
    forward_only only forward moves along the main path, plus Cancelled from
                 any non-terminal state
Writing the current status again is always accepted.
"""

import math
import os
import secrets
import string
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Integer, String, ValueObject

from ordering.domain import ordering
from ordering.order.events import OrderPlaced, OrderStatusChanged


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "Pending"
    PREPARING = "Preparing"
    OUT_FOR_DELIVERY = "Out for Delivery"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


ORDER_STATUS_VALUES = [status.value for status in OrderStatus]


def invalid_status_message() -> str:
    return "Invalid status. Must be one of: " + ", ".join(ORDER_STATUS_VALUES)


# ---------------------------------------------------------------------------
# Transition policies
# ---------------------------------------------------------------------------
PERMISSIVE_TRANSITIONS = {status: set(OrderStatus) for status in OrderStatus}

FORWARD_ONLY_TRANSITIONS = {
    OrderStatus.PENDING: {
        OrderStatus.PREPARING,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.PREPARING: {
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.DELIVERED,
        OrderStatus.CANCELLED,
    },
    OrderStatus.OUT_FOR_DELIVERY: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),  # Terminal
    OrderStatus.CANCELLED: set(),  # Terminal
}

TRANSITION_POLICIES = {
    "permissive": PERMISSIVE_TRANSITIONS,
    "forward_only": FORWARD_ONLY_TRANSITIONS,
}

TOTAL_POLICIES = ("trusted", "strict")
TOTAL_TOLERANCE = 0.01


def transition_map(policy=None):
    """Allowed moves for ``policy``, defaulting to ORDER_TRANSITION_POLICY."""
    policy = (policy or os.getenv("ORDER_TRANSITION_POLICY") or "permissive").lower()
    if policy not in TRANSITION_POLICIES:
        raise ValueError(f"Unknown order transition policy: {policy}")
    return TRANSITION_POLICIES[policy]


def total_policy(policy=None) -> str:
    policy = (policy or os.getenv("ORDER_TOTAL_POLICY") or "trusted").lower()
    if policy not in TOTAL_POLICIES:
        raise ValueError(f"Unknown order total policy: {policy}")
    return policy


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
_BASE36_ALPHABET = string.digits + string.ascii_uppercase


def utc_now() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC so stored and fresh values compare cleanly."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_base36(number: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_order_id(now: datetime | None = None) -> str:
    """``SVL-<base36 epoch millis>-<4 random base36 chars>``, upper-case."""
    now = as_utc(now) or utc_now()
    millis = math.floor(now.timestamp() * 1000)
    suffix = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(4))
    return f"SVL-{to_base36(millis)}-{suffix}"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@ordering.value_object(part_of="Order")
class CustomerDetails:
    """Contact and delivery details captured at checkout.

    The snapshot is never refreshed: it records where this order went,
    regardless of later changes to the customer's profile.
    """

    name = String(required=True, max_length=255)
    phone = String(required=True, max_length=30)
    address = String(required=True, max_length=1000)
    email = String(required=True, max_length=254)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@ordering.entity(part_of="Order")
class OrderItem:
    """A meal plan bought in this order, with the price paid at checkout."""

    plan_name = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    quantity = Integer(min_value=1, default=1)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@ordering.aggregate
class Order:
    order_id = String(identifier=True, max_length=40)
    customer_details = ValueObject(CustomerDetails, required=True)
    items = HasMany(OrderItem)
    total_price = Float(required=True)
    status = String(choices=OrderStatus, default=OrderStatus.PENDING.value)
    payment_method = String(max_length=50, default="cod")
    owner_id = String(required=True, max_length=128)
    placed_at = DateTime(default=utc_now)
    delivered_at = DateTime()

    @invariant.post
    def delivered_at_cannot_precede_placement(self):
        if self.delivered_at and self.placed_at and as_utc(self.delivered_at) < as_utc(self.placed_at):
            raise ValidationError({"delivered_at": ["Delivery time cannot be before the order was placed"]})

    # -------------------------------------------------------------------
    # Factory method
    # -------------------------------------------------------------------
    @classmethod
    def place(
        cls,
        order_id,
        owner_id,
        customer_details,
        items_data,
        total_price,
        payment_method=None,
        policy=None,
    ):
        """Place a new order in the Pending state.

        Args:
            order_id: Public order number (see ``generate_order_id``).
            owner_id: Subject id of the authenticated customer.
            customer_details: Dict with name, phone, address and email.
            items_data: Non-empty list of dicts with plan_name, price, quantity.
            total_price: Order total as submitted at checkout.
            payment_method: Free-text payment tag, ``cod`` when omitted.
            policy: Total policy override; see ``total_policy``.
        """
        if not items_data:
            raise ValidationError({"items": ["Order must contain at least one item"]})
        if total_price is None or total_price <= 0:
            raise ValidationError({"total_price": ["Total price must be greater than zero"]})

        items = [
            OrderItem(
                plan_name=item.get("plan_name"),
                price=item.get("price"),
                quantity=item["quantity"] if item.get("quantity") is not None else 1,
            )
            for item in items_data
        ]

        now = utc_now()
        order = cls(
            order_id=order_id,
            owner_id=owner_id,
            customer_details=CustomerDetails(**customer_details),
            items=items,
            total_price=total_price,
            payment_method=payment_method or "cod",
            status=OrderStatus.PENDING.value,
            placed_at=now,
        )

        if total_policy(policy) == "strict":
            expected = order.item_total
            if abs(expected - total_price) > TOTAL_TOLERANCE:
                raise ValidationError(
                    {"total_price": [f"Total price {total_price:.2f} does not match the items total {expected:.2f}"]}
                )

        order.raise_(
            OrderPlaced(
                order_id=order.order_id,
                owner_id=order.owner_id,
                total_price=order.total_price,
                item_count=len(items),
                payment_method=order.payment_method,
                placed_at=now,
            )
        )
        return order

    # -------------------------------------------------------------------
    # Status lifecycle
    # -------------------------------------------------------------------
    def can_transition_to(self, target_status, policy=None) -> bool:
        current = OrderStatus(self.status)
        target = OrderStatus(target_status)
        return target == current or target in transition_map(policy).get(current, set())

    def transition_to(self, target_status, policy=None):
        """Move the order to ``target_status``.

        Delivered writes stamp ``delivered_at`` each time; other moves leave
        an existing ``delivered_at`` in place.
        """
        target = OrderStatus(target_status)
        previous = self.status
        if not self.can_transition_to(target, policy):
            raise ValidationError({"status": [f"Cannot transition from {previous} to {target.value}"]})

        now = utc_now()
        with atomic_change(self):
            self.status = target.value
            if target == OrderStatus.DELIVERED:
                self.delivered_at = now

        self.raise_(
            OrderStatusChanged(
                order_id=self.order_id,
                previous_status=previous,
                new_status=target.value,
                changed_at=now,
                delivered_at=self.delivered_at,
            )
        )

    @property
    def item_total(self) -> float:
        return sum(item.price * item.quantity for item in self.items)
