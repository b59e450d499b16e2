"""Order statistics for the admin dashboard.

Figures are computed from a snapshot of the whole order collection on every
request; nothing is cached between calls. "Today" starts at midnight UTC.
"""

import math
from dataclasses import asdict, dataclass
from datetime import datetime

from ordering.order.order import OrderStatus, as_utc, utc_now


@dataclass(frozen=True)
class OrderStatistics:
    total: int = 0
    pending: int = 0
    preparing: int = 0
    out_for_delivery: int = 0
    delivered: int = 0
    cancelled: int = 0
    revenue: float = 0.0
    avg_delivery_minutes: int = 0
    total_customers: int = 0
    today_orders: int = 0
    today_revenue: float = 0.0
    today_delivered: int = 0
    new_customers_today: int = 0

    def to_dict(self) -> dict:
        return asdict(self)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def start_of_day(now: datetime | None = None) -> datetime:
    now = as_utc(now) or utc_now()
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def compute_order_statistics(orders, now=None) -> OrderStatistics:
    """Aggregate counts, revenue and delivery times over ``orders``.

    Revenue figures exclude cancelled orders. The average delivery time only
    considers delivered orders that carry a delivery timestamp.
    """
    cutoff = start_of_day(now)

    counts = {status: 0 for status in OrderStatus}
    revenue = 0.0
    delivery_minutes = []
    owners = set()
    today_orders = 0
    today_revenue = 0.0
    today_delivered = 0
    today_owners = set()

    for order in orders:
        status = OrderStatus(order.status)
        counts[status] += 1
        owners.add(order.owner_id)

        placed_at = as_utc(order.placed_at)
        delivered_at = as_utc(order.delivered_at)
        placed_today = placed_at is not None and placed_at >= cutoff

        if status != OrderStatus.CANCELLED:
            revenue += order.total_price
            if placed_today:
                today_revenue += order.total_price

        if status == OrderStatus.DELIVERED and delivered_at is not None:
            if placed_at is not None:
                delivery_minutes.append((delivered_at - placed_at).total_seconds() / 60)
            if delivered_at >= cutoff:
                today_delivered += 1

        if placed_today:
            today_orders += 1
            today_owners.add(order.owner_id)

    avg_delivery_minutes = round_half_up(sum(delivery_minutes) / len(delivery_minutes)) if delivery_minutes else 0

    return OrderStatistics(
        total=sum(counts.values()),
        pending=counts[OrderStatus.PENDING],
        preparing=counts[OrderStatus.PREPARING],
        out_for_delivery=counts[OrderStatus.OUT_FOR_DELIVERY],
        delivered=counts[OrderStatus.DELIVERED],
        cancelled=counts[OrderStatus.CANCELLED],
        revenue=revenue,
        avg_delivery_minutes=avg_delivery_minutes,
        total_customers=len(owners),
        today_orders=today_orders,
        today_revenue=today_revenue,
        today_delivered=today_delivered,
        new_customers_today=len(today_owners),
    )


def summarize_customers(orders) -> list[dict]:
    """Group orders by owner, newest activity first.

    Contact details come from each customer's most recent order.
    """
    customers = {}
    for order in sorted(orders, key=lambda o: as_utc(o.placed_at)):
        placed_at = as_utc(order.placed_at)
        details = order.customer_details
        summary = customers.setdefault(
            order.owner_id,
            {
                "owner_id": order.owner_id,
                "order_count": 0,
                "total_spent": 0.0,
                "first_order": placed_at,
            },
        )
        summary.update(
            name=details.name if details else None,
            email=details.email if details else None,
            phone=details.phone if details else None,
            address=details.address if details else None,
            last_order=placed_at,
        )
        summary["order_count"] += 1
        summary["total_spent"] += order.total_price

    return sorted(customers.values(), key=lambda c: c["last_order"], reverse=True)
