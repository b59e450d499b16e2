"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Integer, String

from ordering.domain import ordering


@ordering.event(part_of="Order")
class OrderPlaced:
    """A customer placed a new order at checkout."""

    __version__ = "v1"

    order_id = String(required=True, max_length=40)
    owner_id = String(required=True, max_length=128)
    total_price = Float(required=True)
    item_count = Integer(required=True)
    payment_method = String(max_length=50)
    placed_at = DateTime(required=True)


@ordering.event(part_of="Order")
class OrderStatusChanged:
    """An admin or delivery partner moved the order to a new status."""

    __version__ = "v1"

    order_id = String(required=True, max_length=40)
    previous_status = String(required=True, max_length=30)
    new_status = String(required=True, max_length=30)
    changed_at = DateTime(required=True)
    delivered_at = DateTime()
