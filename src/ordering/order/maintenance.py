"""Bulk maintenance of the order collection."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order


@ordering.command(part_of="Order")
class ClearOrders:
    """Remove every order. Admin-only housekeeping for demo and staging data."""

    requested_by = String(max_length=254)


@ordering.command_handler(part_of=Order)
class ClearOrdersHandler:
    @handle(ClearOrders)
    def clear_orders(self, command):
        count = current_domain.repository_for(Order).clear()
        logger.warning("orders_cleared", count=count, requested_by=command.requested_by)
        return count
