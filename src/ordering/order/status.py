"""Order status updates — command and handler.

Admins and delivery partners move orders along the delivery lifecycle. The
order is loaded, transitioned and written back as one unit of work, so two
concurrent updates resolve as last-write-wins.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import ORDER_STATUS_VALUES, Order, invalid_status_message


@ordering.command(part_of="Order")
class UpdateOrderStatus:
    order_id = String(identifier=True, required=True, max_length=40)
    status = String(required=True, max_length=30)
    changed_by = String(max_length=254)


@ordering.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_status(self, command):
        if command.status not in ORDER_STATUS_VALUES:
            raise ValidationError({"status": [invalid_status_message()]})

        repo = current_domain.repository_for(Order)
        order = repo.find(command.order_id)
        if order is None:
            raise ObjectNotFoundError("Order not found")

        previous = order.status
        order.transition_to(command.status)
        repo.add(order)

        logger.info(
            "order_status_updated",
            order_id=order.order_id,
            previous_status=previous,
            new_status=order.status,
            changed_by=command.changed_by,
        )
        return order
