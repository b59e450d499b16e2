"""Order placement — command and handler."""

import json

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Float, String, Text
from protean.utils.globals import current_domain

from ordering.domain import logger, ordering
from ordering.order.order import Order, generate_order_id

# Order numbers carry four random characters; retry on the rare clash
_MAX_ID_ATTEMPTS = 5


@ordering.command(part_of="Order")
class PlaceOrder:
    owner_id = String(required=True, max_length=128)
    owner_email = String(max_length=254)  # Verified email from the identity token
    customer_details = Text(required=True)  # JSON: {name, phone, address, email}
    items = Text(required=True)  # JSON: list of {plan_name, price, quantity}
    total_price = Float(required=True)
    payment_method = String(max_length=50)


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        customer_details = dict(_loads(command.customer_details) or {})
        items_data = _loads(command.items) or []

        # The token email wins over whatever was typed at checkout
        customer_details["email"] = command.owner_email or customer_details.get("email")

        repo = current_domain.repository_for(Order)
        order_id = self._unused_order_id(repo)

        order = Order.place(
            order_id=order_id,
            owner_id=command.owner_id,
            customer_details=customer_details,
            items_data=items_data,
            total_price=command.total_price,
            payment_method=command.payment_method,
        )
        repo.add(order)

        logger.info(
            "order_placed",
            order_id=order.order_id,
            owner_id=order.owner_id,
            total_price=order.total_price,
            item_count=len(order.items),
        )
        return order

    @staticmethod
    def _unused_order_id(repo):
        for _ in range(_MAX_ID_ATTEMPTS):
            order_id = generate_order_id()
            if not repo.exists(order_id):
                return order_id
        raise ValidationError({"order_id": ["Could not allocate a unique order number"]})
