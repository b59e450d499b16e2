import pytest
from protean.integrations.pytest import DomainFixture
from protean.utils.globals import current_domain


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        # Clear all databases
        for _, provider in current_domain.providers.items():
            provider._data_reset()

        # Drain event stores
        current_domain.event_store.store._data_reset()


def order_payload(**overrides):
    payload = {
        "customerDetails": {
            "name": "Asha Rao",
            "phone": "+91 98450 12345",
            "address": "12 MG Road, Bengaluru",
            "email": "asha.checkout@example.com",
        },
        "items": [{"planName": "Gold Plan", "price": 1500, "quantity": 1}],
        "totalPrice": 1500,
        "paymentMethod": "upi",
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def make_payload():
    return order_payload


@pytest.fixture()
def place_order():
    """Place an order directly through the aggregate and persist it."""
    from ordering.order.order import Order, generate_order_id

    def _place(owner_id="uid-asha", total_price=1500.0, items=None, **details):
        customer = {
            "name": "Asha Rao",
            "phone": "+91 98450 12345",
            "address": "12 MG Road, Bengaluru",
            "email": "asha@example.com",
        }
        customer.update(details)
        order = Order.place(
            order_id=generate_order_id(),
            owner_id=owner_id,
            customer_details=customer,
            items_data=items or [{"plan_name": "Gold Plan", "price": total_price, "quantity": 1}],
            total_price=total_price,
        )
        current_domain.repository_for(Order).add(order)
        return order

    return _place
