"""Tests for Order aggregate placement and structure."""

import pytest
from protean.exceptions import ValidationError

from ordering.order.events import OrderPlaced
from ordering.order.order import Order, OrderStatus

CUSTOMER = {
    "name": "Asha Rao",
    "phone": "+91 98450 12345",
    "address": "12 MG Road, Bengaluru",
    "email": "asha@example.com",
}


def _place(**overrides):
    kwargs = {
        "order_id": "SVL-TEST-0001",
        "owner_id": "uid-asha",
        "customer_details": CUSTOMER,
        "items_data": [{"plan_name": "Gold Plan", "price": 1500.0, "quantity": 2}],
        "total_price": 3000.0,
    }
    kwargs.update(overrides)
    return Order.place(**kwargs)


class TestOrderPlacement:
    def test_new_order_is_pending(self):
        order = _place()
        assert order.status == OrderStatus.PENDING.value

    def test_new_order_has_no_delivery_time(self):
        order = _place()
        assert order.delivered_at is None

    def test_placement_sets_timestamp(self):
        order = _place()
        assert order.placed_at is not None

    def test_payment_method_defaults_to_cod(self):
        order = _place()
        assert order.payment_method == "cod"

    def test_payment_method_is_kept(self):
        order = _place(payment_method="upi")
        assert order.payment_method == "upi"

    def test_customer_snapshot_is_captured(self):
        order = _place()
        assert order.customer_details.name == "Asha Rao"
        assert order.customer_details.address == "12 MG Road, Bengaluru"
        assert order.customer_details.email == "asha@example.com"

    def test_items_are_copied_by_value(self):
        order = _place()
        assert len(order.items) == 1
        assert order.items[0].plan_name == "Gold Plan"
        assert order.items[0].price == 1500.0
        assert order.items[0].quantity == 2

    def test_item_quantity_defaults_to_one(self):
        order = _place(items_data=[{"plan_name": "Silver Plan", "price": 1300.0}], total_price=1300.0)
        assert order.items[0].quantity == 1

    def test_owner_is_recorded(self):
        order = _place(owner_id="uid-ravi")
        assert order.owner_id == "uid-ravi"

    def test_placement_raises_order_placed_event(self):
        order = _place()
        assert len(order._events) == 1
        event = order._events[0]
        assert isinstance(event, OrderPlaced)
        assert event.order_id == "SVL-TEST-0001"
        assert event.total_price == 3000.0
        assert event.item_count == 1


class TestOrderPlacementValidation:
    def test_empty_items_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place(items_data=[])
        assert "items" in exc.value.messages

    def test_zero_total_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _place(total_price=0)
        assert "total_price" in exc.value.messages

    def test_negative_item_price_rejected(self):
        with pytest.raises(ValidationError):
            _place(items_data=[{"plan_name": "Gold Plan", "price": -1.0, "quantity": 1}])

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError):
            _place(items_data=[{"plan_name": "Gold Plan", "price": 1500.0, "quantity": 0}])

    def test_missing_customer_field_rejected(self):
        with pytest.raises(ValidationError):
            _place(customer_details={"name": "Asha Rao", "phone": "123", "address": "Somewhere"})


class TestTotalPolicy:
    def test_item_total_sums_price_times_quantity(self):
        order = _place(
            items_data=[
                {"plan_name": "Gold Plan", "price": 1500.0, "quantity": 2},
                {"plan_name": "Silver Plan", "price": 1300.0},
            ],
            total_price=4300.0,
        )
        assert order.item_total == 4300.0

    def test_strict_policy_counts_every_item(self):
        items = [
            {"plan_name": "Gold Plan", "price": 1500.0, "quantity": 2},
            {"plan_name": "Silver Plan", "price": 1300.0},
        ]
        assert _place(items_data=items, total_price=4300.0, policy="strict").item_total == 4300.0
        with pytest.raises(ValidationError):
            _place(items_data=items, total_price=3000.0, policy="strict")

    def test_trusted_policy_accepts_mismatched_total(self):
        order = _place(total_price=999.0)
        assert order.total_price == 999.0

    def test_strict_policy_rejects_mismatched_total(self):
        with pytest.raises(ValidationError) as exc:
            _place(total_price=999.0, policy="strict")
        assert "total_price" in exc.value.messages

    def test_strict_policy_accepts_matching_total(self):
        order = _place(total_price=3000.0, policy="strict")
        assert order.total_price == 3000.0

    def test_strict_policy_tolerates_rounding(self):
        order = _place(total_price=3000.005, policy="strict")
        assert order.total_price == pytest.approx(3000.005)

    def test_strict_policy_from_environment(self, monkeypatch):
        monkeypatch.setenv("ORDER_TOTAL_POLICY", "strict")
        with pytest.raises(ValidationError):
            _place(total_price=1.0)

    def test_unknown_policy_is_a_configuration_error(self):
        with pytest.raises(ValueError):
            _place(policy="lenient")
