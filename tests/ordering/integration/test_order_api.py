"""Integration tests for the Orders API endpoints via TestClient."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ordering.api import admin_router, legacy_router, router
from shared.errors import register_error_handlers

MISSING_FIELDS = "Missing required fields: customerDetails, items, totalPrice"


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    app.include_router(admin_router)
    app.include_router(legacy_router)
    register_error_handlers(app)
    return TestClient(app)


def _place(client, headers, payload):
    response = client.post("/api/orders", json=payload, headers=headers)
    assert response.status_code == 201
    return response.json()["order"]["orderId"]


class TestAuthentication:
    def test_missing_token(self, client, make_payload):
        response = client.post("/api/orders", json=make_payload())
        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized — no token provided"}

    def test_malformed_header(self, client, make_payload):
        response = client.post("/api/orders", json=make_payload(), headers={"Authorization": "Token abc"})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized — no token provided"

    def test_invalid_token(self, client, make_payload):
        response = client.post("/api/orders", json=make_payload(), headers={"Authorization": "Bearer forged"})
        assert response.status_code == 401
        assert response.json()["error"] == "Unauthorized — invalid token"


class TestPlaceOrderAPI:
    def test_place_returns_201_with_summary(self, client, customer_headers, make_payload):
        response = client.post("/api/orders", json=make_payload(), headers=customer_headers)
        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Order placed successfully!"
        assert body["order"]["orderId"].startswith("SVL-")
        assert body["order"]["status"] == "Pending"
        assert body["order"]["totalPrice"] == 1500
        assert "timestamp" in body["order"]

    @pytest.mark.parametrize("missing", ["customerDetails", "items", "totalPrice"])
    def test_missing_field(self, client, customer_headers, make_payload, missing):
        payload = make_payload()
        del payload[missing]
        response = client.post("/api/orders", json=payload, headers=customer_headers)
        assert response.status_code == 400
        assert response.json() == {"error": MISSING_FIELDS}

    def test_empty_items(self, client, customer_headers, make_payload):
        response = client.post("/api/orders", json=make_payload(items=[]), headers=customer_headers)
        assert response.status_code == 400
        assert response.json()["error"] == MISSING_FIELDS

    def test_negative_price_rejected(self, client, customer_headers, make_payload):
        payload = make_payload(items=[{"planName": "Gold Plan", "price": -10, "quantity": 1}])
        response = client.post("/api/orders", json=payload, headers=customer_headers)
        assert response.status_code == 400
        assert "error" in response.json()

    def test_customer_email_comes_from_token(self, client, customer_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        order = client.get(f"/api/orders/{order_id}", headers=customer_headers).json()["order"]
        assert order["customerDetails"]["email"] == "asha@example.com"
        assert order["paymentMethod"] == "upi"

    def test_snake_case_body_accepted(self, client, customer_headers):
        payload = {
            "customer_details": {"name": "Asha Rao", "phone": "123", "address": "Somewhere"},
            "items": [{"plan_name": "Silver Plan", "price": 1300}],
            "total_price": 1300,
        }
        response = client.post("/api/orders", json=payload, headers=customer_headers)
        assert response.status_code == 201


class TestMyOrdersAPI:
    def test_lists_only_own_orders_newest_first(self, client, customer_headers, other_customer_headers, make_payload):
        first = _place(client, customer_headers, make_payload())
        _place(client, other_customer_headers, make_payload())
        second = _place(client, customer_headers, make_payload())

        response = client.get("/api/orders/my", headers=customer_headers)
        assert response.status_code == 200
        assert [o["orderId"] for o in response.json()["orders"]] == [second, first]

    def test_legacy_path_returns_bare_list(self, client, customer_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        response = client.get("/api/my-orders", headers=customer_headers)
        assert response.status_code == 200
        assert [o["orderId"] for o in response.json()] == [order_id]


class TestReadOrderAPI:
    def test_owner_can_read(self, client, customer_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        response = client.get(f"/api/orders/{order_id}", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["order"]["orderId"] == order_id
        assert response.json()["order"]["deliveredAt"] is None

    def test_other_customer_forbidden(self, client, customer_headers, other_customer_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        response = client.get(f"/api/orders/{order_id}", headers=other_customer_headers)
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden — this order does not belong to you"}

    def test_missing_order_is_404_for_customers(self, client, customer_headers):
        response = client.get("/api/orders/SVL-NOPE-0000", headers=customer_headers)
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}

    def test_admin_can_read_any_order(self, client, customer_headers, admin_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        assert client.get(f"/api/orders/{order_id}", headers=admin_headers).status_code == 200

    def test_delivery_partner_can_read_any_order(self, client, customer_headers, delivery_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        assert client.get(f"/api/orders/{order_id}", headers=delivery_headers).status_code == 200


class TestListOrdersAPI:
    def test_customer_forbidden(self, client, customer_headers):
        response = client.get("/api/orders", headers=customer_headers)
        assert response.status_code == 403
        assert response.json() == {"error": "Forbidden — insufficient permissions"}

    def test_delivery_partner_can_list(self, client, customer_headers, delivery_headers, make_payload):
        _place(client, customer_headers, make_payload())
        response = client.get("/api/orders", headers=delivery_headers)
        assert response.status_code == 200
        assert response.json()["total"] == 1

    def test_status_filter(self, client, customer_headers, admin_headers, make_payload):
        keep = _place(client, customer_headers, make_payload())
        _place(client, customer_headers, make_payload())
        client.patch(f"/api/orders/{keep}/status", json={"status": "Preparing"}, headers=admin_headers)

        response = client.get("/api/orders", params={"status": "Preparing"}, headers=admin_headers)
        body = response.json()
        assert [o["orderId"] for o in body["orders"]] == [keep]
        assert body["total"] == 1

    def test_pagination_with_skip_alias(self, client, customer_headers, admin_headers, make_payload):
        ids = [_place(client, customer_headers, make_payload()) for _ in range(4)]
        response = client.get("/api/orders", params={"limit": 2, "skip": 1}, headers=admin_headers)
        body = response.json()
        assert [o["orderId"] for o in body["orders"]] == [ids[2], ids[1]]
        assert body["total"] == 4

    def test_pagination_with_offset(self, client, customer_headers, admin_headers, make_payload):
        ids = [_place(client, customer_headers, make_payload()) for _ in range(3)]
        response = client.get("/api/orders", params={"limit": 1, "offset": 2}, headers=admin_headers)
        assert [o["orderId"] for o in response.json()["orders"]] == [ids[0]]


class TestUpdateStatusAPI:
    def test_admin_updates_status(self, client, customer_headers, admin_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        response = client.patch(f"/api/orders/{order_id}/status", json={"status": "Preparing"}, headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Status updated"
        assert body["order"]["status"] == "Preparing"

    def test_delivered_stamps_delivered_at(self, client, customer_headers, delivery_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        response = client.patch(
            f"/api/orders/{order_id}/status", json={"status": "Delivered"}, headers=delivery_headers
        )
        assert response.json()["order"]["deliveredAt"] is not None

    def test_customer_cannot_update(self, client, customer_headers, make_payload):
        order_id = _place(client, customer_headers, make_payload())
        response = client.patch(
            f"/api/orders/{order_id}/status", json={"status": "Delivered"}, headers=customer_headers
        )
        assert response.status_code == 403

    def test_invalid_status(self, client, admin_headers):
        response = client.patch("/api/orders/SVL-NOPE-0000/status", json={"status": "Lost"}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {
            "error": "Invalid status. Must be one of: Pending, Preparing, Out for Delivery, Delivered, Cancelled"
        }

    def test_unknown_order(self, client, admin_headers):
        response = client.patch(
            "/api/orders/SVL-NOPE-0000/status", json={"status": "Preparing"}, headers=admin_headers
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Order not found"}


class TestStatsAPI:
    def test_admin_only(self, client, delivery_headers):
        assert client.get("/api/orders/stats", headers=delivery_headers).status_code == 403

    def test_stats_shape(self, client, customer_headers, other_customer_headers, admin_headers, make_payload):
        cancelled = _place(client, customer_headers, make_payload())
        _place(client, other_customer_headers, make_payload(totalPrice=1300))
        client.patch(f"/api/orders/{cancelled}/status", json={"status": "Cancelled"}, headers=admin_headers)

        response = client.get("/api/orders/stats", headers=admin_headers)
        assert response.status_code == 200
        stats = response.json()
        assert stats["total"] == 2
        assert stats["pending"] == 1
        assert stats["cancelled"] == 1
        assert stats["revenue"] == 1300
        assert stats["avgDeliveryMinutes"] == 0
        assert stats["totalCustomers"] == 2
        assert stats["todayOrders"] == 2
        assert stats["todayRevenue"] == 1300
        assert stats["newCustomersToday"] == 2
        assert set(stats) == {
            "total",
            "pending",
            "preparing",
            "outForDelivery",
            "delivered",
            "cancelled",
            "revenue",
            "avgDeliveryMinutes",
            "totalCustomers",
            "todayOrders",
            "todayRevenue",
            "todayDelivered",
            "newCustomersToday",
        }


class TestAdminOrderTools:
    def test_clear_orders(self, client, customer_headers, admin_headers, make_payload):
        _place(client, customer_headers, make_payload())
        _place(client, customer_headers, make_payload())
        response = client.delete("/api/admin/orders", headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Deleted 2 orders"}
        assert client.get("/api/orders", headers=admin_headers).json()["total"] == 0

    def test_clear_orders_admin_only(self, client, delivery_headers):
        assert client.delete("/api/admin/orders", headers=delivery_headers).status_code == 403

    def test_customer_summary(self, client, customer_headers, other_customer_headers, admin_headers, make_payload):
        _place(client, customer_headers, make_payload())
        _place(client, customer_headers, make_payload(totalPrice=1300))
        _place(client, other_customer_headers, make_payload())

        response = client.get("/api/admin/customers", headers=admin_headers)
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 2
        by_owner = {c["ownerId"]: c for c in body["customers"]}
        assert by_owner["uid-asha"]["orderCount"] == 2
        assert by_owner["uid-asha"]["totalSpent"] == 2800
        assert by_owner["uid-ravi"]["email"] == "ravi@example.com"

    def test_notify_counts_distinct_customers(self, client, customer_headers, admin_headers, make_payload):
        _place(client, customer_headers, make_payload())
        _place(client, customer_headers, make_payload())
        response = client.post("/api/admin/notify", json={"message": "Kitchen closed on Sunday"}, headers=admin_headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Notification sent", "count": 1}

    def test_notify_requires_message(self, client, admin_headers):
        response = client.post("/api/admin/notify", json={}, headers=admin_headers)
        assert response.status_code == 400
        assert response.json() == {"error": "Message is required"}
