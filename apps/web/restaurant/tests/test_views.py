"""
Integration tests for checkout and stock API views.
"""

import json
from unittest.mock import patch

from django.db import DatabaseError, OperationalError
from django.http import HttpResponse
from django.test import Client as DjangoClient

import pytest

from apps.web.activity.models import LogAction, LogEntry
from apps.web.restaurant.models import MenuItem, Order, Table
from apps.web.restaurant.serializers import MAX_QUANTITY

from .factories import CategoryFactory, MenuItemFactory, TableFactory


@pytest.fixture
def table():
    return TableFactory(name="Table 3", description="Patio")


@pytest.fixture
def menu_item():
    category = CategoryFactory(name="Mains")
    return MenuItemFactory(
        id="m1",
        category=category,
        name="Nasi Campur",
        price=25000,
        stock=10,
    )


def _post_json(client: DjangoClient, url: str, data) -> HttpResponse:
    return client.post(url, data=json.dumps(data), content_type="application/json")


def _put_json(client: DjangoClient, url: str, data) -> HttpResponse:
    return client.put(url, data=json.dumps(data), content_type="application/json")


@pytest.mark.django_db
class TestCheckoutView:
    """Tests for POST /api/checkout."""

    def test_checkout_returns_created_order(
        self, logged_in_client: DjangoClient, user, table, menu_item
    ):
        response = _post_json(
            logged_in_client,
            "/api/checkout",
            {
                "tableId": table.pk,
                "items": [{"id": "m1", "quantity": 3, "customization": "extra egg"}],
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True

        order = data["order"]
        assert order["total_amount"] == 75000
        assert order["order_status"] == "pending"
        assert order["payment_status"] == "pending"
        assert order["order_number"] == order["id"][-8:].upper()
        assert order["table"] == {"id": table.pk, "name": "Table 3", "desc": "Patio"}
        assert order["customer"]["id"] == user.pk
        assert order["customer"]["email"] == "testuser@example.com"
        assert order["order_time"]

        assert len(order["items"]) == 1
        item = order["items"][0]
        assert item["menu_name"] == "Nasi Campur"
        assert item["quantity"] == 3
        assert item["price"] == 25000
        assert item["subtotal"] == 75000
        assert item["customization"] == "extra egg"

        assert MenuItem.objects.get(pk="m1").stock == 7

    def test_requires_authentication(self, api_client: DjangoClient, table, menu_item):
        response = _post_json(
            api_client,
            "/api/checkout",
            {"tableId": table.pk, "items": [{"id": "m1", "quantity": 1}]},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Authentication required"
        assert Order.objects.count() == 0

    def test_invalid_json(self, logged_in_client: DjangoClient):
        response = logged_in_client.post(
            "/api/checkout", data="{not json", content_type="application/json"
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid JSON in request body"

    def test_missing_items(self, logged_in_client: DjangoClient, table):
        response = _post_json(
            logged_in_client, "/api/checkout", {"tableId": table.pk, "items": []}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Table ID and items are required"
        assert data["code"] == "validation_failed"
        assert data["details"][0]["field"] == "items"

    def test_invalid_table(self, logged_in_client: DjangoClient, menu_item):
        response = _post_json(
            logged_in_client,
            "/api/checkout",
            {"tableId": "nope", "items": [{"id": "m1", "quantity": 1}]},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid table selected"

    def test_malformed_lines(self, logged_in_client: DjangoClient, table):
        response = _post_json(
            logged_in_client,
            "/api/checkout",
            {
                "tableId": table.pk,
                "items": [{"id": "m1", "quantity": -1}, {"id": "", "quantity": 1}],
            },
        )

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "malformed_line_item"
        assert [line["index"] for line in data["invalid_items"]] == [0, 1]

    def test_unavailable_items(self, logged_in_client: DjangoClient, table):
        response = _post_json(
            logged_in_client,
            "/api/checkout",
            {"tableId": table.pk, "items": [{"id": "ghost", "quantity": 1}]},
        )

        assert response.status_code == 400
        assert response.json()["missing_items"] == ["ghost"]

    def test_insufficient_stock(self, logged_in_client: DjangoClient, table):
        MenuItemFactory(id="m2", name="Soto", stock=2)

        response = _post_json(
            logged_in_client,
            "/api/checkout",
            {"tableId": table.pk, "items": [{"id": "m2", "quantity": 5}]},
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Insufficient stock for some items"
        assert data["code"] == "insufficient_stock"
        assert data["stock_errors"] == [
            {"menu_id": "m2", "menu_name": "Soto", "requested": 5, "available": 2}
        ]
        assert MenuItem.objects.get(pk="m2").stock == 2

    def test_transaction_failure_returns_500(
        self, logged_in_client: DjangoClient, table, menu_item
    ):
        with patch(
            "apps.web.restaurant.services.checkout._decrement_stock",
            side_effect=DatabaseError("connection lost"),
        ):
            response = _post_json(
                logged_in_client,
                "/api/checkout",
                {"tableId": table.pk, "items": [{"id": "m1", "quantity": 1}]},
            )

        assert response.status_code == 500
        assert response.json()["error"] == "Failed to process checkout"
        assert Order.objects.count() == 0

    def test_database_down_during_validation_returns_json_500(
        self, logged_in_client: DjangoClient, table, menu_item
    ):
        with patch.object(
            Table.objects, "get", side_effect=OperationalError("db down")
        ):
            response = _post_json(
                logged_in_client,
                "/api/checkout",
                {"tableId": table.pk, "items": [{"id": "m1", "quantity": 1}]},
            )

        assert response.status_code == 500
        assert response["Content-Type"] == "application/json"
        assert response.json() == {
            "error": "Failed to process checkout",
            "code": "transaction_failure",
        }
        assert LogEntry.objects.get().action == LogAction.ORDER_ERROR

    def test_get_not_allowed(self, logged_in_client: DjangoClient):
        response = logged_in_client.get("/api/checkout")

        assert response.status_code == 405


@pytest.mark.django_db
class TestMenuStockView:
    """Tests for GET/PUT /api/menu/{id}/stock."""

    def test_update_stock(self, api_client: DjangoClient, staff_user, menu_item):
        api_client.force_login(staff_user)

        response = _put_json(
            api_client,
            "/api/menu/m1/stock",
            {"action": "subtract", "quantity": 4, "reason": "spoiled"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["message"] == "Stock updated successfully. Subtracted 4 items."
        assert data["stock_change"] == {
            "previous_stock": 10,
            "new_stock": 6,
            "change": -4,
            "action": "subtract",
        }
        assert data["menu_item"]["id"] == "m1"
        assert data["menu_item"]["stock"] == 6
        assert data["menu_item"]["category_name"] == "Mains"

    def test_update_requires_authentication(
        self, api_client: DjangoClient, menu_item
    ):
        response = _put_json(
            api_client, "/api/menu/m1/stock", {"action": "add", "quantity": 1}
        )

        assert response.status_code == 401
        assert MenuItem.objects.get(pk="m1").stock == 10

    def test_update_unknown_item(self, api_client: DjangoClient, staff_user):
        api_client.force_login(staff_user)

        response = _put_json(
            api_client, "/api/menu/missing/stock", {"action": "add", "quantity": 1}
        )

        assert response.status_code == 404
        assert response.json()["error"] == "Menu item not found"

    def test_update_validation_details(
        self, api_client: DjangoClient, staff_user, menu_item
    ):
        api_client.force_login(staff_user)

        response = _put_json(
            api_client, "/api/menu/m1/stock", {"action": "double", "quantity": -2}
        )

        assert response.status_code == 400
        data = response.json()
        assert data["error"] == "Validation failed"
        fields = sorted(detail["field"] for detail in data["details"])
        assert fields == ["action", "quantity"]

    def test_update_quantity_too_large(
        self, api_client: DjangoClient, staff_user, menu_item
    ):
        api_client.force_login(staff_user)

        response = _put_json(
            api_client, "/api/menu/m1/stock", {"action": "add", "quantity": 2**63}
        )

        assert response.status_code == 400
        assert response.json()["details"][0]["field"] == "quantity"
        assert MenuItem.objects.get(pk="m1").stock == 10

    def test_update_add_past_column_limit(
        self, api_client: DjangoClient, staff_user, menu_item
    ):
        api_client.force_login(staff_user)

        response = _put_json(
            api_client,
            "/api/menu/m1/stock",
            {"action": "add", "quantity": MAX_QUANTITY},
        )

        assert response.status_code == 400
        assert response.json()["details"] == [
            {"field": "quantity", "message": f"Stock cannot exceed {MAX_QUANTITY}"}
        ]
        assert MenuItem.objects.get(pk="m1").stock == 10
        assert LogEntry.objects.count() == 0

    @pytest.mark.parametrize(
        ("stock", "status"),
        [(0, "low"), (5, "low"), (6, "medium"), (20, "medium"), (21, "good")],
    )
    def test_stock_level(self, api_client: DjangoClient, menu_item, stock, status):
        MenuItem.objects.filter(pk="m1").update(stock=stock)

        response = api_client.get("/api/menu/m1/stock")

        assert response.status_code == 200
        assert response.json() == {
            "id": "m1",
            "name": "Nasi Campur",
            "category": "Mains",
            "current_stock": stock,
            "is_available": True,
            "stock_status": status,
        }

    def test_stock_level_unknown_item(self, api_client: DjangoClient):
        response = api_client.get("/api/menu/missing/stock")

        assert response.status_code == 404

    def test_post_not_allowed(self, api_client: DjangoClient, menu_item):
        response = api_client.post("/api/menu/m1/stock")

        assert response.status_code == 405
