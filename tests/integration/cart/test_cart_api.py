"""Integration tests for the session cart API.

The cart is stored in a signed session cookie, so each ``APIClient``
instance is one visitor.
"""

from __future__ import annotations

import uuid
from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from modules.orders.models import Order

pytestmark = pytest.mark.integration

CART = "/api/v1/cart/"
ITEMS = "/api/v1/cart/items/"
CHECKOUT = "/api/v1/cart/checkout/"


def _add(client, product, quantity=1):
    return client.post(
        ITEMS, {"product_id": str(product.id), "quantity": quantity}, format="json"
    )


class TestViewCart:
    def test_new_visitor_has_empty_cart(self, api_client):
        response = api_client.get(CART)
        assert response.status_code == 200
        assert response.json() == {"items": [], "count": 0, "total": 0.0}


class TestAddToCart:
    def test_add(self, api_client, make_product):
        widget = make_product(name="Widget", price=Decimal("10.00"), stock=3)

        response = _add(api_client, widget, 2)

        assert response.status_code == 201
        data = response.json()
        assert data["count"] == 2
        assert Decimal(str(data["total"])) == Decimal("20.00")
        assert data["items"][0]["product_id"] == str(widget.id)

    def test_cart_persists_between_requests(self, api_client, make_product):
        widget = make_product()
        _add(api_client, widget)
        assert api_client.get(CART).json()["count"] == 1

    def test_visitors_do_not_share_carts(self, api_client, make_product):
        _add(api_client, make_product())
        assert APIClient().get(CART).json()["count"] == 0

    def test_add_same_product_merges(self, api_client, make_product):
        widget = make_product(stock=5)
        _add(api_client, widget)
        data = _add(api_client, widget, 2).json()
        assert len(data["items"]) == 1
        assert data["items"][0]["quantity"] == 3

    def test_add_beyond_stock(self, api_client, make_product):
        widget = make_product(name="Widget", stock=1)
        _add(api_client, widget)

        response = _add(api_client, widget)

        assert response.status_code == 409
        assert response.json()["detail"] == "Sorry, only 1 Widget in stock."

    def test_unknown_product(self, api_client):
        response = api_client.post(
            ITEMS, {"product_id": str(uuid.uuid4())}, format="json"
        )
        assert response.status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [{}, {"product_id": "nope"}, {"product_id": str(uuid.uuid4()), "quantity": 0}],
    )
    def test_invalid_payload(self, api_client, payload):
        response = api_client.post(ITEMS, payload, format="json")
        assert response.status_code == 400


class TestChangeCart:
    def test_change_quantity(self, api_client, make_product):
        widget = make_product(stock=5)
        _add(api_client, widget)

        response = api_client.patch(
            f"{ITEMS}{widget.id}/", {"quantity": 4}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["quantity"] == 4
        assert api_client.get(CART).json()["count"] == 4

    def test_change_quantity_beyond_stock(self, api_client, make_product):
        widget = make_product(stock=2)
        _add(api_client, widget)

        response = api_client.patch(
            f"{ITEMS}{widget.id}/", {"quantity": 3}, format="json"
        )

        assert response.status_code == 409

    def test_zero_quantity_removes_line(self, api_client, make_product):
        widget = make_product()
        _add(api_client, widget)

        response = api_client.patch(
            f"{ITEMS}{widget.id}/", {"quantity": 0}, format="json"
        )

        assert response.status_code == 200
        assert response.json()["items"] == []

    def test_change_line_not_in_cart(self, api_client):
        response = api_client.patch(
            f"{ITEMS}{uuid.uuid4()}/", {"quantity": 1}, format="json"
        )
        assert response.status_code == 404

    def test_change_line_of_deleted_product_drops_it(self, api_client, make_product):
        widget = make_product(stock=5)
        gadget = make_product(name="Gadget", stock=5)
        _add(api_client, widget)
        _add(api_client, gadget)
        widget.delete()

        response = api_client.patch(
            f"{ITEMS}{widget.id}/", {"quantity": 2}, format="json"
        )

        assert response.status_code == 404
        assert "removed from the cart" in response.json()["detail"]
        cart = api_client.get(CART).json()
        assert [item["product_id"] for item in cart["items"]] == [str(gadget.id)]
        assert api_client.post(CHECKOUT).status_code == 201

    def test_remove(self, api_client, make_product):
        widget = make_product()
        _add(api_client, widget)

        response = api_client.delete(f"{ITEMS}{widget.id}/")

        assert response.status_code == 200
        assert response.json()["count"] == 0

    def test_remove_line_not_in_cart(self, api_client):
        response = api_client.delete(f"{ITEMS}{uuid.uuid4()}/")
        assert response.status_code == 404

    def test_clear(self, api_client, make_product):
        _add(api_client, make_product())
        _add(api_client, make_product(name="Gadget"))

        response = api_client.delete(CART)

        assert response.status_code == 200
        assert response.json()["count"] == 0


class TestCartCheckout:
    def test_checkout_creates_order_and_clears_cart(self, api_client, make_product):
        widget = make_product(name="Widget", price=Decimal("10.00"), stock=2)
        _add(api_client, widget, 2)

        response = api_client.post(CHECKOUT)

        assert response.status_code == 201
        assert Decimal(str(response.json()["total"])) == Decimal("20.00")
        assert api_client.get(CART).json()["count"] == 0
        widget.refresh_from_db()
        assert widget.stock == 0

    def test_empty_cart(self, api_client):
        response = api_client.post(CHECKOUT)
        assert response.status_code == 400
        assert response.json()["detail"] == "Cart is empty."
        assert Order.objects.count() == 0

    def test_failed_checkout_keeps_cart(self, api_client, make_product):
        widget = make_product(stock=2)
        _add(api_client, widget, 2)
        widget.stock = 1
        widget.save()

        response = api_client.post(CHECKOUT)

        assert response.status_code == 409
        assert api_client.get(CART).json()["count"] == 2

    def test_product_removed_from_catalog(self, api_client, make_product):
        widget = make_product()
        _add(api_client, widget)
        widget.delete()

        response = api_client.post(CHECKOUT)

        assert response.status_code == 404
        assert Order.objects.count() == 0
