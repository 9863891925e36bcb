"""Unit tests for the session-backed Cart."""

from __future__ import annotations

from decimal import Decimal

import pytest
from django.contrib.sessions.backends.signed_cookies import SessionStore

from modules.cart.cart import CART_SESSION_KEY, Cart
from modules.cart.exceptions import CartItemNotFound
from modules.products.exceptions import InsufficientStock
from modules.products.models import Product

pytestmark = pytest.mark.unit


@pytest.fixture()
def session():
    return SessionStore()


@pytest.fixture()
def cart(session):
    return Cart(session)


def _product(name="Widget", price="10.00", stock=3) -> Product:
    return Product(name=name, description="d", price=Decimal(price), stock=stock)


class TestAdd:
    def test_add_new_line(self, cart, session):
        widget = _product()

        line = cart.add(widget, 2)

        assert line.quantity == 2
        assert line.line_total == Decimal("20.00")
        assert len(cart) == 2
        assert session.modified
        assert session[CART_SESSION_KEY][str(widget.id)]["quantity"] == 2

    def test_add_same_product_merges(self, cart):
        widget = _product()
        cart.add(widget)
        cart.add(widget)

        assert len(cart.lines()) == 1
        assert cart.lines()[0].quantity == 2

    def test_add_beyond_stock(self, cart):
        widget = _product(stock=3)
        cart.add(widget, 2)

        with pytest.raises(InsufficientStock) as exc_info:
            cart.add(widget, 2)

        assert exc_info.value.available == 3
        assert cart.lines()[0].quantity == 2

    def test_out_of_stock_product(self, cart):
        with pytest.raises(InsufficientStock):
            cart.add(_product(stock=0))
        assert len(cart) == 0

    def test_state_survives_a_new_cart_on_the_same_session(self, session):
        widget = _product()
        Cart(session).add(widget)
        assert str(widget.id) in Cart(session)


class TestUpdateAndRemove:
    def test_update_quantity(self, cart):
        widget = _product()
        cart.add(widget)

        line = cart.update(widget.id, 3, stock=3)

        assert line.quantity == 3

    def test_update_to_zero_removes(self, cart):
        widget = _product()
        cart.add(widget)

        assert cart.update(widget.id, 0) is None
        assert widget.id not in cart

    def test_update_beyond_stock(self, cart):
        widget = _product()
        cart.add(widget)
        with pytest.raises(InsufficientStock):
            cart.update(widget.id, 4, stock=3)

    def test_update_missing_line(self, cart):
        with pytest.raises(CartItemNotFound):
            cart.update("nope", 1)

    def test_remove(self, cart):
        widget = _product()
        cart.add(widget)
        cart.remove(widget.id)
        assert cart.lines() == []

    def test_remove_missing_line(self, cart):
        with pytest.raises(CartItemNotFound):
            cart.remove("nope")

    def test_clear(self, cart):
        cart.add(_product())
        cart.add(_product(name="Gadget"))
        cart.clear()
        assert len(cart) == 0
        assert cart.total == Decimal("0.00")


class TestQueries:
    def test_total(self, cart):
        cart.add(_product(price="10.00"), 2)
        cart.add(_product(name="Gadget", price="2.50"), 1)
        assert cart.total == Decimal("22.50")

    def test_as_checkout_items_keeps_insertion_order(self, cart):
        widget, gadget = _product(), _product(name="Gadget")
        cart.add(gadget)
        cart.add(widget, 2)

        assert cart.as_checkout_items() == [
            {"product_id": str(gadget.id), "quantity": 1},
            {"product_id": str(widget.id), "quantity": 2},
        ]
