"""Checkout and order exceptions.

Raised by the Service Layer when checkout rules are violated.
The API layer (Views) catches these and translates them into
appropriate HTTP responses.  ``InsufficientStock`` is shared with the
catalog, whose atomic decrement raises it too.
"""

from __future__ import annotations

from modules.products.exceptions import InsufficientStock

__all__ = [
    "EmptyCart",
    "InsufficientStock",
    "OrderNotFound",
    "OrderTotalTooLarge",
    "ProductNotFound",
]


class OrderNotFound(Exception):
    """The requested order does not exist."""


class EmptyCart(Exception):
    """A checkout was requested with no items."""

    def __init__(self) -> None:
        super().__init__("Cart is empty.")


class ProductNotFound(Exception):
    """A product referenced by a checkout line does not exist."""

    def __init__(self, product_id: object) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} not found.")


class OrderTotalTooLarge(Exception):
    """The checkout total does not fit the stored order total."""

    def __init__(self, limit: object) -> None:
        self.limit = limit
        super().__init__(f"Order total exceeds the maximum of {limit}.")
