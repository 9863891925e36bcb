"""Cart exceptions."""

from __future__ import annotations


class CartItemNotFound(Exception):
    """The product is not in the cart."""

    def __init__(self, product_id: object) -> None:
        self.product_id = product_id
        super().__init__(f"Product {product_id} is not in the cart.")
