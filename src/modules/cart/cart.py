"""Per-visitor shopping cart kept in the Django session.

The session stores a JSON-safe mapping, in insertion order::

    {"<product_id>": {"name": "...", "price": "9.99", "quantity": 2}, ...}

Adding a product already in the cart raises its quantity instead of adding a
second line.  Stock is checked against the catalog at add/update time, and
again by checkout, which is the only place stock actually changes.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog

from modules.cart.dtos import CartLine
from modules.cart.exceptions import CartItemNotFound
from modules.products.exceptions import InsufficientStock

if TYPE_CHECKING:
    from django.contrib.sessions.backends.base import SessionBase

    from modules.products.models import Product

logger = structlog.get_logger(__name__)

CART_SESSION_KEY = "cart"


class Cart:
    """Cart bound to one session."""

    def __init__(self, session: SessionBase) -> None:
        self._session = session
        self._items: Dict[str, Dict[str, Any]] = session.get(CART_SESSION_KEY) or {}

    def __len__(self) -> int:
        """Total number of units across all lines."""
        return sum(item["quantity"] for item in self._items.values())

    def __contains__(self, product_id: object) -> bool:
        return str(product_id) in self._items

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def add(self, product: Product, quantity: int = 1) -> CartLine:
        """Add *quantity* units of *product*, merging with an existing line.

        Raises:
            InsufficientStock: the line would exceed the product's stock.
        """
        key = str(product.id)
        current = self._items.get(key, {}).get("quantity", 0)
        wanted = current + quantity
        if wanted > product.stock:
            logger.info(
                "cart.add_rejected",
                product_id=key,
                requested=wanted,
                available=product.stock,
            )
            raise InsufficientStock(product.name, product.stock)

        self._items[key] = {
            "name": product.name,
            "price": str(product.price),
            "quantity": wanted,
        }
        self._save()
        logger.info("cart.item_added", product_id=key, quantity=wanted)
        return self._line(key)

    def update(
        self, product_id: object, quantity: int, stock: Optional[int] = None
    ) -> Optional[CartLine]:
        """Set the quantity of a line; ``quantity <= 0`` removes it.

        When *stock* is given the new quantity must not exceed it.
        Returns the updated line, or ``None`` if it was removed.

        Raises:
            CartItemNotFound: the product is not in the cart.
            InsufficientStock: *quantity* exceeds *stock*.
        """
        key = str(product_id)
        if key not in self._items:
            raise CartItemNotFound(product_id)
        if quantity <= 0:
            self.remove(product_id)
            return None
        if stock is not None and quantity > stock:
            raise InsufficientStock(self._items[key]["name"], stock)

        self._items[key]["quantity"] = quantity
        self._save()
        return self._line(key)

    def remove(self, product_id: object) -> None:
        """Drop a line.

        Raises:
            CartItemNotFound: the product is not in the cart.
        """
        key = str(product_id)
        if key not in self._items:
            raise CartItemNotFound(product_id)
        del self._items[key]
        self._save()
        logger.info("cart.item_removed", product_id=key)

    def clear(self) -> None:
        self._items = {}
        self._save()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lines(self) -> List[CartLine]:
        return [self._line(key) for key in self._items]

    @property
    def total(self) -> Decimal:
        return sum((line.line_total for line in self.lines()), Decimal("0.00"))

    def as_checkout_items(self) -> List[Dict[str, Any]]:
        """Lines in the ``{"product_id", "quantity"}`` shape checkout expects."""
        return [
            {"product_id": key, "quantity": item["quantity"]}
            for key, item in self._items.items()
        ]

    # ------------------------------------------------------------------

    def _line(self, key: str) -> CartLine:
        item = self._items[key]
        return CartLine(
            product_id=key,
            name=item["name"],
            price=Decimal(item["price"]),
            quantity=item["quantity"],
        )

    def _save(self) -> None:
        self._session[CART_SESSION_KEY] = self._items
        self._session.modified = True
