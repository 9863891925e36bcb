"""Catalog exceptions.

Raised by the repository and Service Layer when catalog rules are
violated.  The API layer (Views) catches these and translates them
into appropriate HTTP responses.
"""

from __future__ import annotations

from typing import Dict, List, Union


class ProductNotFound(Exception):
    """The requested product does not exist."""


class InvalidProduct(Exception):
    """Product fields violate the catalog constraints.

    ``errors`` maps field names to messages.
    """

    def __init__(self, errors: Dict[str, Union[str, List[str]]]) -> None:
        self.errors = errors
        super().__init__(
            "; ".join(
                f"{field}: {msg if isinstance(msg, str) else ' '.join(msg)}"
                for field, msg in errors.items()
            )
        )


class InsufficientStock(Exception):
    """Requested quantity exceeds the stock on hand."""

    def __init__(self, product_name: str, available: int) -> None:
        self.product_name = product_name
        self.available = available
        super().__init__(f"Sorry, only {available} {product_name} in stock.")
