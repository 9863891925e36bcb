"""Cart DTOs.

- ``AddToCartDTO``: body of ``POST /cart/items/``.
- ``UpdateCartItemDTO``: body of ``PATCH /cart/items/{product_id}/``.
- ``CartLine``: one line as held in the session.
"""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator


class AddToCartDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int = 1

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class UpdateCartItemDTO(BaseModel):
    """A quantity of zero or less removes the line."""

    model_config = ConfigDict(frozen=True)

    quantity: int


class CartLine(BaseModel):
    """Name and price as they were when the line was added.

    Display only: checkout re-reads both from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
