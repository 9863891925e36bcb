"""Checkout DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
DTOs are immutable (``frozen=True``).

- ``CheckoutItemDTO``: one requested ``{product_id, quantity}`` line.
- ``CheckoutDTO``: the requested cart, in caller order.
- ``LineItemSnapshot``: a validated line, priced from the catalog.

An empty ``items`` list is accepted here on purpose: rejecting it is the
first step of the checkout flow, which reports it as ``EmptyCart``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CheckoutItemDTO(BaseModel):
    """A single requested line.

    The client sends ``product_id`` and ``quantity``; name and price are
    resolved by the Service Layer from the catalog.
    """

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    quantity: int

    @field_validator("quantity")
    @classmethod
    def quantity_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1.")
        return v


class CheckoutDTO(BaseModel):
    """Immutable DTO for checkout requests."""

    model_config = ConfigDict(frozen=True)

    items: List[CheckoutItemDTO] = Field(default_factory=list)


class LineItemSnapshot(BaseModel):
    """Product name and price copied at validation time."""

    model_config = ConfigDict(frozen=True)

    product_id: UUID
    name: str
    price: Decimal
    quantity: int

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
