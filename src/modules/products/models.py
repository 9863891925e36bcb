"""Product model with stock control.

Business rules implemented:
- ``name`` and ``description`` are required and non-blank.
- Price cannot be negative.
- Stock cannot be negative; enforced by model validation, a database
  CHECK constraint, and the conditional decrement in the repository.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import TimestampedModel


class Product(TimestampedModel):
    """Catalog entry.

    ``Meta.ordering`` follows the primary key: UUIDv7 IDs sort by creation
    time, so listings come back in storage order.
    """

    name = models.CharField(max_length=255)
    description = models.TextField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    stock = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
            models.CheckConstraint(
                condition=models.Q(stock__gte=0),
                name="products_stock_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        errors = {}
        if self.name is not None:
            self.name = self.name.strip()
            if not self.name:
                errors["name"] = "Name must not be blank."
        if self.description is not None and not self.description.strip():
            errors["description"] = "Description must not be blank."
        if self.price is not None and self.price < 0:
            errors["price"] = "Price cannot be negative."
        if self.stock is not None and self.stock < 0:
            errors["stock"] = "Stock cannot be negative."
        if errors:
            raise ValidationError(errors)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return f"{self.name} ({self.stock} in stock)"
