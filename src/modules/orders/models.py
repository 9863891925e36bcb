"""Order and OrderItem models.

Business rules implemented:
- Orders are written once by checkout and never edited or deleted.
- ``total`` is computed at checkout from the item snapshots and never
  recomputed afterwards.
- OrderItem snapshots the product ``name`` and ``price`` at checkout time;
  later catalog edits do not reach existing orders.
- OrderItem keeps ``product_id`` as a plain reference rather than a
  foreign key: removing a product leaves its historical orders intact.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import BaseModel
from modules.orders.constants import (
    TOTAL_DECIMAL_PLACES,
    TOTAL_MAX_DIGITS,
    OrderStatus,
)


class Order(BaseModel):
    """Order aggregate root (Order + its OrderItems)."""

    total: models.DecimalField = models.DecimalField(
        max_digits=TOTAL_MAX_DIGITS,
        decimal_places=TOTAL_DECIMAL_PLACES,
        validators=[MinValueValidator(Decimal("0.00"))],
    )
    status: models.CharField = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.PENDING,
    )

    class Meta:
        db_table = "orders"
        ordering = ["id"]
        indexes = [
            models.Index(fields=["status"], name="orders_status_idx"),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(total__gte=0),
                name="orders_total_non_negative",
            ),
        ]

    def __str__(self) -> str:
        return f"Order {self.id} ({self.status})"


class OrderItem(models.Model):
    """Line item snapshot.

    ``position`` preserves the order in which the caller listed the items.
    """

    order: models.ForeignKey = models.ForeignKey(
        "orders.Order",
        on_delete=models.CASCADE,
        related_name="items",
    )
    position: models.PositiveSmallIntegerField = models.PositiveSmallIntegerField()
    product_id: models.UUIDField = models.UUIDField()
    name: models.CharField = models.CharField(max_length=255)
    price: models.DecimalField = models.DecimalField(
        max_digits=10,
        decimal_places=2,
    )
    quantity: models.PositiveIntegerField = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )

    class Meta:
        db_table = "order_items"
        ordering = ["order", "position"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(quantity__gte=1),
                name="order_items_quantity_positive",
            ),
            models.UniqueConstraint(
                fields=["order", "position"],
                name="order_items_order_position_uniq",
            ),
        ]

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def __str__(self) -> str:
        return f"{self.name} x{self.quantity} (${self.line_total})"
