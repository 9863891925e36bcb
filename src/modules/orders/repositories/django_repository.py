"""Django ORM implementation of the Order repository.

Satisfies ``IOrderRepository`` using Django's QuerySet API.
Writes are wrapped in ``transaction.atomic()`` so an Order and its
OrderItems are stored together.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import structlog
from django.core.exceptions import ValidationError
from django.db import models, transaction

from modules.core.exceptions import storage_errors
from modules.orders.constants import OrderStatus
from modules.orders.dtos import LineItemSnapshot
from modules.orders.models import Order, OrderItem
from modules.orders.repositories.interfaces import IOrderRepository

logger = structlog.get_logger(__name__)


class OrderDjangoRepository(IOrderRepository):
    """Concrete Order repository backed by Django ORM."""

    @storage_errors
    @transaction.atomic
    def create(self, items: Sequence[LineItemSnapshot], total: Decimal) -> Order:
        order = Order.objects.create(total=total, status=OrderStatus.PENDING)
        OrderItem.objects.bulk_create(
            [
                OrderItem(
                    order=order,
                    position=position,
                    product_id=item.product_id,
                    name=item.name,
                    price=item.price,
                    quantity=item.quantity,
                )
                for position, item in enumerate(items)
            ]
        )
        logger.info(
            "order.persisted",
            order_id=str(order.id),
            item_count=len(items),
            total=str(total),
        )
        return self.get_by_id(str(order.id)) or order

    @storage_errors
    def get_by_id(self, id: str) -> Optional[Order]:
        """Retrieve an order with its items prefetched.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Order.objects.prefetch_related("items").filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @storage_errors
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Order]":
        """List orders in storage order with items prefetched.

        Supported filter keys are plain ORM look-ups, e.g. ``status``.
        """
        queryset = Order.objects.prefetch_related("items")
        if filters:
            queryset = queryset.filter(**filters)
        return queryset
