"""Order DRF serializers for API output.

The serializer operates at the Interface layer (API Views).
Checkout input is validated by the Pydantic DTOs in ``dtos.py``.
"""

from __future__ import annotations

from rest_framework import serializers

from modules.orders.constants import TOTAL_DECIMAL_PLACES, TOTAL_MAX_DIGITS
from modules.orders.models import Order, OrderItem


class OrderItemSerializer(serializers.ModelSerializer):
    """Read serializer for a line item snapshot."""

    line_total = serializers.DecimalField(
        max_digits=TOTAL_MAX_DIGITS,
        decimal_places=TOTAL_DECIMAL_PLACES,
        read_only=True,
    )

    class Meta:
        model = OrderItem
        fields = [
            "product_id",
            "name",
            "price",
            "quantity",
            "line_total",
        ]
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Read serializer for orders with nested items."""

    items = OrderItemSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            "id",
            "items",
            "total",
            "status",
            "created_at",
        ]
        read_only_fields = fields
