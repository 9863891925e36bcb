"""Cart DRF serializers for API output.

Cart amounts are display values with no stored column behind them, so
they are not capped to a fixed number of digits.
"""

from __future__ import annotations

from rest_framework import serializers


class CartLineSerializer(serializers.Serializer):
    product_id = serializers.UUIDField(read_only=True)
    name = serializers.CharField(read_only=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, read_only=True)
    quantity = serializers.IntegerField(read_only=True)
    line_total = serializers.DecimalField(
        max_digits=None, decimal_places=2, read_only=True
    )


class CartSerializer(serializers.Serializer):
    """Serializes a ``Cart``: its lines, unit count and running total."""

    items = CartLineSerializer(many=True, read_only=True, source="lines")
    count = serializers.SerializerMethodField()
    total = serializers.DecimalField(max_digits=None, decimal_places=2, read_only=True)

    def get_count(self, cart) -> int:
        return len(cart)
