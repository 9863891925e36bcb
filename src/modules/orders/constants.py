"""Order domain constants.

Orders are created ``pending``; no workflow moves them to the other
states yet, but the values are part of the stored contract.

``TOTAL_MAX_DIGITS`` covers the largest single line: a 10-digit price
(8 integer digits) times a stock count of up to 10 digits.
"""

from decimal import Decimal

from django.db import models

TOTAL_MAX_DIGITS = 20
TOTAL_DECIMAL_PLACES = 2
MAX_ORDER_TOTAL = Decimal(10) ** (TOTAL_MAX_DIGITS - TOTAL_DECIMAL_PLACES) - Decimal(
    "0.01"
)


class OrderStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"
