"""Order repository interface.

Extends ``IRepository[Order]`` with the append-only creation used by
checkout.  Stock is not checked here; checkout validates it first.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.orders.dtos import LineItemSnapshot
    from modules.orders.models import Order


class IOrderRepository(IRepository["Order"]):
    """Repository contract for the Order aggregate root."""

    @abstractmethod
    def create(self, items: Sequence[LineItemSnapshot], total: Decimal) -> Order:
        """Persist a ``pending`` order with its line items, in the given order."""
