"""Product repository interface.

Extends ``IRepository[Product]`` with the catalog operations the
services depend on: persistence, substring search and the atomic
stock decrement used by checkout.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product catalog."""

    @abstractmethod
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""

    @abstractmethod
    def delete(self, id: str) -> bool:
        """Remove a product; ``False`` if no product has that ID."""

    @abstractmethod
    def search(self, term: str) -> List[Product]:
        """Case-insensitive substring match on name or description."""

    @abstractmethod
    def decrement_stock(self, id: str, amount: int) -> Product:
        """Atomically take *amount* units out of stock.

        Must never let two concurrent decrements on the same product
        drive stock below zero.

        Raises:
            ProductNotFound: no product has that ID.
            InsufficientStock: *amount* exceeds the current stock.
        """

    @abstractmethod
    def exists_any(self) -> bool:
        """Return ``True`` when the catalog holds at least one product."""
