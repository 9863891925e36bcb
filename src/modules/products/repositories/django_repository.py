"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Look-ups follow the Null Object pattern: methods return ``None``
instead of raising HTTP-level exceptions; the Service Layer decides
how to translate a missing entity into an API response.

Every public method translates ``DatabaseError`` into ``StorageFailure``.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import F
from django.utils import timezone

from modules.core.exceptions import storage_errors
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    @storage_errors
    def get_by_id(self, id: str) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or invalid IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @storage_errors
    def list(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> "models.QuerySet[Product]":
        """List products with optional Django ORM look-ups.

        Returns a lazy QuerySet in storage order.

        Examples of valid filters::

            {"stock__gt": 0}
            {"name__icontains": "widget"}
        """
        queryset = Product.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return queryset

    @storage_errors
    def search(self, term: str) -> List[Product]:
        """Case-insensitive substring match against name OR description.

        Walks the whole catalog on every call (no text index), so the cost
        is O(catalog size) per query.  An empty term matches everything.
        """
        needle = term.casefold()
        return [
            product
            for product in Product.objects.all().iterator()
            if needle in product.name.casefold()
            or needle in product.description.casefold()
        ]

    @storage_errors
    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Persist (create or update) a product."""
        entity.save()
        logger.info("product.saved", product_id=str(entity.id))
        return entity

    @storage_errors
    @transaction.atomic
    def delete(self, id: str) -> bool:
        """Delete a product by ID.

        Returns ``True`` if the product was found and removed,
        ``False`` if no product exists with the given ID.
        """
        product = self.get_by_id(id)
        if not product:
            return False
        product.delete()
        logger.info("product.deleted", product_id=str(id))
        return True

    @storage_errors
    @transaction.atomic
    def decrement_stock(self, id: str, amount: int) -> Product:
        """Take *amount* units out of stock with a single conditional UPDATE.

        ``UPDATE products SET stock = stock - n WHERE id = ? AND stock >= n``
        is atomic per row, so two concurrent decrements can never both pass
        the ``stock >= n`` guard when together they exceed the stock.
        Zero affected rows means the product is missing or short of stock.
        """
        if amount < 1:
            raise ValueError("Decrement amount must be at least 1.")
        try:
            updated = Product.objects.filter(id=id, stock__gte=amount).update(
                stock=F("stock") - amount,
                updated_at=timezone.now(),
            )
        except (ValueError, ValidationError):
            raise ProductNotFound(f"Product {id} not found.") from None

        product = self.get_by_id(id)
        if product is None:
            raise ProductNotFound(f"Product {id} not found.")
        if not updated:
            logger.warning(
                "product.stock_decrement_rejected",
                product_id=str(id),
                requested=amount,
                available=product.stock,
            )
            raise InsufficientStock(product.name, product.stock)

        logger.info(
            "product.stock_decremented",
            product_id=str(id),
            quantity=amount,
            remaining=product.stock,
        )
        return product

    @storage_errors
    def exists_any(self) -> bool:
        return Product.objects.exists()
