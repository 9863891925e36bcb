"""Product service layer (Use Cases).

Orchestrates business logic for the catalog, delegating persistence
to the injected ``IProductRepository``.

Business rules enforced here:
- Name and description are non-blank, price and stock non-negative
  (validated by the DTOs, then again on the merged model via
  ``full_clean`` so an update can never produce an invalid record).
- An update with no supplied fields leaves the product untouched.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from modules.products.exceptions import InvalidProduct, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import Queryable
    from modules.products.dtos import CreateProductDTO, UpdateProductDTO
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def _validate(product: Product) -> None:
    try:
        product.full_clean()
    except DjangoValidationError as exc:
        raise InvalidProduct(exc.message_dict) from exc


class ProductService:
    """Application service for catalog use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Validate and store a new product.

        Raises:
            InvalidProduct: the record violates catalog constraints.
        """
        product = Product(
            name=dto.name,
            description=dto.description,
            price=dto.price,
            stock=dto.stock,
        )
        _validate(product)
        product = self._repo.save(product)
        logger.info("product.created", product_id=str(product.id), name=product.name)
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Apply the supplied fields and re-validate the merged product.

        Raises:
            ProductNotFound: if the product does not exist.
            InvalidProduct: the merged record violates catalog constraints.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")

        changes = dto.changes()
        if not changes:
            return product

        log = logger.bind(product_id=str(id), fields=sorted(changes))
        for field, value in changes.items():
            setattr(product, field, value)

        _validate(product)
        product = self._repo.save(product)
        log.info("product.updated")
        return product

    @transaction.atomic
    def delete_product(self, id: str) -> None:
        """Remove a product.  Deleting twice fails the second time.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        if not self._repo.delete(id):
            raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.removed", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(
        self, filters: Optional[Dict[str, Any]] = None
    ) -> Queryable[Product]:
        """Return a list of products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product

    def search_products(self, term: str) -> List[Product]:
        """Case-insensitive substring search over name and description."""
        results = self._repo.search(term)
        logger.info("product.searched", term=term, matches=len(results))
        return results
