"""Demonstration catalog.

``seed_sample_products`` fills an empty catalog with a fixed set of
products and is a no-op as soon as any product exists.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

import structlog
from django.conf import settings
from django.db import DatabaseError, transaction

from modules.core.exceptions import StorageFailure
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

SAMPLE_PRODUCTS = [
    {
        "name": "Wireless Headphones",
        "description": "High-quality bluetooth headphones with noise cancellation",
        "price": Decimal("99.99"),
        "stock": 50,
    },
    {
        "name": "Smart Watch",
        "description": "Feature-rich smartwatch with health monitoring",
        "price": Decimal("199.99"),
        "stock": 30,
    },
    {
        "name": "Laptop Stand",
        "description": "Adjustable aluminum laptop stand for better ergonomics",
        "price": Decimal("49.99"),
        "stock": 25,
    },
    {
        "name": "USB-C Hub",
        "description": "Multi-port USB-C hub with HDMI, USB 3.0, and charging",
        "price": Decimal("39.99"),
        "stock": 40,
    },
    {
        "name": "Mechanical Keyboard",
        "description": "RGB mechanical keyboard with blue switches",
        "price": Decimal("129.99"),
        "stock": 20,
    },
    {
        "name": "Wireless Mouse",
        "description": "Ergonomic wireless mouse with precision tracking",
        "price": Decimal("29.99"),
        "stock": 60,
    },
]


@transaction.atomic
def seed_sample_products(
    repository: Optional[IProductRepository] = None,
) -> List[Product]:
    """Insert ``SAMPLE_PRODUCTS`` when the catalog is empty.

    Returns the created products (empty when the catalog already had data).
    """
    repo = repository or ProductDjangoRepository()
    if repo.exists_any():
        logger.info("catalog.seed_skipped", reason="catalog_not_empty")
        return []

    created = [repo.save(Product(**fields)) for fields in SAMPLE_PRODUCTS]
    logger.info("catalog.seeded", count=len(created))
    return created


def seed_on_startup() -> None:
    """Process-start hook used by the WSGI entry point.

    Storage faults are logged and the seed is skipped; the server still boots.
    """
    if not settings.SEED_SAMPLE_DATA:
        return
    try:
        seed_sample_products()
    except (StorageFailure, DatabaseError):
        logger.exception("catalog.seed_failed")
