"""Stock concurrency integration tests.

Proves that the conditional ``UPDATE ... WHERE stock >= n`` used by
checkout never oversells under concurrent load.

Scenarios:
- Stock 5, two checkouts of 3 released together by a barrier: exactly one
  succeeds, the other gets ``InsufficientStock``; stock ends at 2.
- Stock 5, 10 threads buying 1 unit each: exactly 5 succeed, stock ends
  at 0 (never negative), one Order per success.

Uses ``TransactionTestCase`` so each thread can see committed data.  On
SQLite the test database is a file (see ``DATABASES["default"]["TEST"]``)
and writers queue on the busy timeout.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from decimal import Decimal
from typing import Optional

import django
from django.test import TransactionTestCase

from modules.orders.dtos import CheckoutDTO, CheckoutItemDTO
from modules.orders.exceptions import InsufficientStock
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.services import OrderService
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository

logger = logging.getLogger(__name__)

INITIAL_STOCK = 5
NUM_WORKERS = 10


class TestStockConcurrency(TransactionTestCase):
    """Prove atomic stock decrement under concurrent checkouts."""

    def setUp(self):
        self.product = Product.objects.create(
            name="Gamer PC",
            description="Fast",
            price=Decimal("2999.99"),
            stock=INITIAL_STOCK,
        )

    def _checkout_in_thread(
        self,
        thread_id: int,
        quantity: int = 1,
        barrier: Optional[threading.Barrier] = None,
    ) -> str:
        """Attempt a checkout. Returns 'success' or 'insufficient'."""
        try:
            service = OrderService(
                order_repository=OrderDjangoRepository(),
                product_repository=ProductDjangoRepository(),
            )
            dto = CheckoutDTO(
                items=[CheckoutItemDTO(product_id=self.product.id, quantity=quantity)]
            )
            if barrier is not None:
                barrier.wait(timeout=10)
            try:
                service.checkout(dto)
                logger.warning("Thread %d: order created successfully", thread_id)
                return "success"
            except InsufficientStock:
                logger.warning("Thread %d: InsufficientStock (expected)", thread_id)
                return "insufficient"
        finally:
            django.db.connections.close_all()

    def _run_workers(self, workers: int, **kwargs) -> list:
        results = []
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                pool.submit(self._checkout_in_thread, i, **kwargs): i
                for i in range(workers)
            }
            for future in as_completed(futures):
                results.append(future.result())
        return results

    def test_two_checkouts_of_three_from_five(self):
        """Both pass validation; only one decrement can succeed."""
        results = self._run_workers(2, quantity=3, barrier=threading.Barrier(2))

        self.assertEqual(sorted(results), ["insufficient", "success"])
        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 2)
        self.assertEqual(Order.objects.count(), 1)

    def test_concurrent_checkouts_exhaust_stock(self):
        """10 threads buy 1 unit from stock=5: exactly 5 succeed."""
        results = self._run_workers(NUM_WORKERS)

        successes = results.count("success")
        failures = results.count("insufficient")

        self.assertEqual(successes, INITIAL_STOCK)
        self.assertEqual(failures, NUM_WORKERS - INITIAL_STOCK)

        self.product.refresh_from_db()
        self.assertEqual(self.product.stock, 0)
        self.assertEqual(Order.objects.count(), INITIAL_STOCK)
