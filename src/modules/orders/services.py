"""Order service layer (Use Cases).

Checkout is the one operation that touches several records per request:
it reads every requested product, writes an Order, and takes stock out of
the catalog.  It runs in two passes over the caller's lines:

1. Validation: every line is looked up, checked against stock and priced
   (snapshot taken here) before anything is written.  A doomed cart never
   touches stock.
2. Mutation: the Order and every stock decrement share one
   ``transaction.atomic()`` block.  The decrement is a conditional update,
   so a concurrent checkout that drained the stock after pass 1 makes it
   fail with ``InsufficientStock``, which rolls the Order back with it.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.orders.constants import MAX_ORDER_TOTAL
from modules.orders.dtos import LineItemSnapshot
from modules.orders.exceptions import (
    EmptyCart,
    InsufficientStock,
    OrderNotFound,
    OrderTotalTooLarge,
    ProductNotFound,
)
from modules.products.exceptions import ProductNotFound as CatalogProductNotFound

if TYPE_CHECKING:
    from modules.core.repositories.interfaces import Queryable
    from modules.orders.dtos import CheckoutDTO
    from modules.orders.models import Order
    from modules.orders.repositories.interfaces import IOrderRepository
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class OrderService:
    """Application service for checkout and order queries.

    Receives repositories via constructor injection (DIP).
    """

    def __init__(
        self,
        order_repository: IOrderRepository,
        product_repository: IProductRepository,
    ) -> None:
        self._order_repo = order_repository
        self._product_repo = product_repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def checkout(self, dto: CheckoutDTO) -> Order:
        """Turn a requested cart into a persisted ``pending`` Order.

        Raises:
            EmptyCart: no items were requested.
            ProductNotFound: a line references an unknown product.
            InsufficientStock: a line asks for more than is in stock, either
                at validation time or when the stock is taken.
            OrderTotalTooLarge: the total does not fit the stored order total.
            StorageFailure: the store faulted; nothing is persisted.
        """
        if not dto.items:
            logger.info("order.checkout_rejected", reason="empty_cart")
            raise EmptyCart()

        log = logger.bind(line_count=len(dto.items))
        log.info("order.checkout_started")

        lines, total = self._validate_lines(dto)

        with transaction.atomic():
            order = self._order_repo.create(lines, total)
            for line in lines:
                self._take_stock(line)

        log.info("order.created", order_id=str(order.id), total=str(total))
        return order

    def _validate_lines(
        self, dto: CheckoutDTO
    ) -> tuple[List[LineItemSnapshot], Decimal]:
        """First pass: resolve, check and price every line in caller order."""
        lines: List[LineItemSnapshot] = []
        total = Decimal("0.00")

        for item in dto.items:
            product = self._product_repo.get_by_id(str(item.product_id))
            if not product:
                logger.info(
                    "order.checkout_rejected",
                    reason="product_not_found",
                    product_id=str(item.product_id),
                )
                raise ProductNotFound(item.product_id)
            if product.stock < item.quantity:
                logger.info(
                    "order.checkout_rejected",
                    reason="insufficient_stock",
                    product_id=str(product.id),
                    requested=item.quantity,
                    available=product.stock,
                )
                raise InsufficientStock(product.name, product.stock)

            line = LineItemSnapshot(
                product_id=product.id,
                name=product.name,
                price=product.price,
                quantity=item.quantity,
            )
            total += line.line_total
            lines.append(line)

        if total > MAX_ORDER_TOTAL:
            logger.info(
                "order.checkout_rejected", reason="total_too_large", total=str(total)
            )
            raise OrderTotalTooLarge(MAX_ORDER_TOTAL)

        return lines, total

    def _take_stock(self, line: LineItemSnapshot) -> None:
        """Second pass: decrement stock for one validated line."""
        try:
            self._product_repo.decrement_stock(str(line.product_id), line.quantity)
        except CatalogProductNotFound:
            # Removed from the catalog between validation and decrement.
            raise ProductNotFound(line.product_id) from None
        logger.info(
            "order.stock_decremented",
            product_id=str(line.product_id),
            quantity=line.quantity,
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_order(self, order_id: str) -> Order:
        """Retrieve a single order by ID.

        Raises:
            OrderNotFound: if the order does not exist.
        """
        order = self._order_repo.get_by_id(order_id)
        if not order:
            raise OrderNotFound(f"Order {order_id} not found.")
        return order

    def list_orders(self, filters: Optional[Dict[str, Any]] = None) -> Queryable[Order]:
        """Return all orders, optionally filtered."""
        return self._order_repo.list(filters)
