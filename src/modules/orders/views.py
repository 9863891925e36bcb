"""Order API views.

Exposes the ``OrderService`` via HTTP using DRF ViewSets.
Checkout exceptions are caught and translated into distinct HTTP
responses; storage faults answer with a generic message only.
"""

from __future__ import annotations

from typing import Any

import structlog
from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.exceptions import StorageFailure
from modules.orders.dtos import CheckoutDTO
from modules.orders.exceptions import (
    EmptyCart,
    InsufficientStock,
    OrderNotFound,
    OrderTotalTooLarge,
    ProductNotFound,
)
from modules.orders.filters import OrderFilter
from modules.orders.models import Order
from modules.orders.repositories.django_repository import OrderDjangoRepository
from modules.orders.serializers import OrderSerializer
from modules.orders.services import OrderService
from modules.products.repositories.django_repository import ProductDjangoRepository

logger = structlog.get_logger(__name__)

CHECKOUT_FAILED = "Checkout failed."


def build_order_service() -> OrderService:
    return OrderService(
        order_repository=OrderDjangoRepository(),
        product_repository=ProductDjangoRepository(),
    )


def checkout_response(service: OrderService, items: Any) -> Response:
    """Run checkout for raw request *items* and map every outcome to HTTP.

    Shared by ``POST /orders/`` and the cart checkout endpoint.
    """
    try:
        dto = CheckoutDTO(items=items or [])
    except PydanticValidationError as exc:
        return Response(
            {
                "detail": "Invalid checkout request.",
                "errors": [
                    {
                        "field": ".".join(str(part) for part in err["loc"]),
                        "message": err["msg"],
                    }
                    for err in exc.errors()
                ],
            },
            status=status.HTTP_400_BAD_REQUEST,
        )

    try:
        order = service.checkout(dto)
    except EmptyCart as exc:
        return Response(
            {"detail": str(exc), "code": "empty_cart"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    except OrderTotalTooLarge as exc:
        return Response(
            {"detail": str(exc), "code": "total_too_large"},
            status=status.HTTP_400_BAD_REQUEST,
        )
    except ProductNotFound as exc:
        return Response(
            {
                "detail": str(exc),
                "code": "product_not_found",
                "product_id": str(exc.product_id),
            },
            status=status.HTTP_404_NOT_FOUND,
        )
    except InsufficientStock as exc:
        return Response(
            {
                "detail": str(exc),
                "code": "insufficient_stock",
                "product_name": exc.product_name,
                "available": exc.available,
            },
            status=status.HTTP_409_CONFLICT,
        )
    except StorageFailure:
        logger.error("order.checkout_failed")
        return Response(
            {"detail": CHECKOUT_FAILED, "code": "storage_failure"},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)


class OrderViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for checkout and order look-ups.

    Orders are write-once: there is no update or delete route.
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    filterset_class = OrderFilter
    filter_backends = [DjangoFilterBackend]

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = build_order_service()

    def get_queryset(self):
        return self._service.list_orders()

    def create(self, request: Request) -> Response:
        """POST /api/v1/orders/

        Body: ``{"items": [{"product_id": "...", "quantity": 2}, ...]}``.
        """
        items = request.data.get("items") if hasattr(request.data, "get") else None
        return checkout_response(self._service, items)

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/orders/{pk}/"""
        try:
            order = self._service.get_order(pk)
        except OrderNotFound:
            return Response(
                {"detail": "Order not found."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(OrderSerializer(order).data)
