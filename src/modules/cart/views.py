"""Cart API views.

The cart lives in the visitor's session; checkout from the cart runs the
same flow as ``POST /orders/`` and empties the cart once an order exists.
"""

from __future__ import annotations

from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.cart.cart import Cart
from modules.cart.dtos import AddToCartDTO, UpdateCartItemDTO
from modules.cart.exceptions import CartItemNotFound
from modules.cart.serializers import CartLineSerializer, CartSerializer
from modules.orders.views import build_order_service, checkout_response
from modules.products.exceptions import InsufficientStock, ProductNotFound
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

ADD_FIELDS = ("product_id", "quantity")


def _bad_request(exc: PydanticValidationError) -> Response:
    errors = {
        ".".join(str(part) for part in err["loc"]) or "body": err["msg"]
        for err in exc.errors()
    }
    return Response(
        {"detail": "Invalid cart request.", "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


def _insufficient(exc: InsufficientStock) -> Response:
    return Response(
        {
            "detail": str(exc),
            "code": "insufficient_stock",
            "product_name": exc.product_name,
            "available": exc.available,
        },
        status=status.HTTP_409_CONFLICT,
    )


def _not_found(detail: str) -> Response:
    return Response({"detail": detail}, status=status.HTTP_404_NOT_FOUND)


class CartViewSet(ViewSet):
    """Session cart: view, add, change quantity, remove, clear, checkout."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._products = ProductService(repository=ProductDjangoRepository())

    def _cart_response(self, cart: Cart, status_code: int = status.HTTP_200_OK):
        return Response(CartSerializer(cart).data, status=status_code)

    def retrieve(self, request: Request) -> Response:
        """GET /api/v1/cart/"""
        return self._cart_response(Cart(request.session))

    def clear(self, request: Request) -> Response:
        """DELETE /api/v1/cart/"""
        cart = Cart(request.session)
        cart.clear()
        return self._cart_response(cart)

    def add_item(self, request: Request) -> Response:
        """POST /api/v1/cart/items/

        Body: ``{"product_id": "...", "quantity": 1}``.
        """
        data = request.data
        try:
            dto = AddToCartDTO(
                **{field: data[field] for field in ADD_FIELDS if field in data}
            )
        except PydanticValidationError as exc:
            return _bad_request(exc)

        try:
            product = self._products.get_product(str(dto.product_id))
        except ProductNotFound:
            return _not_found("Product not found.")

        cart = Cart(request.session)
        try:
            cart.add(product, dto.quantity)
        except InsufficientStock as exc:
            return _insufficient(exc)
        return self._cart_response(cart, status.HTTP_201_CREATED)

    def update_item(self, request: Request, product_id: str) -> Response:
        """PATCH /api/v1/cart/items/{product_id}/

        Body: ``{"quantity": n}``; ``n <= 0`` removes the line.
        """
        data = request.data
        try:
            dto = UpdateCartItemDTO(
                **({"quantity": data["quantity"]} if "quantity" in data else {})
            )
        except PydanticValidationError as exc:
            return _bad_request(exc)

        cart = Cart(request.session)
        if product_id not in cart:
            return _not_found("Product is not in the cart.")

        stock = None
        if dto.quantity > 0:
            try:
                stock = self._products.get_product(product_id).stock
            except ProductNotFound:
                cart.remove(product_id)
                return _not_found(
                    "Product no longer exists; it was removed from the cart."
                )

        try:
            line = cart.update(product_id, dto.quantity, stock=stock)
        except InsufficientStock as exc:
            return _insufficient(exc)

        if line is None:
            return self._cart_response(cart)
        return Response(CartLineSerializer(line).data)

    def remove_item(self, request: Request, product_id: str) -> Response:
        """DELETE /api/v1/cart/items/{product_id}/"""
        cart = Cart(request.session)
        try:
            cart.remove(product_id)
        except CartItemNotFound:
            return _not_found("Product is not in the cart.")
        return self._cart_response(cart)

    def checkout(self, request: Request) -> Response:
        """POST /api/v1/cart/checkout/

        Same responses as ``POST /api/v1/orders/``.  The cart is kept on
        any failure so the visitor can adjust it and retry.
        """
        cart = Cart(request.session)
        response = checkout_response(build_order_service(), cart.as_checkout_items())
        if response.status_code == status.HTTP_201_CREATED:
            cart.clear()
        return response
