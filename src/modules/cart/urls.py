"""Cart URL configuration."""

from __future__ import annotations

from django.urls import path

from modules.cart.views import CartViewSet

cart_detail = CartViewSet.as_view({"get": "retrieve", "delete": "clear"})
cart_items = CartViewSet.as_view({"post": "add_item"})
cart_item = CartViewSet.as_view({"patch": "update_item", "delete": "remove_item"})
cart_checkout = CartViewSet.as_view({"post": "checkout"})

urlpatterns = [
    path("cart/", cart_detail, name="cart-detail"),
    path("cart/items/", cart_items, name="cart-items"),
    path("cart/items/<str:product_id>/", cart_item, name="cart-item"),
    path("cart/checkout/", cart_checkout, name="cart-checkout"),
]
