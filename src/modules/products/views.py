"""Product API views.

Exposes the ``ProductService`` via HTTP using DRF ViewSets.
Domain exceptions are caught and translated into appropriate
HTTP status codes; the view never swallows generic exceptions.
Storage faults propagate to ``modules.core.exceptions.api_exception_handler``.
"""

from __future__ import annotations

from django_filters.rest_framework import DjangoFilterBackend
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import OrderingFilter
from rest_framework.mixins import ListModelMixin
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.products.dtos import CreateProductDTO, UpdateProductDTO
from modules.products.exceptions import InvalidProduct, ProductNotFound
from modules.products.filters import ProductFilter
from modules.products.models import Product
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import ProductSerializer
from modules.products.services import ProductService

PRODUCT_FIELDS = ("name", "description", "price", "stock")


def _not_found() -> Response:
    return Response(
        {"detail": "Product not found."},
        status=status.HTTP_404_NOT_FOUND,
    )


def _invalid(exc: Exception) -> Response:
    if isinstance(exc, PydanticValidationError):
        errors = {
            ".".join(str(part) for part in err["loc"]) or "body": err["msg"]
            for err in exc.errors()
        }
        detail = "; ".join(f"{field}: {msg}" for field, msg in errors.items())
    else:
        errors = getattr(exc, "errors", {})
        detail = str(exc)
    return Response(
        {"detail": detail, "errors": errors},
        status=status.HTTP_400_BAD_REQUEST,
    )


class ProductViewSet(ListModelMixin, GenericViewSet):
    """ViewSet for catalog CRUD and search.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    Does **not** extend ``ModelViewSet``: all ORM access goes through
    the service/repository layer.
    """

    filterset_class = ProductFilter
    ordering_fields = ["name", "price", "stock", "created_at"]
    filter_backends = [DjangoFilterBackend, OrderingFilter]
    queryset = Product.objects.all()
    serializer_class = ProductSerializer

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve / Search
    # ------------------------------------------------------------------

    def get_queryset(self):
        return self._service.list_products()

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/v1/products/{pk}/"""
        try:
            product = self._service.get_product(pk)
        except ProductNotFound:
            return _not_found()
        return Response(ProductSerializer(product).data)

    @action(
        detail=False,
        methods=["get"],
        url_path=r"search(?:/(?P<query>[^/]+))?",
        filter_backends=[],
    )
    def search(self, request: Request, query: str | None = None) -> Response:
        """GET /api/v1/products/search/{query}/ or /api/v1/products/search/?q=

        Full catalog scan; see ``ProductDjangoRepository.search``.
        """
        term = query if query is not None else request.query_params.get("q", "")
        products = self._service.search_products(term)
        return Response(ProductSerializer(products, many=True).data)

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    def create(self, request: Request) -> Response:
        """POST /api/v1/products/"""
        data = request.data
        try:
            dto = CreateProductDTO(
                **{field: data[field] for field in PRODUCT_FIELDS if field in data}
            )
            product = self._service.create_product(dto)
        except (PydanticValidationError, InvalidProduct) as exc:
            return _invalid(exc)

        out = ProductSerializer(product)
        return Response(out.data, status=status.HTTP_201_CREATED)

    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT/PATCH /api/v1/products/{pk}/

        Both verbs are partial: only the supplied fields change.
        """
        data = request.data
        try:
            dto = UpdateProductDTO(
                **{field: data[field] for field in PRODUCT_FIELDS if field in data}
            )
            product = self._service.update_product(pk, dto)
        except ProductNotFound:
            return _not_found()
        except (PydanticValidationError, InvalidProduct) as exc:
            return _invalid(exc)

        return Response(ProductSerializer(product).data)

    def partial_update(self, request: Request, pk: str | None = None) -> Response:
        """PATCH /api/v1/products/{pk}/"""
        return self.update(request, pk)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/v1/products/{pk}/"""
        try:
            self._service.delete_product(pk)
        except ProductNotFound:
            return _not_found()
        return Response({"detail": "Product deleted successfully."})
