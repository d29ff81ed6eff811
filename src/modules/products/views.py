"""Product API views.

Exposes the ``ProductService`` via HTTP using a DRF ViewSet.
Domain exceptions propagate out of the view and are translated into
HTTP responses by ``modules.core.exception_handler``; the view never
swallows them.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable, List

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import ViewSet

from modules.products.dtos import ProductRequest, ProductResponse
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.serializers import (
    ProductRequestSerializer,
    ProductResponseSerializer,
)
from modules.products.services import ProductService


def _decimal_param(request: Request, name: str) -> Decimal:
    raw = request.query_params.get(name)
    if raw is None or not raw.strip():
        raise ValidationError({name: f"Query parameter '{name}' is required."})
    try:
        value = Decimal(raw.strip())
    except InvalidOperation:
        raise ValidationError(
            {name: f"Query parameter '{name}' must be a decimal number."}
        ) from None
    if not value.is_finite():
        raise ValidationError(
            {name: f"Query parameter '{name}' must be a decimal number."}
        )
    return value


def _parse_body(data) -> ProductRequest:
    if not isinstance(data, dict):
        raise ValidationError(
            {"non_field_errors": "Request body must be a JSON object."}
        )
    return ProductRequest.model_validate(data)


def _dump(products: Iterable[ProductResponse]) -> List[dict]:
    return [product.model_dump(mode="json") for product in products]


class ProductViewSet(ViewSet):
    """ViewSet for Product CRUD and search operations.

    Uses ``ProductService`` with ``ProductDjangoRepository`` (DIP).
    All ORM access goes through the service/repository layer.
    """

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._service = ProductService(repository=ProductDjangoRepository())

    # ------------------------------------------------------------------
    # List / Retrieve
    # ------------------------------------------------------------------

    @extend_schema(responses=ProductResponseSerializer(many=True))
    def list(self, request: Request) -> Response:
        """GET /api/products"""
        return Response(_dump(self._service.list_all()))

    @extend_schema(responses=ProductResponseSerializer)
    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /api/products/{pk}"""
        product = self._service.get_by_id(pk)
        return Response(product.model_dump(mode="json"))

    # ------------------------------------------------------------------
    # Create / Update / Destroy
    # ------------------------------------------------------------------

    @extend_schema(
        request=ProductRequestSerializer,
        responses={201: ProductResponseSerializer},
    )
    def create(self, request: Request) -> Response:
        """POST /api/products"""
        dto = _parse_body(request.data)
        product = self._service.create(dto)
        return Response(product.model_dump(mode="json"), status=status.HTTP_201_CREATED)

    @extend_schema(request=ProductRequestSerializer, responses=ProductResponseSerializer)
    def update(self, request: Request, pk: str | None = None) -> Response:
        """PUT /api/products/{pk}"""
        dto = _parse_body(request.data)
        product = self._service.update(pk, dto)
        return Response(product.model_dump(mode="json"))

    @extend_schema(responses={204: None})
    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /api/products/{pk}"""
        self._service.delete(pk)
        return Response(status=status.HTTP_204_NO_CONTENT)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    @extend_schema(
        parameters=[OpenApiParameter("name", str, required=False)],
        responses=ProductResponseSerializer(many=True),
    )
    @action(detail=False, methods=["get"], url_path="search")
    def search(self, request: Request) -> Response:
        """GET /api/products/search?name=lap"""
        fragment = request.query_params.get("name", "")
        return Response(_dump(self._service.search_by_name(fragment)))

    @extend_schema(
        parameters=[OpenApiParameter("q", str, required=False)],
        responses=ProductResponseSerializer(many=True),
    )
    @action(
        detail=False,
        methods=["get"],
        url_path="search/keyword",
        url_name="search-keyword",
    )
    def search_keyword(self, request: Request) -> Response:
        """GET /api/products/search/keyword?q=laptop"""
        keyword = request.query_params.get("q", "")
        return Response(_dump(self._service.search_by_keyword(keyword)))

    @extend_schema(
        parameters=[
            OpenApiParameter("min", OpenApiTypes.DECIMAL, required=True),
            OpenApiParameter("max", OpenApiTypes.DECIMAL, required=True),
        ],
        responses=ProductResponseSerializer(many=True),
    )
    @action(detail=False, methods=["get"], url_path="price-range")
    def price_range(self, request: Request) -> Response:
        """GET /api/products/price-range?min=0&max=100"""
        min_price = _decimal_param(request, "min")
        max_price = _decimal_param(request, "max")
        return Response(_dump(self._service.find_by_price_range(min_price, max_price)))

    @extend_schema(
        parameters=[OpenApiParameter("price", OpenApiTypes.DECIMAL, required=True)],
        responses=ProductResponseSerializer(many=True),
    )
    @action(detail=False, methods=["get"], url_path="price-above")
    def price_above(self, request: Request) -> Response:
        """GET /api/products/price-above?price=1000"""
        price = _decimal_param(request, "price")
        return Response(_dump(self._service.find_above_price(price)))

    @extend_schema(responses=ProductResponseSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="most-expensive")
    def most_expensive(self, request: Request) -> Response:
        """GET /api/products/most-expensive"""
        return Response(_dump(self._service.find_most_expensive()))
