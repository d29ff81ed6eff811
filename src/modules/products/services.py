"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository`` and translation to
``ProductMapper``.

Business rules enforced here:
- A product must exist before it can be read, updated or deleted.
- Price filters must not be negative, and a range minimum must not
  exceed its maximum.

Input validation (non-blank name, non-negative price) happens in
``ProductRequest`` before the service is called.
"""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Any, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import InvalidArgument
from modules.products.exceptions import ProductNotFound
from modules.products.mappers import ProductMapper

if TYPE_CHECKING:
    from modules.products.dtos import ProductRequest, ProductResponse
    from modules.products.models import Product
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)

NEGATIVE_PRICE_MESSAGE = "Price must not be negative."
INVERTED_RANGE_MESSAGE = "Minimum price must not exceed maximum price."


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` (and optionally a mapper) via
    constructor injection.
    """

    def __init__(
        self,
        repository: IProductRepository,
        mapper: Optional[ProductMapper] = None,
    ) -> None:
        self._repo = repository
        self._mapper = mapper or ProductMapper()

    def _get_or_raise(self, id: Any) -> Product:
        product = self._repo.get_by_id(id)
        if product is None:
            logger.info("product.not_found", product_id=str(id))
            raise ProductNotFound(id)
        return product

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create(self, request: ProductRequest) -> ProductResponse:
        """Persist a new product; storage assigns the id."""
        product = self._mapper.to_entity(request)
        product = self._repo.save(product)
        logger.info("product.created", product_id=product.id)
        return self._mapper.to_response(product)

    @transaction.atomic
    def update(self, id: Any, request: ProductRequest) -> ProductResponse:
        """Overwrite name, description and price of an existing product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        self._mapper.apply_update(request, product)
        product = self._repo.save(product)
        logger.info("product.updated", product_id=product.id)
        return self._mapper.to_response(product)

    @transaction.atomic
    def delete(self, id: Any) -> None:
        """Permanently remove a product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._get_or_raise(id)
        self._repo.delete(product)
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_all(self) -> List[ProductResponse]:
        return self._mapper.to_response_list(self._repo.list_all())

    def get_by_id(self, id: Any) -> ProductResponse:
        """Retrieve a single product.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        return self._mapper.to_response(self._get_or_raise(id))

    def search_by_name(self, fragment: str) -> List[ProductResponse]:
        """Case-insensitive substring search; an empty fragment matches all."""
        return self._mapper.to_response_list(
            self._repo.find_by_name_containing(fragment)
        )

    def search_by_keyword(self, keyword: str) -> List[ProductResponse]:
        return self._mapper.to_response_list(self._repo.search_by_keyword(keyword))

    def find_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[ProductResponse]:
        """Products priced within ``[min_price, max_price]``.

        Raises:
            InvalidArgument: if a bound is negative or ``min_price > max_price``.
        """
        if min_price < 0 or max_price < 0:
            logger.warning(
                "product.invalid_price_range",
                min_price=str(min_price),
                max_price=str(max_price),
            )
            raise InvalidArgument(NEGATIVE_PRICE_MESSAGE)
        if min_price > max_price:
            logger.warning(
                "product.invalid_price_range",
                min_price=str(min_price),
                max_price=str(max_price),
            )
            raise InvalidArgument(INVERTED_RANGE_MESSAGE)
        return self._mapper.to_response_list(
            self._repo.find_by_price_between(min_price, max_price)
        )

    def find_above_price(self, price: Decimal) -> List[ProductResponse]:
        """Products priced strictly above ``price``.

        Raises:
            InvalidArgument: if ``price`` is negative.
        """
        if price < 0:
            logger.warning("product.invalid_price_filter", price=str(price))
            raise InvalidArgument(NEGATIVE_PRICE_MESSAGE)
        return self._mapper.to_response_list(
            self._repo.find_by_price_greater_than(price)
        )

    def find_most_expensive(self) -> List[ProductResponse]:
        return self._mapper.to_response_list(self._repo.find_most_expensive())
