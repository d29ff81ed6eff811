"""Django ORM implementation of the Product repository.

Satisfies ``IProductRepository`` using Django's QuerySet API.
Error handling follows the Null Object pattern: ``get_by_id`` returns
``None`` instead of raising, and the Service Layer decides how to
translate a missing entity into a domain failure.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Max, Q

from modules.products.models import Product
from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


class ProductDjangoRepository(IProductRepository):
    """Concrete Product repository backed by Django ORM."""

    def get_by_id(self, id: Any) -> Optional[Product]:
        """Retrieve a product by primary key.

        Returns ``None`` for non-existent or non-numeric IDs.
        """
        try:
            return Product.objects.filter(id=id).first()
        except (ValueError, TypeError, ValidationError):
            return None

    def list_all(self) -> List[Product]:
        return list(Product.objects.all())

    @transaction.atomic
    def save(self, entity: Product) -> Product:
        """Validate and persist (create or update) a product.

        Raises:
            django.core.exceptions.ValidationError: if the entity violates
                a field or model constraint.
        """
        entity.full_clean()
        entity.save()
        logger.info("product.saved", product_id=entity.id)
        return entity

    @transaction.atomic
    def delete(self, entity: Product) -> None:
        """Hard-delete a product."""
        product_id = entity.id
        entity.delete()
        logger.info("product.removed", product_id=product_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_by_name_containing(self, fragment: str) -> List[Product]:
        return list(Product.objects.filter(name__icontains=fragment))

    def find_by_price_between(
        self, min_price: Decimal, max_price: Decimal
    ) -> List[Product]:
        return list(Product.objects.filter(price__range=(min_price, max_price)))

    def search_by_keyword(self, keyword: str) -> List[Product]:
        return list(
            Product.objects.filter(
                Q(name__icontains=keyword) | Q(description__icontains=keyword)
            )
        )

    def find_by_price_greater_than(self, price: Decimal) -> List[Product]:
        return list(Product.objects.filter(price__gt=price))

    def find_most_expensive(self) -> List[Product]:
        """Products whose price equals ``MAX(price)``; empty when no rows."""
        top_price = Product.objects.aggregate(top=Max("price"))["top"]
        if top_price is None:
            return []
        return list(Product.objects.filter(price=top_price))
