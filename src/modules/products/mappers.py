"""Translation between Product DTOs and the Product model.

``ProductMapper`` is stateless: every method is a pure function of its
arguments, apart from ``apply_update`` which mutates the product it is given.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from modules.products.dtos import ProductRequest, ProductResponse
from modules.products.models import Product


class ProductMapper:
    """Maps ``ProductRequest`` -> ``Product`` -> ``ProductResponse``."""

    def to_entity(self, request: Optional[ProductRequest]) -> Optional[Product]:
        """Build a new, unsaved product (``id`` unset) from a request."""
        if request is None:
            return None
        return Product(
            name=request.name,
            description=request.description,
            price=request.price,
        )

    def to_response(self, product: Optional[Product]) -> Optional[ProductResponse]:
        if product is None:
            return None
        return ProductResponse(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
        )

    def to_response_list(
        self, products: Optional[Iterable[Product]]
    ) -> List[ProductResponse]:
        """Map products in order; ``None`` or empty input gives ``[]``."""
        if not products:
            return []
        return [self.to_response(product) for product in products]

    def apply_update(
        self, request: Optional[ProductRequest], product: Optional[Product]
    ) -> None:
        """Overwrite name, description and price in place; ``id`` is kept."""
        if request is None or product is None:
            return
        product.name = request.name
        product.description = request.description
        product.price = request.price
