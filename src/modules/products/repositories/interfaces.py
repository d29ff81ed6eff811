"""Product repository interface.

Extends ``IRepository[Product]`` with the catalogue queries used by the
search endpoints.
"""

from __future__ import annotations

from abc import abstractmethod
from decimal import Decimal
from typing import TYPE_CHECKING, List

from modules.core.repositories.interfaces import IRepository

if TYPE_CHECKING:
    from modules.products.models import Product


class IProductRepository(IRepository["Product"]):
    """Repository contract for the Product aggregate."""

    @abstractmethod
    def find_by_name_containing(self, fragment: str) -> List["Product"]:
        """Case-insensitive substring match on ``name``."""

    @abstractmethod
    def find_by_price_between(
        self, min_price: Decimal, max_price: Decimal
    ) -> List["Product"]:
        """Products priced within ``[min_price, max_price]`` (inclusive)."""

    @abstractmethod
    def search_by_keyword(self, keyword: str) -> List["Product"]:
        """Substring match on ``name`` OR ``description``."""

    @abstractmethod
    def find_by_price_greater_than(self, price: Decimal) -> List["Product"]:
        """Products priced strictly above ``price``."""

    @abstractmethod
    def find_most_expensive(self) -> List["Product"]:
        """All products sharing the highest stored price."""
