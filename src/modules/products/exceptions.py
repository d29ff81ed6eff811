"""Product domain exceptions.

Raised by the Service Layer when business rules are violated.
The API layer translates them into HTTP responses through
``modules.core.exception_handler``.
"""

from __future__ import annotations

from typing import Any

from modules.core.exceptions import ResourceNotFound

RESOURCE_NAME = "Product"


class ProductNotFound(ResourceNotFound):
    """The requested product does not exist."""

    def __init__(self, value: Any, field_name: str = "id") -> None:
        super().__init__(RESOURCE_NAME, field_name, value)
