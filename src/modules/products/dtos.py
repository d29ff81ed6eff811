"""Product DTOs for the Service Layer.

Framework-agnostic data transfer objects using Pydantic v2.
These are the contracts between the API layer (Views) and the
Service layer.  DTOs are immutable (``frozen=True``).

- ``ProductRequest``: input for product creation and full updates.
- ``ProductResponse``: read-only projection of a persisted product.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# ---------------------------------------------------------------------------
# Input DTO
# ---------------------------------------------------------------------------


class ProductRequest(BaseModel):
    """Immutable DTO for product create / update requests.

    Validates:
    - ``name`` is present, not blank and at most 255 characters.
    - ``price`` is present, non-negative and has at most two decimal places.

    ``description`` is optional; ``None`` is stored as an empty string.
    Unknown keys (``id`` included) are ignored.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(default=None, validate_default=True, max_length=255)
    description: str = ""
    price: Decimal = Field(
        default=None, validate_default=True, max_digits=12, decimal_places=2
    )

    @field_validator("name", mode="before")
    @classmethod
    def name_must_not_be_blank(cls, v: Any) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("Product name is required.")
        return v

    @field_validator("description", mode="before")
    @classmethod
    def description_defaults_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("price", mode="before")
    @classmethod
    def price_is_required(cls, v: Any) -> Any:
        if v is None or v == "":
            raise ValueError("Price is required.")
        return v

    @field_validator("price")
    @classmethod
    def price_must_not_be_negative(cls, v: Decimal) -> Decimal:
        if v < 0:
            raise ValueError("Price must not be negative.")
        return v


# ---------------------------------------------------------------------------
# Output DTO
# ---------------------------------------------------------------------------


class ProductResponse(BaseModel):
    """Immutable DTO for product API responses."""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    description: str
    price: Decimal

    @field_serializer("price", when_used="json")
    def price_as_number(self, price: Decimal) -> float:
        return float(price)
