"""Product model.

Business rules implemented:
- Price must not be negative (validator + database check constraint).
- Name must not be blank (``ProductRequest`` at the boundary, ``clean`` on
  every repository save).
- Deletion is permanent; there is no soft delete.
"""

from __future__ import annotations

from decimal import Decimal

import structlog
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models

from modules.core.models import TimestampedModel

logger = structlog.get_logger(__name__)


class Product(TimestampedModel):
    """Product aggregate root.

    ``id`` is assigned by the database on first save.
    """

    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        validators=[MinValueValidator(Decimal("0"))],
    )

    class Meta:
        db_table = "products"
        ordering = ["id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(price__gte=0),
                name="products_price_non_negative",
            ),
        ]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def clean(self) -> None:
        super().clean()
        if self.name is not None and not self.name.strip():
            raise ValidationError({"name": "Product name must not be blank."})
        if self.price is not None and self.price < 0:
            raise ValidationError({"price": "Price must not be negative."})

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self, *args, **kwargs) -> None:
        is_new = self._state.adding
        super().save(*args, **kwargs)
        if is_new:
            logger.info(
                "product_created",
                product_id=self.id,
                name=self.name,
            )

    def __str__(self) -> str:
        return f"{self.name} ({self.price})"
