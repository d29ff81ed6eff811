"""Product DRF serializers used to document the API schema.

Request parsing and response rendering go through the Pydantic DTOs in
``dtos.py``; these serializers describe the same wire shapes to
drf-spectacular so the OpenAPI document matches what the views return.
"""

from __future__ import annotations

from decimal import Decimal

from rest_framework import serializers


class ProductRequestSerializer(serializers.Serializer):
    """Body of ``POST /api/products`` and ``PUT /api/products/{id}``."""

    name = serializers.CharField(max_length=255)
    description = serializers.CharField(required=False, allow_blank=True)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), coerce_to_string=False
    )


class ProductResponseSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    name = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    price = serializers.DecimalField(
        max_digits=12, decimal_places=2, coerce_to_string=False, read_only=True
    )
