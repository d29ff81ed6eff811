from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from modules.products.dtos import ProductRequest
from modules.products.repositories.django_repository import ProductDjangoRepository
from modules.products.services import ProductService

CATALOG = [
    (
        "Laptop Dell XPS 13",
        "13-inch premium laptop with Intel Core i7 and 16GB RAM",
        Decimal("25999000.00"),
    ),
    (
        "iPhone 15 Pro",
        "Apple flagship smartphone with A17 Pro chip and 48MP camera",
        Decimal("28999000.00"),
    ),
    (
        "Samsung Galaxy Watch 6",
        "Smartwatch with GPS, health and fitness tracking",
        Decimal("6990000.00"),
    ),
    (
        "Sony WH-1000XM5",
        "Noise-cancelling headphones with outstanding sound quality",
        Decimal("8990000.00"),
    ),
    (
        "MacBook Air M3",
        "Apple laptop with M3 chip and 13-inch Retina display",
        Decimal("32990000.00"),
    ),
]


class Command(BaseCommand):
    help = "Seed the product catalogue with sample data when it is empty."

    def handle(self, *args, **options):
        service = ProductService(repository=ProductDjangoRepository())

        if service.list_all():
            self.stdout.write("Products already present, skipping seed.")
            return

        with transaction.atomic():
            for name, description, price in CATALOG:
                service.create(
                    ProductRequest(name=name, description=description, price=price)
                )

        self.stdout.write(
            self.style.SUCCESS(f"Seed completed: products={len(CATALOG)}")
        )
