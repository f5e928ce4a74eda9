"""Sample catalog loaded into an empty store."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from ..models.product import Product


def sample_products() -> List[Product]:
    """Return fresh, unsaved copies of the three sample products."""
    return [
        Product(
            name="Laptop",
            description="High-performance laptop with the latest processor",
            price=Decimal("1200.00"),
            category="Electronics",
            tags=["computer", "tech", "portable"],
            in_stock=True,
        ),
        Product(
            name="Smartphone",
            description="Latest smartphone with high-resolution camera",
            price=Decimal("800.00"),
            category="Electronics",
            tags=["mobile", "tech", "phone"],
            in_stock=True,
        ),
        Product(
            name="Coffee Table",
            description="Elegant coffee table made of solid wood",
            price=Decimal("250.00"),
            category="Furniture",
            tags=["table", "wood", "living room"],
            in_stock=True,
        ),
    ]
