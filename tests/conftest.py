"""Shared fixtures: an in-memory catalog and a service over it.

Category tree used throughout:

    1 Apparel
    ├── 2 Clothing
    │   └── 4 Shirts
    └── 3 Shoes
    5 Electronics
"""

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.catalog.memory import (
    InMemoryBrandRepository,
    InMemoryCatalog,
    InMemoryCategoryRepository,
    InMemoryProductRepository,
    InMemoryUploadRepository,
)
from storefront.catalog.models import Product
from storefront.catalog.service import CatalogService

APPAREL, CLOTHING, SHOES, SHIRTS, ELECTRONICS = 1, 2, 3, 4, 5
ACME, NORTHWIND = 1, 2


@pytest.fixture
def catalog() -> InMemoryCatalog:
    """Create an in-memory catalog with categories, brands and uploads."""
    catalog = InMemoryCatalog()

    catalog.add_category("Apparel", "apparel")
    catalog.add_category("Clothing", "clothing", parent_id=APPAREL)
    catalog.add_category("Shoes", "shoes", parent_id=APPAREL)
    catalog.add_category("Shirts", "shirts", parent_id=CLOTHING)
    catalog.add_category("Electronics", "electronics")

    catalog.add_brand("Acme", "acme")
    catalog.add_brand("Northwind", "northwind")

    for index in range(1, 4):
        catalog.add_upload(f"image-{index}.jpg")

    return catalog


@pytest.fixture
def add_product(catalog: InMemoryCatalog) -> Callable[..., Product]:
    """Factory inserting a product straight into the catalog."""

    def _add(
        name: str,
        price: str = "10.00",
        category_id: int = SHIRTS,
        brand_id: int = ACME,
        colors: list[str] | None = None,
        sizes: list[str] | None = None,
        slug: str | None = None,
        stock: int = 5,
    ) -> Product:
        now = datetime.now(timezone.utc)
        product = Product(
            id=catalog.next_id("products"),
            name=name,
            description=f"{name} description",
            price=Decimal(price),
            stock=stock,
            colors=colors or [],
            sizes=sizes or [],
            slug=slug or name.lower().replace(" ", "-"),
            category_id=category_id,
            brand_id=brand_id,
            created_at=now,
            updated_at=now,
        )
        product.category = catalog.categories[category_id]
        product.brand = catalog.brands[brand_id]
        product.images = [catalog.uploads[1]]
        catalog.products[product.id] = product
        return product

    return _add


@pytest.fixture
def service(catalog: InMemoryCatalog) -> CatalogService:
    """Create catalog service over the in-memory catalog."""
    return CatalogService(
        products=InMemoryProductRepository(catalog),
        categories=InMemoryCategoryRepository(catalog),
        brands=InMemoryBrandRepository(catalog),
        uploads=InMemoryUploadRepository(catalog),
        request_id="test-request",
    )
