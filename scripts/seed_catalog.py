#!/usr/bin/env python3
"""Seed product catalog script.

Creates a small demo catalog (a category tree, a few brands, image
uploads and products) through the catalog service.

Usage:
    python scripts/seed_catalog.py
    python scripts/seed_catalog.py --create-tables
"""

import argparse
import asyncio
from decimal import Decimal

import structlog

from storefront.catalog.models import Brand, Category, Upload
from storefront.catalog.service import CatalogService, ProductCreate
from storefront.catalog.slugs import slugify
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import async_session_factory, create_all, engine
from storefront.infrastructure.logging import configure_logging

logger = structlog.get_logger()

# Category tree as (name, parent name)
CATEGORY_TREE = [
    ("Apparel", None),
    ("Clothing", "Apparel"),
    ("Shirts & Tops", "Clothing"),
    ("Pants", "Clothing"),
    ("Outerwear", "Clothing"),
    ("Shoes", "Apparel"),
    ("Electronics", None),
    ("Audio", "Electronics"),
    ("Headphones", "Audio"),
]

BRANDS = ["Acme", "Northwind", "Contoso"]

# (name, category, brand, price, colors, sizes)
PRODUCTS = [
    ("Classic Oxford Shirt", "Shirts & Tops", "Acme", "39.90", ["white", "blue"], ["s", "m", "l"]),
    ("Linen Tee", "Shirts & Tops", "Northwind", "19.50", ["beige", "white"], ["xs", "s", "m"]),
    ("Slim Chinos", "Pants", "Acme", "49.00", ["khaki", "navy"], ["30", "32", "34"]),
    ("Rain Shell Jacket", "Outerwear", "Contoso", "129.00", ["black", "red"], ["m", "l", "xl"]),
    ("Trail Runner", "Shoes", "Northwind", "89.99", ["grey"], ["41", "42", "43"]),
    ("Studio Headphones", "Headphones", "Contoso", "149.00", ["black"], []),
]


async def seed() -> dict:
    """Insert the demo catalog.

    Returns:
        Seeding result with counts.
    """
    async with async_session_factory() as session:
        categories: dict[str, Category] = {}
        for name, parent in CATEGORY_TREE:
            category = Category(
                name=name,
                slug=slugify(name),
                parent_id=categories[parent].id if parent else None,
            )
            session.add(category)
            await session.flush()
            categories[name] = category

        brands: dict[str, Brand] = {}
        for name in BRANDS:
            brand = Brand(name=name, slug=slugify(name))
            session.add(brand)
            brands[name] = brand
        await session.flush()

        service = CatalogService.for_session(session)
        created = 0
        for name, category, brand, price, colors, sizes in PRODUCTS:
            upload = Upload(filename=f"{slugify(name)}.jpg", url=f"/uploads/{slugify(name)}.jpg")
            session.add(upload)
            await session.flush()

            await service.create(
                ProductCreate(
                    name=name,
                    price=Decimal(price),
                    category_id=categories[category].id,
                    brand_id=brands[brand].id,
                    images=[upload.id],
                    colors=colors,
                    sizes=sizes,
                    stock=25,
                )
            )
            created += 1

        await session.commit()

    return {
        "categories_created": len(CATEGORY_TREE),
        "brands_created": len(BRANDS),
        "products_created": created,
    }


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed a demo product catalog")
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create tables from model metadata before seeding",
    )
    args = parser.parse_args()

    configure_logging(settings.log_level)

    if args.create_tables:
        await create_all()

    result = await seed()
    logger.info("Catalog seeded", **result)

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
