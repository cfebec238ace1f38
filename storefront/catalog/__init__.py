"""Product Catalog Service.

Provides product persistence, filtering, slug handling and category
subtree listing.
"""

from storefront.catalog.models import Brand, Category, Product, Upload
from storefront.catalog.predicates import Equals, Overlaps, ProductFilter, Range
from storefront.catalog.repository import (
    BrandRepository,
    CategoryRepository,
    ProductRepository,
    UploadRepository,
)
from storefront.catalog.service import (
    CatalogService,
    PaginatedResult,
    ProductCreate,
    ProductDeleteResult,
    ProductPatch,
    ProductUpdateResult,
)
from storefront.catalog.slugs import slugify
from storefront.catalog.tree import expand_subtree

__all__ = [
    # Models
    "Brand",
    "Category",
    "Product",
    "Upload",
    # Predicates
    "Equals",
    "Overlaps",
    "ProductFilter",
    "Range",
    # Repositories
    "BrandRepository",
    "CategoryRepository",
    "ProductRepository",
    "UploadRepository",
    # Service
    "CatalogService",
    "PaginatedResult",
    "ProductCreate",
    "ProductDeleteResult",
    "ProductPatch",
    "ProductUpdateResult",
    # Helpers
    "expand_subtree",
    "slugify",
]
