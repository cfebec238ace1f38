"""Domain layer module.

Contains the domain exceptions raised by the catalog service.
"""

from storefront.domain.exceptions import (
    BrandNotFoundError,
    CategoryNotFoundError,
    ConflictError,
    DomainError,
    EmptySlugError,
    ImageNotFoundError,
    InvalidInputError,
    InvalidPageError,
    NoProductsFoundError,
    NotFoundError,
    ProductNotFoundError,
    SlugConflictError,
)

__all__ = [
    "DomainError",
    # Not found
    "NotFoundError",
    "ProductNotFoundError",
    "CategoryNotFoundError",
    "BrandNotFoundError",
    "ImageNotFoundError",
    "NoProductsFoundError",
    # Conflict
    "ConflictError",
    "SlugConflictError",
    # Invalid input
    "InvalidInputError",
    "EmptySlugError",
    "InvalidPageError",
]
