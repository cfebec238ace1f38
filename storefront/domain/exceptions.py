"""Domain exceptions.

All domain-level errors raised by the catalog service. Errors fall into
three families: NotFound (a referenced entity or result set does not
exist), Conflict (a uniqueness rule would be violated) and InvalidInput
(a value the catalog cannot accept). The HTTP layer maps them to 404,
409 and 400 responses.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain exceptions.

    All domain errors should inherit from this class to allow
    catching domain-specific errors at the application layer.
    """

    error_code = "DOMAIN_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize domain error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


# ============================================================================
# Not Found Errors
# ============================================================================


class NotFoundError(DomainError):
    """Base class for errors about missing entities or empty result sets."""

    error_code = "NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    """Raised when no product matches the given id."""

    error_code = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int) -> None:
        """Initialize product not found error.

        Args:
            product_id: Requested product id.
        """
        super().__init__(
            "Product is not found with given id!",
            details={"product_id": product_id},
        )


class CategoryNotFoundError(NotFoundError):
    """Raised when a referenced category does not exist."""

    error_code = "CATEGORY_NOT_FOUND"

    def __init__(self, category_id: int) -> None:
        """Initialize category not found error.

        Args:
            category_id: Requested category id.
        """
        super().__init__(
            "Category is not found with given id!",
            details={"category_id": category_id},
        )


class BrandNotFoundError(NotFoundError):
    """Raised when a referenced brand does not exist."""

    error_code = "BRAND_NOT_FOUND"

    def __init__(self, brand_id: int) -> None:
        """Initialize brand not found error.

        Args:
            brand_id: Requested brand id.
        """
        super().__init__(
            "Brand is not found with given id!",
            details={"brand_id": brand_id},
        )


class ImageNotFoundError(NotFoundError):
    """Raised when requested image uploads do not resolve."""

    error_code = "IMAGE_NOT_FOUND"

    def __init__(self, missing_ids: list[int]) -> None:
        """Initialize image not found error.

        Args:
            missing_ids: Upload ids that did not resolve.
        """
        super().__init__(
            "Image is not found with given id!",
            details={"missing_ids": missing_ids},
        )


class NoProductsFoundError(NotFoundError):
    """Raised when a product query yields an empty result set."""

    error_code = "PRODUCTS_NOT_FOUND"


# ============================================================================
# Conflict Errors
# ============================================================================


class ConflictError(DomainError):
    """Base class for uniqueness violations."""

    error_code = "CONFLICT"


class SlugConflictError(ConflictError):
    """Raised when a product slug is already taken."""

    error_code = "SLUG_CONFLICT"

    def __init__(self, slug: str) -> None:
        """Initialize slug conflict error.

        Args:
            slug: The slug already in use.
        """
        super().__init__(
            "Product already exists with given slug",
            details={"slug": slug},
        )


# ============================================================================
# Invalid Input Errors
# ============================================================================


class InvalidInputError(DomainError):
    """Base class for values the catalog refuses to store or query with."""

    error_code = "INVALID_INPUT"


class EmptySlugError(InvalidInputError):
    """Raised when a product would end up with an empty slug."""

    error_code = "EMPTY_SLUG"

    def __init__(self, name: str) -> None:
        """Initialize empty slug error.

        Args:
            name: Product name the slug was derived from.
        """
        super().__init__(
            "Product slug cannot be empty",
            details={"name": name},
        )


class InvalidPageError(InvalidInputError):
    """Raised when page or limit is not a positive integer."""

    error_code = "INVALID_PAGE"

    def __init__(self, page: int, limit: int) -> None:
        """Initialize invalid page error.

        Args:
            page: Requested page number.
            limit: Requested page size.
        """
        super().__init__(
            "Page and limit must be positive",
            details={"page": page, "limit": limit},
        )
