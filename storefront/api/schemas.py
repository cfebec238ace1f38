"""API schemas for the Storefront API.

Pydantic models for request/response validation and serialization.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str


# ============================================================================
# Catalog Summaries
# ============================================================================


class CategorySummary(BaseModel):
    """Category as embedded in a product."""

    id: int
    name: str
    slug: str


class BrandSummary(BaseModel):
    """Brand as embedded in a product."""

    id: int
    name: str
    slug: str


class ImageSchema(BaseModel):
    """Image upload attached to a product."""

    id: int
    filename: str
    url: str


# ============================================================================
# Product Schemas
# ============================================================================


class ProductResponse(BaseModel):
    """Product representation returned by every product endpoint."""

    id: int = Field(..., description="Product identifier")
    name: str = Field(..., description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Decimal = Field(..., description="Unit price as an exact decimal string")
    stock: int = Field(..., description="Available quantity")
    slug: str = Field(..., description="Unique URL-safe identifier")
    colors: list[str] = Field(default_factory=list, description="Available colors")
    sizes: list[str] = Field(default_factory=list, description="Available sizes")
    category: CategorySummary | None = Field(default=None, description="Owning category")
    brand: BrandSummary | None = Field(default=None, description="Product brand")
    images: list[ImageSchema] = Field(default_factory=list, description="Product images")
    created_at: datetime | None = Field(default=None, description="When the product was created")
    updated_at: datetime | None = Field(default=None, description="When the product was last updated")


class ProductPageResponse(BaseModel):
    """One page of products."""

    data: list[ProductResponse] = Field(..., description="Products on this page")
    total: int = Field(..., description="Total number of products")
    page: int = Field(..., description="Current page number")
    limit: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Total number of pages")


class ProductCreateRequest(BaseModel):
    """Request to create a product."""

    name: str = Field(..., min_length=1, max_length=500, description="Product name")
    description: str | None = Field(default=None, description="Product description")
    price: Decimal = Field(..., ge=0, description="Unit price")
    stock: int = Field(default=0, ge=0, description="Available quantity")
    colors: list[str] = Field(default_factory=list, description="Available colors")
    sizes: list[str] = Field(default_factory=list, description="Available sizes")
    slug: str | None = Field(
        default=None,
        max_length=500,
        description="Explicit slug; derived from the name when omitted",
    )
    category_id: int = Field(..., description="Owning category id")
    brand_id: int = Field(..., description="Brand id")
    images: list[int] = Field(..., description="Upload ids of the product images")


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=1, max_length=500)
    description: str | None = None
    price: Decimal | None = Field(default=None, ge=0)
    stock: int | None = Field(default=None, ge=0)
    colors: list[str] | None = None
    sizes: list[str] | None = None
    slug: str | None = Field(default=None, max_length=500)
    category_id: int | None = None
    brand_id: int | None = None
    images: list[int] | None = None


class ProductUpdateResponse(BaseModel):
    """Result of a product update."""

    message: str
    product: ProductResponse
