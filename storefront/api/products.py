"""Product API endpoints.

Maps catalog routes to ``CatalogService`` calls. Domain errors raised by
the service propagate to the exception handlers registered in
``storefront.main``.
"""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.api.schemas import (
    BrandSummary,
    CategorySummary,
    ErrorResponse,
    ImageSchema,
    MessageResponse,
    ProductCreateRequest,
    ProductPageResponse,
    ProductResponse,
    ProductUpdateRequest,
    ProductUpdateResponse,
)
from storefront.catalog.models import Product
from storefront.catalog.predicates import ProductFilter
from storefront.catalog.service import CatalogService, ProductCreate, ProductPatch
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import get_session

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    request: Request,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogService:
    """Get catalog service bound to the request's session."""
    request_id = getattr(request.state, "request_id", None)
    return CatalogService.for_session(session, request_id=request_id)


Service = Annotated[CatalogService, Depends(get_catalog_service)]


# ============================================================================
# Converters
# ============================================================================


def product_to_response(product: Product) -> ProductResponse:
    """Convert Product model to response schema."""
    category = product.category
    brand = product.brand

    return ProductResponse(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock=product.stock,
        slug=product.slug,
        colors=list(product.colors or []),
        sizes=list(product.sizes or []),
        category=(
            CategorySummary(id=category.id, name=category.name, slug=category.slug)
            if category
            else None
        ),
        brand=(
            BrandSummary(id=brand.id, name=brand.name, slug=brand.slug)
            if brand
            else None
        ),
        images=[
            ImageSchema(id=image.id, filename=image.filename, url=image.url)
            for image in product.images
        ],
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=list[ProductResponse],
    summary="List products",
    description="Get every product with its category, brand and images.",
)
async def list_products(service: Service) -> list[ProductResponse]:
    """List all products."""
    products = await service.list_all()
    return [product_to_response(p) for p in products]


@router.get(
    "/paginate",
    response_model=ProductPageResponse,
    summary="List products page by page",
)
async def list_products_paginated(
    service: Service,
    page: Annotated[int, Query(ge=1, description="Page number (1-based)")] = 1,
    limit: Annotated[
        int, Query(ge=1, le=settings.max_page_limit, description="Items per page")
    ] = 10,
) -> ProductPageResponse:
    """Get one page of products."""
    result = await service.list_paginated(page=page, limit=limit)

    return ProductPageResponse(
        data=[product_to_response(p) for p in result.data],
        total=result.total,
        page=result.page,
        limit=result.limit,
        total_pages=result.total_pages,
    )


@router.get(
    "/filter",
    response_model=list[ProductResponse],
    responses={404: {"model": ErrorResponse}},
    summary="Filter products",
    description=(
        "Filter by brand, colors, sizes and price range. Colors and sizes "
        "match when the product shares at least one value."
    ),
)
async def filter_products(
    service: Service,
    brand_id: int | None = None,
    colors: Annotated[list[str] | None, Query()] = None,
    sizes: Annotated[list[str] | None, Query()] = None,
    min_price: Annotated[Decimal | None, Query(ge=0)] = None,
    max_price: Annotated[Decimal | None, Query(ge=0)] = None,
) -> list[ProductResponse]:
    """Filter products.

    Raises:
        NoProductsFoundError: If nothing matches.
    """
    products = await service.filter(
        ProductFilter(
            brand_id=brand_id,
            colors=colors,
            sizes=sizes,
            min_price=min_price,
            max_price=max_price,
        )
    )
    return [product_to_response(p) for p in products]


@router.get(
    "/category/{category_id}",
    response_model=list[ProductResponse],
    responses={404: {"model": ErrorResponse}},
    summary="List products in a category tree",
    description="Get products of a category and all of its subcategories.",
)
async def list_products_by_category(category_id: int, service: Service) -> list[ProductResponse]:
    """List products under a category subtree."""
    products = await service.list_by_category(category_id)
    return [product_to_response(p) for p in products]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product details",
)
async def get_product(product_id: int, service: Service) -> ProductResponse:
    """Get a product by ID."""
    product = await service.get_by_id(product_id)
    return product_to_response(product)


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(body: ProductCreateRequest, service: Service) -> ProductResponse:
    """Create a product.

    Category, brand and images must exist; the slug must be unused.
    """
    product = await service.create(
        ProductCreate(
            name=body.name,
            description=body.description,
            price=body.price,
            stock=body.stock,
            colors=body.colors,
            sizes=body.sizes,
            slug=body.slug,
            category_id=body.category_id,
            brand_id=body.brand_id,
            images=body.images,
        )
    )
    return product_to_response(product)


@router.patch(
    "/{product_id}",
    response_model=ProductUpdateResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    service: Service,
) -> ProductUpdateResponse:
    """Apply a partial update to a product."""
    result = await service.update(product_id, ProductPatch(**body.model_dump()))
    return ProductUpdateResponse(
        message=result.message,
        product=product_to_response(result.product),
    )


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        401: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete product",
)
async def delete_product(product_id: int, service: Service) -> MessageResponse:
    """Delete a product."""
    result = await service.delete(product_id)
    return MessageResponse(message=result.message)
