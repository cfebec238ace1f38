"""Catalog service for product operations.

High-level service that combines repository operations with the
business rules of the product catalog: cross-entity validation, slug
uniqueness, dynamic filtering and category subtree listing.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Generic, TypeVar

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Product, Upload
from storefront.catalog.ports import BrandStore, CategoryStore, ProductStore, UploadStore
from storefront.catalog.predicates import ProductFilter
from storefront.catalog.repository import (
    BrandRepository,
    CategoryRepository,
    ProductRepository,
    UploadRepository,
)
from storefront.catalog.slugs import slugify
from storefront.catalog.tree import expand_subtree
from storefront.domain.exceptions import (
    BrandNotFoundError,
    CategoryNotFoundError,
    EmptySlugError,
    ImageNotFoundError,
    InvalidPageError,
    NoProductsFoundError,
    ProductNotFoundError,
    SlugConflictError,
)

T = TypeVar("T")

logger = structlog.get_logger()

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


# ============================================================================
# Service Input/Result Types
# ============================================================================


@dataclass
class ProductCreate:
    """Input for creating a product.

    Attributes:
        name: Product name; the slug is derived from it when none is given.
        price: Unit price.
        category_id: Owning category.
        brand_id: Product brand.
        images: Upload ids to attach.
        description: Optional description.
        colors: Available colors.
        sizes: Available sizes.
        stock: Available quantity.
        slug: Explicit slug, used as-is.
    """

    name: str
    price: Decimal
    category_id: int
    brand_id: int
    images: list[int]
    description: str | None = None
    colors: list[str] = field(default_factory=list)
    sizes: list[str] = field(default_factory=list)
    stock: int = 0
    slug: str | None = None


@dataclass
class ProductPatch:
    """Partial update for a product.

    Every field is optional; ``None`` means "keep the current value".
    """

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    colors: list[str] | None = None
    sizes: list[str] | None = None
    slug: str | None = None
    category_id: int | None = None
    brand_id: int | None = None
    images: list[int] | None = None


@dataclass
class PaginatedResult(Generic[T]):
    """Paginated result container.

    Attributes:
        data: Items on this page.
        total: Total count.
        page: Current page (1-indexed).
        limit: Items per page.
    """

    data: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        """Calculate total pages."""
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)


@dataclass
class ProductUpdateResult:
    """Result of updating a product."""

    product: Product
    message: str = "Product updated successfully"


@dataclass
class ProductDeleteResult:
    """Result of deleting a product."""

    product_id: int
    message: str = "Product deleted successfully"


# ============================================================================
# Catalog Service
# ============================================================================


class CatalogService:
    """Service for product catalog operations.

    Repositories are passed in explicitly; use ``for_session`` to build a
    service over SQLAlchemy repositories sharing one session.

    Example usage:
        async with async_session_factory() as session:
            service = CatalogService.for_session(session)
            page = await service.list_paginated(page=2, limit=5)
    """

    def __init__(
        self,
        products: ProductStore,
        categories: CategoryStore,
        brands: BrandStore,
        uploads: UploadStore,
        request_id: str | None = None,
    ) -> None:
        """Initialize service.

        Args:
            products: Product repository.
            categories: Category repository.
            brands: Brand repository.
            uploads: Upload repository.
            request_id: Request ID for correlation.
        """
        self.products = products
        self.categories = categories
        self.brands = brands
        self.uploads = uploads
        self.request_id = request_id

    @classmethod
    def for_session(cls, session: AsyncSession, request_id: str | None = None) -> "CatalogService":
        """Build a service backed by SQLAlchemy repositories.

        Args:
            session: Async SQLAlchemy session shared by all repositories.
            request_id: Request ID for correlation.

        Returns:
            CatalogService instance.
        """
        return cls(
            products=ProductRepository(session),
            categories=CategoryRepository(session),
            brands=BrandRepository(session),
            uploads=UploadRepository(session),
            request_id=request_id,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def list_all(self) -> list[Product]:
        """Get every product with category, brand and images.

        Returns:
            All products, unpaginated.
        """
        return list(await self.products.list_all())

    async def list_paginated(
        self,
        page: int | None = None,
        limit: int | None = None,
    ) -> PaginatedResult[Product]:
        """Get one page of products.

        Args:
            page: Page number, 1-indexed (default 1).
            limit: Items per page (default 10).

        Returns:
            Paginated product results.

        Raises:
            InvalidPageError: If page or limit is below 1.
        """
        page = page if page is not None else DEFAULT_PAGE
        limit = limit if limit is not None else DEFAULT_LIMIT
        if page < 1 or limit < 1:
            raise InvalidPageError(page, limit)
        offset = (page - 1) * limit

        products, total = await self.products.list_page(offset, limit)

        return PaginatedResult(data=list(products), total=total, page=page, limit=limit)

    async def get_by_id(self, product_id: int) -> Product:
        """Get a product by ID.

        Args:
            product_id: Product ID.

        Returns:
            The product.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def filter(self, filters: ProductFilter) -> list[Product]:
        """Find products matching every supplied criterion.

        Args:
            filters: Brand, color, size and price criteria.

        Returns:
            Matching products.

        Raises:
            NoProductsFoundError: If nothing matches.
        """
        predicates = filters.to_predicates()
        products = list(await self.products.find(predicates))

        logger.debug(
            "Products filtered",
            predicate_count=len(predicates),
            result_count=len(products),
            request_id=self.request_id,
        )

        if not products:
            raise NoProductsFoundError("Products not found with given parameters")
        return products

    async def list_by_category(self, category_id: int) -> list[Product]:
        """Get products in a category and all of its subcategories.

        Args:
            category_id: Root of the category subtree.

        Returns:
            Products whose category is in the subtree.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            NoProductsFoundError: If the subtree holds no products.
        """
        if not await self.categories.exists(category_id):
            raise CategoryNotFoundError(category_id)

        category_ids = await expand_subtree(category_id, self.categories.child_ids)
        products = list(await self.products.find_by_category_ids(category_ids))

        if not products:
            raise NoProductsFoundError(
                "No products found for the given category and its subcategories!",
                details={"category_id": category_id, "category_ids": category_ids},
            )
        return products

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def create(self, params: ProductCreate) -> Product:
        """Create a product.

        Checks, in order: category, brand, images, slug.

        Args:
            params: Product fields.

        Returns:
            The created product.

        Raises:
            CategoryNotFoundError: If the category does not exist.
            BrandNotFoundError: If the brand does not exist.
            ImageNotFoundError: If any image id does not resolve.
            EmptySlugError: If no slug is given and the name yields none.
            SlugConflictError: If the slug is taken.
        """
        await self._ensure_category(params.category_id)
        await self._ensure_brand(params.brand_id)
        uploads = await self._resolve_images(params.images)

        slug = params.slug or slugify(params.name)
        if not slug:
            raise EmptySlugError(params.name)
        await self._ensure_slug_free(slug)

        product = Product(
            name=params.name,
            description=params.description,
            price=params.price,
            stock=params.stock,
            colors=list(params.colors),
            sizes=list(params.sizes),
            slug=slug,
            category_id=params.category_id,
            brand_id=params.brand_id,
            images=uploads,
        )
        product = await self.products.save(product)

        logger.info(
            "Product created",
            product_id=product.id,
            slug=product.slug,
            request_id=self.request_id,
        )
        return product

    async def update(self, product_id: int, patch: ProductPatch) -> ProductUpdateResult:
        """Apply a partial update to a product.

        Only supplied references are re-validated; fields left as ``None``
        keep their current value.

        Args:
            product_id: Product to update.
            patch: Fields to change.

        Returns:
            Update result with the saved product.

        Raises:
            ProductNotFoundError: If the product does not exist.
            CategoryNotFoundError: If a supplied category does not exist.
            BrandNotFoundError: If a supplied brand does not exist.
            ImageNotFoundError: If a supplied image id does not resolve.
            SlugConflictError: If a new slug is taken.
            EmptySlugError: If the new slug is empty.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        if patch.category_id is not None:
            await self._ensure_category(patch.category_id)

        if patch.brand_id is not None:
            await self._ensure_brand(patch.brand_id)

        uploads: list[Upload] | None = None
        if patch.images is not None:
            uploads = await self._resolve_images(patch.images)

        if patch.slug is not None and not patch.slug:
            raise EmptySlugError(patch.name or product.name)
        if patch.slug is not None and patch.slug != product.slug:
            await self._ensure_slug_free(patch.slug)

        if patch.name is not None:
            product.name = patch.name
        if patch.description is not None:
            product.description = patch.description
        if patch.price is not None:
            product.price = patch.price
        if patch.stock is not None:
            product.stock = patch.stock
        if patch.colors is not None:
            product.colors = list(patch.colors)
        if patch.sizes is not None:
            product.sizes = list(patch.sizes)
        if patch.slug is not None:
            product.slug = patch.slug
        if patch.category_id is not None:
            product.category_id = patch.category_id
        if patch.brand_id is not None:
            product.brand_id = patch.brand_id
        if uploads is not None:
            product.images = uploads

        product = await self.products.save(product)

        logger.info(
            "Product updated",
            product_id=product.id,
            request_id=self.request_id,
        )
        return ProductUpdateResult(product=product)

    async def delete(self, product_id: int) -> ProductDeleteResult:
        """Delete a product.

        Args:
            product_id: Product to delete.

        Returns:
            Confirmation result.

        Raises:
            ProductNotFoundError: If the product does not exist.
        """
        product = await self.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        await self.products.delete(product)

        logger.info("Product deleted", product_id=product_id, request_id=self.request_id)
        return ProductDeleteResult(product_id=product_id)

    # ------------------------------------------------------------------
    # Validation helpers
    # ------------------------------------------------------------------

    async def _ensure_category(self, category_id: int) -> None:
        if not await self.categories.exists(category_id):
            logger.info("Category not found", category_id=category_id, request_id=self.request_id)
            raise CategoryNotFoundError(category_id)

    async def _ensure_brand(self, brand_id: int) -> None:
        if not await self.brands.exists(brand_id):
            logger.info("Brand not found", brand_id=brand_id, request_id=self.request_id)
            raise BrandNotFoundError(brand_id)

    async def _resolve_images(self, image_ids: list[int]) -> list[Upload]:
        """Resolve upload ids, requiring every one of them to exist.

        An empty request resolves to nothing and is rejected too, so a
        product always carries at least one image.
        """
        uploads = await self.uploads.get_many(image_ids)
        found = {upload.id for upload in uploads}
        missing = sorted(set(image_ids) - found)

        if not uploads or missing:
            logger.info("Images not found", missing_ids=missing, request_id=self.request_id)
            raise ImageNotFoundError(missing)
        return uploads

    async def _ensure_slug_free(self, slug: str) -> None:
        if await self.products.get_by_slug(slug) is not None:
            logger.warning("Slug already in use", slug=slug, request_id=self.request_id)
            raise SlugConflictError(slug)
