"""Catalog repositories for database operations.

SQLAlchemy-backed repositories for products, categories, brands and
uploads. The catalog service only depends on the methods defined here;
``storefront.catalog.memory`` provides in-memory counterparts.
"""

from collections.abc import Iterable, Sequence
from typing import Any

import structlog
from sqlalchemy import ColumnElement, Select, and_, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.models import Brand, Category, Product, Upload
from storefront.catalog.predicates import Equals, Overlaps, Predicate, Range
from storefront.domain.exceptions import SlugConflictError

logger = structlog.get_logger()

SLUG_CONSTRAINT = "uq_products_slug"


def _with_relations(query: Select[Any]) -> Select[Any]:
    """Eagerly load the relations every product response needs."""
    return query.options(
        selectinload(Product.category),
        selectinload(Product.brand),
        selectinload(Product.images),
    )


def predicate_to_clause(predicate: Predicate) -> ColumnElement[bool]:
    """Compile a filter predicate to a SQLAlchemy clause.

    Args:
        predicate: Predicate to compile.

    Returns:
        Boolean SQL expression over the products table.

    Raises:
        TypeError: If the predicate type is unknown.
    """
    column = getattr(Product, predicate.field)

    if isinstance(predicate, Equals):
        return column == predicate.value

    if isinstance(predicate, Overlaps):
        return column.overlap(list(predicate.values))

    if isinstance(predicate, Range):
        if predicate.lower is not None and predicate.upper is not None:
            return column.between(predicate.lower, predicate.upper)
        if predicate.lower is not None:
            return column >= predicate.lower
        return column <= predicate.upper

    raise TypeError(f"Unsupported predicate: {predicate!r}")


class ProductRepository:
    """Repository for Product database operations.

    Example usage:
        async with async_session_factory() as session:
            repo = ProductRepository(session)
            products = await repo.find([Equals("brand_id", 3)])
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def list_all(self) -> Sequence[Product]:
        """Get every product with its relations loaded."""
        query = _with_relations(select(Product)).order_by(Product.id)
        result = await self.session.execute(query)
        return result.scalars().all()

    async def list_page(self, offset: int, limit: int) -> tuple[Sequence[Product], int]:
        """Get one page of products and the total product count.

        Args:
            offset: Number of rows to skip.
            limit: Maximum rows to return.

        Returns:
            Tuple of (products, total_count).
        """
        query = _with_relations(select(Product)).order_by(Product.id).offset(offset).limit(limit)
        result = await self.session.execute(query)
        products = result.scalars().all()

        total = await self.session.scalar(select(func.count(Product.id)))
        return products, total or 0

    async def get_by_id(self, product_id: int) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID.

        Returns:
            Product if found, None otherwise.
        """
        query = _with_relations(select(Product)).where(Product.id == product_id)
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug.

        Args:
            slug: Product slug.

        Returns:
            Product if found, None otherwise.
        """
        result = await self.session.execute(select(Product).where(Product.slug == slug))
        return result.scalar_one_or_none()

    def build_filter_query(self, predicates: Sequence[Predicate]) -> Select[Any]:
        """Build the SELECT for a conjunctive predicate list.

        Args:
            predicates: Predicates to combine with AND.

        Returns:
            Select statement over products.
        """
        query = _with_relations(select(Product))
        if predicates:
            query = query.where(and_(*(predicate_to_clause(p) for p in predicates)))
        return query.order_by(Product.id)

    async def find(self, predicates: Sequence[Predicate]) -> Sequence[Product]:
        """Find products matching every predicate.

        Args:
            predicates: Filter predicates.

        Returns:
            Matching products.
        """
        result = await self.session.execute(self.build_filter_query(predicates))
        return result.scalars().all()

    async def find_by_category_ids(self, category_ids: Iterable[int]) -> Sequence[Product]:
        """Find products belonging to any of the given categories.

        Args:
            category_ids: Category ids.

        Returns:
            Matching products.
        """
        query = (
            _with_relations(select(Product))
            .where(Product.category_id.in_(list(category_ids)))
            .order_by(Product.id)
        )
        result = await self.session.execute(query)
        return result.scalars().all()

    async def save(self, product: Product) -> Product:
        """Insert or update a product.

        The unique slug constraint is enforced by the database; a violation
        at flush time is reported as a slug conflict.

        Args:
            product: Product to save.

        Returns:
            The saved product, reloaded with its relations.

        Raises:
            SlugConflictError: If another product already uses the slug.
        """
        # Rollback expires a persistent instance, so read the slug first
        slug = product.slug
        self.session.add(product)
        try:
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            if SLUG_CONSTRAINT in str(e.orig):
                logger.warning("Slug constraint violated on flush", slug=slug)
                raise SlugConflictError(slug) from e
            raise

        query = (
            _with_relations(select(Product))
            .where(Product.id == product.id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(query)
        return result.scalar_one()

    async def delete(self, product: Product) -> None:
        """Delete a product.

        Association rows in ``product_images`` are removed with it; the
        uploads themselves are left alone.

        Args:
            product: Product to delete.
        """
        await self.session.delete(product)
        await self.session.flush()


class CategoryRepository:
    """Repository for Category lookups."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, category_id: int) -> bool:
        """Check whether a category exists."""
        result = await self.session.scalar(select(Category.id).where(Category.id == category_id))
        return result is not None

    async def child_ids(self, parent_id: int) -> list[int]:
        """Get ids of the direct children of a category.

        Args:
            parent_id: Parent category id.

        Returns:
            Child category ids ordered by id.
        """
        result = await self.session.execute(
            select(Category.id).where(Category.parent_id == parent_id).order_by(Category.id)
        )
        return list(result.scalars().all())


class BrandRepository:
    """Repository for Brand lookups."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def exists(self, brand_id: int) -> bool:
        """Check whether a brand exists."""
        result = await self.session.scalar(select(Brand.id).where(Brand.id == brand_id))
        return result is not None


class UploadRepository:
    """Repository for Upload lookups."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_many(self, upload_ids: Iterable[int]) -> list[Upload]:
        """Get the uploads whose ids are in ``upload_ids``.

        Args:
            upload_ids: Requested upload ids.

        Returns:
            Uploads that exist, ordered by id. Unknown ids are skipped.
        """
        ids = list(upload_ids)
        if not ids:
            return []
        result = await self.session.execute(
            select(Upload).where(Upload.id.in_(ids)).order_by(Upload.id)
        )
        return list(result.scalars().all())
