"""In-memory catalog repositories.

Same methods as the SQLAlchemy repositories, backed by plain dicts on a
shared ``InMemoryCatalog``. Used by the test-suite and for running the
service without a database.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.catalog.models import Brand, Category, Product, Upload
from storefront.catalog.predicates import Predicate, match_all
from storefront.domain.exceptions import SlugConflictError


@dataclass
class InMemoryCatalog:
    """Tables of an in-memory catalog, keyed by id."""

    categories: dict[int, Category] = field(default_factory=dict)
    brands: dict[int, Brand] = field(default_factory=dict)
    uploads: dict[int, Upload] = field(default_factory=dict)
    products: dict[int, Product] = field(default_factory=dict)
    _next_ids: dict[str, int] = field(default_factory=dict, repr=False)

    def next_id(self, table: str) -> int:
        """Allocate the next id for a table."""
        value = self._next_ids.get(table, 0) + 1
        self._next_ids[table] = value
        return value

    def add_category(self, name: str, slug: str, parent_id: int | None = None) -> Category:
        """Insert a category and return it."""
        category = Category(id=self.next_id("categories"), name=name, slug=slug, parent_id=parent_id)
        self.categories[category.id] = category
        return category

    def add_brand(self, name: str, slug: str) -> Brand:
        """Insert a brand and return it."""
        brand = Brand(id=self.next_id("brands"), name=name, slug=slug)
        self.brands[brand.id] = brand
        return brand

    def add_upload(self, filename: str, url: str | None = None) -> Upload:
        """Insert an upload and return it."""
        upload = Upload(
            id=self.next_id("uploads"),
            filename=filename,
            url=url or f"/uploads/{filename}",
            created_at=datetime.now(timezone.utc),
        )
        self.uploads[upload.id] = upload
        return upload


class InMemoryProductRepository:
    """In-memory repository for products."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    def _ordered(self) -> list[Product]:
        return [self.catalog.products[pid] for pid in sorted(self.catalog.products)]

    async def list_all(self) -> Sequence[Product]:
        """Get every product."""
        return self._ordered()

    async def list_page(self, offset: int, limit: int) -> tuple[Sequence[Product], int]:
        """Get one page of products and the total product count."""
        products = self._ordered()
        return products[offset : offset + limit], len(products)

    async def get_by_id(self, product_id: int) -> Product | None:
        """Get product by ID."""
        return self.catalog.products.get(product_id)

    async def get_by_slug(self, slug: str) -> Product | None:
        """Get product by slug."""
        for product in self.catalog.products.values():
            if product.slug == slug:
                return product
        return None

    async def find(self, predicates: Sequence[Predicate]) -> Sequence[Product]:
        """Find products matching every predicate."""
        return [p for p in self._ordered() if match_all(predicates, p)]

    async def find_by_category_ids(self, category_ids: Iterable[int]) -> Sequence[Product]:
        """Find products belonging to any of the given categories."""
        wanted = set(category_ids)
        return [p for p in self._ordered() if p.category_id in wanted]

    async def save(self, product: Product) -> Product:
        """Insert or update a product.

        Enforces slug uniqueness the way the database constraint does and
        re-links the category and brand from their ids.

        Raises:
            SlugConflictError: If another product already uses the slug.
        """
        for other in self.catalog.products.values():
            if other is not product and other.slug == product.slug:
                raise SlugConflictError(product.slug)

        now = datetime.now(timezone.utc)
        if product.id is None:
            product.id = self.catalog.next_id("products")
            product.created_at = now
        product.updated_at = now
        if product.stock is None:
            product.stock = 0

        product.category = self.catalog.categories.get(product.category_id)
        product.brand = self.catalog.brands.get(product.brand_id)

        self.catalog.products[product.id] = product
        return product

    async def delete(self, product: Product) -> None:
        """Delete a product."""
        self.catalog.products.pop(product.id, None)


class InMemoryCategoryRepository:
    """In-memory repository for categories."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    async def exists(self, category_id: int) -> bool:
        """Check whether a category exists."""
        return category_id in self.catalog.categories

    async def child_ids(self, parent_id: int) -> list[int]:
        """Get ids of the direct children of a category."""
        return sorted(c.id for c in self.catalog.categories.values() if c.parent_id == parent_id)


class InMemoryBrandRepository:
    """In-memory repository for brands."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    async def exists(self, brand_id: int) -> bool:
        """Check whether a brand exists."""
        return brand_id in self.catalog.brands


class InMemoryUploadRepository:
    """In-memory repository for uploads."""

    def __init__(self, catalog: InMemoryCatalog) -> None:
        self.catalog = catalog

    async def get_many(self, upload_ids: Iterable[int]) -> list[Upload]:
        """Get the uploads whose ids are in ``upload_ids``."""
        wanted = set(upload_ids)
        return [self.catalog.uploads[uid] for uid in sorted(wanted) if uid in self.catalog.uploads]
