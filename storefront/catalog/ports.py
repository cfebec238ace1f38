"""Repository interfaces consumed by the catalog service.

Both the SQLAlchemy repositories and the in-memory repositories satisfy
these protocols structurally.
"""

from collections.abc import Iterable, Sequence
from typing import Protocol

from storefront.catalog.models import Product, Upload
from storefront.catalog.predicates import Predicate


class ProductStore(Protocol):
    """Product persistence operations."""

    async def list_all(self) -> Sequence[Product]: ...

    async def list_page(self, offset: int, limit: int) -> tuple[Sequence[Product], int]: ...

    async def get_by_id(self, product_id: int) -> Product | None: ...

    async def get_by_slug(self, slug: str) -> Product | None: ...

    async def find(self, predicates: Sequence[Predicate]) -> Sequence[Product]: ...

    async def find_by_category_ids(self, category_ids: Iterable[int]) -> Sequence[Product]: ...

    async def save(self, product: Product) -> Product: ...

    async def delete(self, product: Product) -> None: ...


class CategoryStore(Protocol):
    """Category lookups."""

    async def exists(self, category_id: int) -> bool: ...

    async def child_ids(self, parent_id: int) -> list[int]: ...


class BrandStore(Protocol):
    """Brand lookups."""

    async def exists(self, brand_id: int) -> bool: ...


class UploadStore(Protocol):
    """Upload lookups."""

    async def get_many(self, upload_ids: Iterable[int]) -> list[Upload]: ...
