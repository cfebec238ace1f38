"""Tests for the SQLAlchemy catalog repositories.

Queries are compiled against the PostgreSQL dialect; no database is
needed.
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import IntegrityError, MissingGreenlet
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.catalog.models import Product
from storefront.catalog.predicates import Equals, Overlaps, ProductFilter, Range
from storefront.catalog.repository import (
    ProductRepository,
    UploadRepository,
    predicate_to_clause,
)
from storefront.domain.exceptions import SlugConflictError


def compile_sql(element) -> str:
    """Render a clause or statement as PostgreSQL SQL."""
    return str(element.compile(dialect=postgresql.dialect()))


@pytest.fixture
def session() -> MagicMock:
    """Create a mocked async session."""
    session = MagicMock(spec=AsyncSession)
    session.flush = AsyncMock()
    session.rollback = AsyncMock()
    session.execute = AsyncMock()
    return session


class TestPredicateCompilation:
    """Tests for predicate_to_clause."""

    def test_equals(self) -> None:
        """Equality compiles to =."""
        sql = compile_sql(predicate_to_clause(Equals("brand_id", 3)))
        assert "products.brand_id = " in sql

    def test_overlaps(self) -> None:
        """Overlap compiles to the array && operator."""
        sql = compile_sql(predicate_to_clause(Overlaps("colors", ("red", "blue"))))
        assert "products.colors && " in sql

    def test_closed_range(self) -> None:
        """Both bounds compile to BETWEEN."""
        sql = compile_sql(
            predicate_to_clause(Range("price", lower=Decimal("10"), upper=Decimal("50")))
        )
        assert "products.price BETWEEN " in sql

    def test_lower_bound_only(self) -> None:
        """Only a lower bound compiles to >=."""
        sql = compile_sql(predicate_to_clause(Range("price", lower=Decimal("10"))))
        assert "products.price >= " in sql

    def test_upper_bound_only(self) -> None:
        """Only an upper bound compiles to <=."""
        sql = compile_sql(predicate_to_clause(Range("price", upper=Decimal("50"))))
        assert "products.price <= " in sql

    def test_unknown_predicate(self) -> None:
        """Unknown predicate types are rejected."""

        class Fuzzy:
            field = "name"

        with pytest.raises(TypeError):
            predicate_to_clause(Fuzzy())  # type: ignore[arg-type]


class TestBuildFilterQuery:
    """Tests for ProductRepository.build_filter_query."""

    def test_combines_predicates_with_and(self, session: MagicMock) -> None:
        """Every predicate appears in one WHERE clause joined by AND."""
        repo = ProductRepository(session)
        predicates = ProductFilter(
            brand_id=2,
            colors=["red"],
            sizes=["m"],
            min_price=Decimal("10"),
            max_price=Decimal("50"),
        ).to_predicates()

        sql = compile_sql(repo.build_filter_query(predicates))

        assert "WHERE" in sql
        assert "products.brand_id = " in sql
        assert "products.colors && " in sql
        assert "products.sizes && " in sql
        assert "products.price BETWEEN " in sql
        assert sql.count(" AND ") >= 4

    def test_no_predicates_has_no_where(self, session: MagicMock) -> None:
        """An empty filter selects every product."""
        sql = compile_sql(ProductRepository(session).build_filter_query([]))
        assert "WHERE" not in sql


class TestSave:
    """Tests for ProductRepository.save."""

    @pytest.mark.asyncio
    async def test_slug_constraint_becomes_conflict(self, session: MagicMock) -> None:
        """A unique-slug violation at flush time is a slug conflict."""
        session.flush.side_effect = IntegrityError(
            "INSERT INTO products",
            {},
            Exception('duplicate key value violates unique constraint "uq_products_slug"'),
        )
        repo = ProductRepository(session)

        with pytest.raises(SlugConflictError) as exc_info:
            await repo.save(Product(name="Tee", slug="tee"))

        assert exc_info.value.details["slug"] == "tee"
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_integrity_errors_propagate(self, session: MagicMock) -> None:
        """Other constraint violations are not reclassified."""
        session.flush.side_effect = IntegrityError(
            "INSERT INTO products",
            {},
            Exception('insert violates foreign key constraint "products_brand_id_fkey"'),
        )
        repo = ProductRepository(session)

        with pytest.raises(IntegrityError):
            await repo.save(Product(name="Tee", slug="tee"))

    @pytest.mark.asyncio
    async def test_conflict_on_persisted_product_after_rollback(
        self, session: MagicMock
    ) -> None:
        """Updating a loaded product to a taken slug is a slug conflict.

        Rolling back expires a persistent instance; reading its attributes
        afterwards would need a lazy load, which fails outside the greenlet.
        """

        class LoadedProduct:
            id = 7
            expired = False

            @property
            def slug(self) -> str:
                if self.expired:
                    raise MissingGreenlet("greenlet_spawn has not been called")
                return "taken"

        product = LoadedProduct()

        async def expire_on_rollback() -> None:
            product.expired = True

        session.rollback.side_effect = expire_on_rollback
        session.flush.side_effect = IntegrityError(
            "UPDATE products",
            {},
            Exception('duplicate key value violates unique constraint "uq_products_slug"'),
        )

        with pytest.raises(SlugConflictError) as exc_info:
            await ProductRepository(session).save(product)  # type: ignore[arg-type]

        assert exc_info.value.details["slug"] == "taken"
        session.rollback.assert_awaited_once()


class TestUploadRepository:
    """Tests for UploadRepository."""

    @pytest.mark.asyncio
    async def test_empty_ids_skip_query(self, session: MagicMock) -> None:
        """No ids means no query."""
        assert await UploadRepository(session).get_many([]) == []
        session.execute.assert_not_awaited()
