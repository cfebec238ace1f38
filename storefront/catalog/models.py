"""SQLAlchemy models for the product catalog.

Defines Category, Brand, Upload and Product tables plus the
product-image association table.
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.infrastructure.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


product_images = Table(
    "product_images",
    Base.metadata,
    Column("product_id", Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True),
    Column("upload_id", Integer, ForeignKey("uploads.id", ondelete="CASCADE"), primary_key=True),
)


class Category(Base):
    """Product category.

    Categories form a forest through ``parent_id``; root categories
    have no parent.

    Attributes:
        id: Category identifier.
        name: Display name.
        slug: URL-safe unique identifier.
        parent_id: Parent category id (None for roots).
    """

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    parent_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Category(id={self.id}, slug={self.slug}, parent_id={self.parent_id})>"


class Brand(Base):
    """Product brand."""

    __tablename__ = "brands"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)

    def __repr__(self) -> str:
        """String representation."""
        return f"<Brand(id={self.id}, slug={self.slug})>"


class Upload(Base):
    """Stored file reference, attached to products as an image."""

    __tablename__ = "uploads"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Upload(id={self.id}, filename={self.filename})>"


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Product identifier.
        name: Product name.
        description: Product description.
        price: Unit price.
        stock: Available quantity.
        colors: Available colors.
        sizes: Available sizes.
        slug: URL-safe identifier, unique across all products.
        category_id: Owning category.
        brand_id: Product brand.
        images: Attached image uploads.
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    colors: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    sizes: Mapped[list[str]] = mapped_column(ARRAY(String(50)), nullable=False, default=list)
    slug: Mapped[str] = mapped_column(String(500), nullable=False)
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("categories.id"),
        nullable=False,
        index=True,
    )
    brand_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("brands.id"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utcnow,
        onupdate=_utcnow,
    )

    # Relationships
    category: Mapped[Category] = relationship("Category")
    brand: Mapped[Brand] = relationship("Brand")
    images: Mapped[list[Upload]] = relationship("Upload", secondary=product_images)

    __table_args__ = (
        UniqueConstraint("slug", name="uq_products_slug"),
        Index("ix_products_colors", "colors", postgresql_using="gin"),
        Index("ix_products_sizes", "sizes", postgresql_using="gin"),
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"
