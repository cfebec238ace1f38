"""Typed filter predicates for product queries.

A product filter is a list of predicates combined with AND. Each predicate
names a product attribute and can evaluate itself against an in-memory
row; the SQLAlchemy repository compiles the same predicates to SQL.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union


@dataclass(frozen=True)
class Equals:
    """Attribute equals a value."""

    field: str
    value: Any

    def matches(self, row: Any) -> bool:
        """Check the predicate against a row."""
        return getattr(row, self.field) == self.value


@dataclass(frozen=True)
class Overlaps:
    """Collection attribute shares at least one element with ``values``."""

    field: str
    values: tuple[str, ...]

    def matches(self, row: Any) -> bool:
        """Check the predicate against a row."""
        current = getattr(row, self.field) or ()
        return not set(current).isdisjoint(self.values)


@dataclass(frozen=True)
class Range:
    """Attribute lies within inclusive bounds; either bound may be open."""

    field: str
    lower: Any = None
    upper: Any = None

    def matches(self, row: Any) -> bool:
        """Check the predicate against a row."""
        current = getattr(row, self.field)
        if current is None:
            return False
        if self.lower is not None and current < self.lower:
            return False
        if self.upper is not None and current > self.upper:
            return False
        return True


Predicate = Union[Equals, Overlaps, Range]


@dataclass
class ProductFilter:
    """Filter parameters for product search.

    Attributes:
        brand_id: Filter by brand.
        colors: Match products offering any of these colors.
        sizes: Match products offering any of these sizes.
        min_price: Inclusive lower price bound.
        max_price: Inclusive upper price bound.
    """

    brand_id: int | None = None
    colors: list[str] | None = None
    sizes: list[str] | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None

    def to_predicates(self) -> list[Predicate]:
        """Build the conjunctive predicate list for this filter.

        Returns:
            Predicates for every criterion that was supplied. An empty
            list matches every product.
        """
        predicates: list[Predicate] = []

        if self.brand_id is not None:
            predicates.append(Equals("brand_id", self.brand_id))

        if self.colors:
            predicates.append(Overlaps("colors", tuple(self.colors)))

        if self.sizes:
            predicates.append(Overlaps("sizes", tuple(self.sizes)))

        if self.min_price is not None or self.max_price is not None:
            predicates.append(Range("price", lower=self.min_price, upper=self.max_price))

        return predicates


def match_all(predicates: Sequence[Predicate], row: Any) -> bool:
    """Check whether a row satisfies every predicate.

    Args:
        predicates: Predicates to evaluate.
        row: Object exposing the predicate fields as attributes.

    Returns:
        True if all predicates match.
    """
    return all(predicate.matches(row) for predicate in predicates)
